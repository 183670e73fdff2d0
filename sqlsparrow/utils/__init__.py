"""Utility modules for sqlsparrow."""

from sqlsparrow.utils import logging, module_loader, serializers, type_guards

__all__ = ("logging", "module_loader", "serializers", "type_guards")
