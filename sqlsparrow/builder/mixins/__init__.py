"""SQL statement builder mixins."""

from sqlsparrow.builder.mixins._delete import DeleteMixin
from sqlsparrow.builder.mixins._group_by import GroupByClauseMixin
from sqlsparrow.builder.mixins._insert import InsertMixin
from sqlsparrow.builder.mixins._join import JoinClauseMixin
from sqlsparrow.builder.mixins._limit_offset import LimitOffsetClauseMixin
from sqlsparrow.builder.mixins._order_by import OrderByClauseMixin
from sqlsparrow.builder.mixins._select import SelectMixin
from sqlsparrow.builder.mixins._update import UpdateMixin
from sqlsparrow.builder.mixins._where import HavingClauseMixin, WhereClauseMixin

__all__ = (
    "DeleteMixin",
    "GroupByClauseMixin",
    "HavingClauseMixin",
    "InsertMixin",
    "JoinClauseMixin",
    "LimitOffsetClauseMixin",
    "OrderByClauseMixin",
    "SelectMixin",
    "UpdateMixin",
    "WhereClauseMixin",
)
