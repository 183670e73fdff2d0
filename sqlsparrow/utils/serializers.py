"""Serialization utilities for sqlsparrow.

Re-exports the JSON and msgpack encoders from the core serialization module.
JSON is used for log output; msgpack is used for cached result sets because it
keeps ``bytes``, ``Decimal`` and temporal values intact.
"""

from typing import Any, Literal, overload

from sqlsparrow._serialization import decode_json, decode_msgpack, encode_json, encode_msgpack

__all__ = ("from_json", "from_msgpack", "to_json", "to_msgpack")


@overload
def to_json(data: Any, *, as_bytes: Literal[False] = ...) -> str: ...


@overload
def to_json(data: Any, *, as_bytes: Literal[True]) -> bytes: ...


def to_json(data: Any, *, as_bytes: bool = False) -> "str | bytes":
    """Encode data to JSON string or bytes.

    Args:
        data: Data to encode.
        as_bytes: Whether to return bytes instead of string.

    Returns:
        JSON string or bytes representation based on as_bytes parameter.
    """
    return encode_json(data, as_bytes=as_bytes)


def from_json(data: "str | bytes") -> Any:
    """Decode JSON string or bytes to Python object.

    Args:
        data: JSON string or bytes to decode.

    Returns:
        Decoded Python object.
    """
    return decode_json(data)


def to_msgpack(data: Any) -> bytes:
    """Encode data to msgpack bytes."""
    return encode_msgpack(data)


def from_msgpack(data: bytes) -> Any:
    """Decode msgpack bytes to a Python object."""
    return decode_msgpack(data)
