import datetime
import enum
from decimal import Decimal
from typing import Any

import msgspec

__all__ = ("decode_json", "decode_msgpack", "encode_json", "encode_msgpack")

# msgpack extension codes for values that have no native msgpack type.
_EXT_DECIMAL = 1
_EXT_DATETIME = 2
_EXT_DATE = 3
_EXT_TIME = 4


def _type_to_string(value: Any) -> Any:  # pragma: no cover
    if isinstance(value, datetime.datetime):
        return value.isoformat()
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    try:
        return str(value)
    except Exception as exc:
        raise TypeError from exc


def _to_ext(value: Any) -> Any:
    """Tag temporal and decimal values so they decode back to the same type.

    msgspec encodes these natively as strings, which would lose their type on
    the way back, so they are swapped for extension values before encoding.
    """
    if isinstance(value, dict):
        return {key: _to_ext(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_ext(item) for item in value]
    if isinstance(value, Decimal):
        return msgspec.msgpack.Ext(_EXT_DECIMAL, str(value).encode())
    if isinstance(value, datetime.datetime):
        return msgspec.msgpack.Ext(_EXT_DATETIME, value.isoformat().encode())
    if isinstance(value, datetime.date):
        return msgspec.msgpack.Ext(_EXT_DATE, value.isoformat().encode())
    if isinstance(value, datetime.time):
        return msgspec.msgpack.Ext(_EXT_TIME, value.isoformat().encode())
    return value


def _ext_hook(code: int, data: memoryview) -> Any:
    text = bytes(data).decode()
    if code == _EXT_DECIMAL:
        return Decimal(text)
    if code == _EXT_DATETIME:
        return datetime.datetime.fromisoformat(text)
    if code == _EXT_DATE:
        return datetime.date.fromisoformat(text)
    if code == _EXT_TIME:
        return datetime.time.fromisoformat(text)
    msg = f"Unknown msgpack extension type {code}"
    raise NotImplementedError(msg)


_msgspec_json_encoder = msgspec.json.Encoder(enc_hook=_type_to_string)
_msgspec_json_decoder = msgspec.json.Decoder()
_msgspec_msgpack_encoder = msgspec.msgpack.Encoder(enc_hook=_type_to_string)
_msgspec_msgpack_decoder = msgspec.msgpack.Decoder(ext_hook=_ext_hook)


def encode_json(data: Any, *, as_bytes: bool = False) -> "str | bytes":
    """Encode data to JSON using msgspec."""
    encoded = _msgspec_json_encoder.encode(data)
    if as_bytes:
        return encoded
    return encoded.decode("utf-8")


def decode_json(data: "str | bytes", *, decode_bytes: bool = True) -> Any:
    """Decode JSON data using msgspec."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    elif not decode_bytes:
        return data
    return _msgspec_json_decoder.decode(data)


def encode_msgpack(data: Any) -> bytes:
    """Encode data to msgpack, preserving bytes, Decimal and temporal values."""
    return _msgspec_msgpack_encoder.encode(_to_ext(data))


def decode_msgpack(data: bytes) -> Any:
    """Decode msgpack data produced by :func:`encode_msgpack`."""
    return _msgspec_msgpack_decoder.decode(data)
