"""Type-directed extraction of the output field of a matched record.

Record values are dynamically typed. Supported kinds are copied through as
their natural Python value; unsupported kinds are silently omitted from the
emitted match. Classification never raises.
"""

from __future__ import annotations
import copy
import datetime
import decimal
import re
import uuid
from collections.abc import Mapping
from enum import Enum
from typing import Any, Tuple


class ValueKind(str, Enum):
    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    DOCUMENT = "document"
    ARRAY = "array"
    IDENTIFIER = "identifier"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    # Omitted kinds
    BINARY = "binary"
    NULL = "null"
    UNDEFINED = "undefined"
    REGEX = "regex"
    CODE = "code"
    UNSUPPORTED = "unsupported"


EMITTED_KINDS = frozenset({
    ValueKind.INTEGER,
    ValueKind.FLOAT,
    ValueKind.TEXT,
    ValueKind.DOCUMENT,
    ValueKind.ARRAY,
    ValueKind.IDENTIFIER,
    ValueKind.BOOLEAN,
    ValueKind.DATETIME,
})

_UNDEFINED = object()


def classify_value(value: Any) -> ValueKind:
    """Map a record value onto the closed set of kinds."""
    if value is _UNDEFINED:
        return ValueKind.UNDEFINED
    if value is None:
        return ValueKind.NULL
    # bool is an int subclass; test it first
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, (float, decimal.Decimal)):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, (bytes, bytearray, memoryview)):
        return ValueKind.BINARY
    if isinstance(value, Mapping):
        return ValueKind.DOCUMENT
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, uuid.UUID):
        return ValueKind.IDENTIFIER
    if isinstance(value, (datetime.datetime, datetime.date)):
        return ValueKind.DATETIME
    if isinstance(value, re.Pattern):
        return ValueKind.REGEX
    if callable(value):
        return ValueKind.CODE
    return ValueKind.UNSUPPORTED


def extract_output_value(record: Mapping, field: str) -> Tuple[bool, Any]:
    """Extract ``record[field]`` for emission.

    Returns:
        ``(True, value)`` for supported kinds (documents and arrays are deep
        copies), ``(False, None)`` when the value is absent or unsupported
    """
    try:
        value = record[field]
    except (KeyError, IndexError, TypeError):
        value = _UNDEFINED
    kind = classify_value(value)
    if kind not in EMITTED_KINDS:
        return False, None
    if kind is ValueKind.DOCUMENT:
        return True, copy.deepcopy(dict(value))
    if kind is ValueKind.ARRAY:
        return True, copy.deepcopy(list(value))
    return True, value


__all__ = ["ValueKind", "EMITTED_KINDS", "classify_value", "extract_output_value"]
