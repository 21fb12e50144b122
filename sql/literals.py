"""
=================================
SQL literal rendering for values.
=================================

Renders single python values as inline SQL literals according to the
semantic type declared on the record field they come from.

Rendering rules:
    - STRING: quoted, embedded single quotes doubled; None renders ''
    - GUID: canonical form, quoted; None renders null
    - DATETIME: 'YYYY-MM-DD HH:MM:SS' (no timezone, no fraction); None renders null
      (ISO 8601 strings are parsed first)
    - INTEGER / DECIMAL / FLOAT: unquoted str(value); None renders null
    - OTHER: quoted str(value), single quotes doubled; None renders null

Only single quotes are escaped. Backslashes and control characters pass
through unchanged.

Example:
    >>> from models.record_types import SemanticType
    >>> from sql.literals import format_literal
    >>>
    >>> format_literal("O'Brien", SemanticType.STRING)
    "'O''Brien'"
    >>> format_literal(None, SemanticType.INTEGER)
    'null'
"""

from datetime import datetime
from typing import Any, Callable, Dict

from models.record_types import SemanticType

NULL_LITERAL = 'null'
EMPTY_STRING_LITERAL = "''"
DATETIME_FORMAT = '%Y-%m-%d %H:%M:%S'


def quote_literal(text: str) -> str:
    """Wrap text in single quotes, doubling any embedded single quote."""
    return "'" + text.replace("'", "''") + "'"


def _format_string(value: Any) -> str:
    if value is None:
        return EMPTY_STRING_LITERAL
    return quote_literal(str(value))


def _format_guid(value: Any) -> str:
    if value is None:
        return NULL_LITERAL
    return f"'{value}'"


def _format_datetime(value: Any) -> str:
    if value is None:
        return NULL_LITERAL
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    return f"'{value.strftime(DATETIME_FORMAT)}'"


def _format_number(value: Any) -> str:
    if value is None:
        return NULL_LITERAL
    return str(value)


def _format_other(value: Any) -> str:
    if value is None:
        return NULL_LITERAL
    return quote_literal(str(value))


LITERAL_FORMATTERS: Dict[SemanticType, Callable[[Any], str]] = {
    SemanticType.STRING: _format_string,
    SemanticType.GUID: _format_guid,
    SemanticType.DATETIME: _format_datetime,
    SemanticType.INTEGER: _format_number,
    SemanticType.DECIMAL: _format_number,
    SemanticType.FLOAT: _format_number,
    SemanticType.OTHER: _format_other,
}

_unhandled = set(SemanticType) - set(LITERAL_FORMATTERS)
if _unhandled:
    raise RuntimeError(f"No literal formatter for semantic types: {sorted(t.name for t in _unhandled)}")


def format_literal(value: Any, semantic_type: SemanticType) -> str:
    """
    Render a value as an inline SQL literal.

    Args:
        value: Field value (None for a null field)
        semantic_type: Declared semantic type of the field

    Returns:
        SQL literal text
    """
    return LITERAL_FORMATTERS[semantic_type](value)
