"""
==============================================
Comprehensive pytest suite for sql/literals.py
==============================================

Sections:
---------
1. Unit tests - Rendering per semantic type
2. Edge case tests - Quoting boundaries and null handling
3. Regression tests - Rendering table completeness

Available markers:
------------------
unit, edge_case, regression

How to Execute:
---------------
All tests:          pytest tests/tests_sql/test_literals.py -v
By category:        pytest tests/tests_sql/test_literals.py -m unit
"""

import uuid
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from models.record_types import SemanticType
from sql.literals import LITERAL_FORMATTERS, format_literal, quote_literal


def parse_sql_string_literal(literal: str) -> str:
    """Read back a standard SQL string literal ('...' with '' for a quote)."""
    assert literal.startswith("'") and literal.endswith("'")
    body = literal[1:-1]
    assert "'" not in body.replace("''", ""), f"unescaped quote in {literal!r}"
    return body.replace("''", "'")


# ===============
# 1. UNIT TESTS
# ===============

@pytest.mark.unit
def test_string_is_quoted():
    """Plain text is wrapped in single quotes."""
    assert format_literal('Ann', SemanticType.STRING) == "'Ann'"


@pytest.mark.unit
def test_string_single_quotes_are_doubled():
    """Embedded single quotes are doubled."""
    assert format_literal("O'Brien", SemanticType.STRING) == "'O''Brien'"


@pytest.mark.unit
@pytest.mark.parametrize('text', [
    "O'Brien",
    "'leading",
    "trailing'",
    "''",
    "'; DROP TABLE users; --",
    "it's Ann's",
])
def test_string_literal_reparses_to_original(text):
    """Reading the literal back with standard SQL rules yields the original text."""
    assert parse_sql_string_literal(format_literal(text, SemanticType.STRING)) == text


@pytest.mark.unit
def test_null_string_renders_empty_string_literal():
    """A null string becomes '' rather than SQL null."""
    assert format_literal(None, SemanticType.STRING) == "''"


@pytest.mark.unit
def test_guid_is_quoted_canonical_form():
    """UUIDs render in canonical hyphenated form, quoted."""
    value = uuid.UUID('12345678-1234-5678-1234-567812345678')
    assert format_literal(value, SemanticType.GUID) == "'12345678-1234-5678-1234-567812345678'"


@pytest.mark.unit
def test_datetime_format_drops_fraction():
    """Date-times render as 'YYYY-MM-DD HH:MM:SS' without fractional seconds."""
    value = datetime(2024, 1, 2, 3, 4, 5, 678901)
    assert format_literal(value, SemanticType.DATETIME) == "'2024-01-02 03:04:05'"


@pytest.mark.unit
def test_datetime_format_drops_timezone():
    """Timezone-aware values keep their wall-clock time and lose the offset."""
    value = datetime(2024, 12, 31, 23, 59, 59, tzinfo=timezone(timedelta(hours=2)))
    assert format_literal(value, SemanticType.DATETIME) == "'2024-12-31 23:59:59'"


@pytest.mark.edge_case
@pytest.mark.parametrize('text, expected', [
    ('2024-01-02', "'2024-01-02 00:00:00'"),
    ('2024-01-02T03:04:05.123', "'2024-01-02 03:04:05'"),
])
def test_datetime_format_parses_iso_strings(text, expected):
    """A date-time field holding an ISO 8601 string is parsed before rendering."""
    assert format_literal(text, SemanticType.DATETIME) == expected


@pytest.mark.edge_case
def test_datetime_format_rejects_unparseable_string():
    """Strings that are not ISO 8601 date-times raise ValueError."""
    with pytest.raises(ValueError):
        format_literal('yesterday', SemanticType.DATETIME)


@pytest.mark.unit
@pytest.mark.parametrize('value, semantic_type, expected', [
    (30, SemanticType.INTEGER, '30'),
    (-5, SemanticType.INTEGER, '-5'),
    (2 ** 40, SemanticType.INTEGER, '1099511627776'),
    (Decimal('11'), SemanticType.DECIMAL, '11'),
    (Decimal('11.50'), SemanticType.DECIMAL, '11.50'),
    (1.1, SemanticType.FLOAT, '1.1'),
    (12.0, SemanticType.FLOAT, '12.0'),
])
def test_numbers_are_unquoted(value, semantic_type, expected):
    """Numbers use their default text form, without quotes."""
    assert format_literal(value, semantic_type) == expected


@pytest.mark.unit
@pytest.mark.parametrize('semantic_type', [
    SemanticType.GUID,
    SemanticType.DATETIME,
    SemanticType.INTEGER,
    SemanticType.DECIMAL,
    SemanticType.FLOAT,
    SemanticType.OTHER,
])
def test_null_renders_bare_null_token(semantic_type):
    """Every non-string null is the bare token null."""
    assert format_literal(None, semantic_type) == 'null'


@pytest.mark.unit
def test_other_values_are_quoted_and_escaped():
    """Fallback values render their text form quoted, with quotes doubled."""
    assert format_literal(True, SemanticType.OTHER) == "'True'"
    assert format_literal(date(2024, 1, 2), SemanticType.OTHER) == "'2024-01-02'"
    assert format_literal("it's", SemanticType.OTHER) == "'it''s'"


# ====================
# 2. EDGE CASE TESTS
# ====================

@pytest.mark.edge_case
def test_only_single_quotes_are_escaped():
    """Backslashes and control characters pass through untouched."""
    assert format_literal('a\\b', SemanticType.STRING) == "'a\\b'"
    assert format_literal('line1\nline2\t', SemanticType.STRING) == "'line1\nline2\t'"
    assert format_literal('say "hi"', SemanticType.STRING) == "'say \"hi\"'"


@pytest.mark.edge_case
def test_empty_string_is_distinct_from_null_only_by_value():
    """An empty string and a null string render the same literal."""
    assert format_literal('', SemanticType.STRING) == format_literal(None, SemanticType.STRING)


@pytest.mark.edge_case
def test_string_rule_applies_to_non_str_values():
    """Values under a string field are converted to text first."""
    assert format_literal(42, SemanticType.STRING) == "'42'"


@pytest.mark.edge_case
def test_quote_literal():
    """quote_literal wraps and escapes arbitrary text."""
    assert quote_literal('') == "''"
    assert quote_literal("'") == "''''"


# =====================
# 3. REGRESSION TESTS
# =====================

@pytest.mark.regression
def test_every_semantic_type_has_a_formatter():
    """The rendering table covers the whole semantic type enum."""
    assert set(LITERAL_FORMATTERS) == set(SemanticType)
