"""Query mini-language parser.

Turns a raw query string into a `ParsedQuery`. The grammar is intentionally
forgiving: anything that is not a well-formed filter or operator becomes a
literal search term, so `parse_query` accepts every string.

Supported syntax::

    term                 free-text term (case-insensitive substring)
    "exact phrase"       one multi-word term
    status:in-progress   metadata filter (status, priority, tag, assignee)
    created:>=2025-01-01 date filter (created, updated) with >, <, >=, <=, =
    created:a..b         inclusive date range
    NOT term, -term      exclude specs containing term
    AND                  implicit; accepted and ignored
"""

from dataclasses import dataclass
from datetime import date
from typing import Final

import pendulum

from specindex.search._models import (
    ComparisonOperator,
    FieldFilter,
    FilterField,
    ParsedQuery,
)

__all__ = ["get_search_syntax_help", "parse_query", "tokenize"]

_QUOTE = '"'
_RANGE_SEPARATOR = ".."
# Longest prefixes first so ">=" is not read as ">"
_DATE_PREFIXES: tuple[tuple[str, ComparisonOperator], ...] = (
    (">=", ComparisonOperator.GE),
    ("<=", ComparisonOperator.LE),
    (">", ComparisonOperator.GT),
    ("<", ComparisonOperator.LT),
    ("=", ComparisonOperator.EQ),
)


@dataclass(frozen=True, slots=True)
class Token:
    """A raw query token.

    Attributes:
        text: Token text. Quotes are removed from phrases but kept inside
            words such as `assignee:"Ada L"`.
        quoted: True when the whole token was a quoted phrase.
    """

    text: str
    quoted: bool = False


# -----------------------------------------------------------------------------
# Tokenizer
# -----------------------------------------------------------------------------


def tokenize(query: str) -> list[Token]:
    """Split a query into whitespace-separated tokens.

    A token starting with a quote runs to the closing quote, or to the end of
    input when the quote is unterminated. A quote inside a word (as in
    `assignee:"Ada L"`) extends the word through the closing quote.
    """
    tokens: list[Token] = []
    position = 0
    length = len(query)

    while position < length:
        char = query[position]
        if char.isspace():
            position += 1
            continue

        if char == _QUOTE:
            close = query.find(_QUOTE, position + 1)
            if close == -1:
                close = length
            tokens.append(Token(query[position + 1 : close], quoted=True))
            position = close + 1
            continue

        start = position
        while position < length and not query[position].isspace():
            if query[position] == _QUOTE:
                close = query.find(_QUOTE, position + 1)
                position = length if close == -1 else close + 1
            else:
                position += 1
        tokens.append(Token(query[start:position]))

    return tokens


# -----------------------------------------------------------------------------
# Filters
# -----------------------------------------------------------------------------


def _resolve_filter_field(name: str) -> FilterField | None:
    match name.casefold():
        case "status":
            return FilterField.STATUS
        case "priority":
            return FilterField.PRIORITY
        case "tag" | "tags":
            return FilterField.TAG
        case "assignee":
            return FilterField.ASSIGNEE
        case "created":
            return FilterField.CREATED
        case "updated":
            return FilterField.UPDATED
        case _:
            return None


def _parse_date(value: str) -> date | None:
    """Parse a date operand, returning None when it is not a calendar date."""
    if not value:
        return None
    try:
        parsed = pendulum.parse(value, tz="UTC")
    except Exception:  # noqa: BLE001
        return None
    # pendulum.parse can return DateTime, Date, Time, or Duration
    if not isinstance(parsed, pendulum.DateTime | pendulum.Date):
        return None
    return date(parsed.year, parsed.month, parsed.day)


def _parse_date_filter(
    field: FilterField, value: str, *, negated: bool
) -> FieldFilter | None:
    if _RANGE_SEPARATOR in value:
        raw_start, _, raw_end = value.partition(_RANGE_SEPARATOR)
        start = _parse_date(raw_start)
        end = _parse_date(raw_end)
        if start is None or end is None:
            return None
        return FieldFilter(
            field=field,
            operator=ComparisonOperator.RANGE,
            value=value,
            start=start,
            end=end,
            negated=negated,
        )

    operator = ComparisonOperator.EQ
    operand = value
    for prefix, prefix_operator in _DATE_PREFIXES:
        if value.startswith(prefix):
            operator = prefix_operator
            operand = value[len(prefix) :]
            break

    start = _parse_date(operand)
    if start is None:
        return None
    return FieldFilter(
        field=field,
        operator=operator,
        value=operand,
        start=start,
        negated=negated,
    )


def _parse_filter(text: str, *, negated: bool = False) -> FieldFilter | None:
    """Parse `field:value`, returning None for anything that is not a filter."""
    name, separator, raw_value = text.partition(":")
    if not separator or not name:
        return None

    field = _resolve_filter_field(name)
    if field is None:
        return None

    value = raw_value.strip(_QUOTE).strip()
    if not value:
        return None

    if field.is_date:
        return _parse_date_filter(field, value, negated=negated)
    return FieldFilter(
        field=field,
        operator=ComparisonOperator.EQ,
        value=value,
        negated=negated,
    )


# -----------------------------------------------------------------------------
# Parser
# -----------------------------------------------------------------------------


class _QueryBuilder:
    """Accumulates terms, filters and exclusions while keeping first-seen order."""

    __slots__: Final = ("_excluded", "_filters", "_terms")

    def __init__(self) -> None:
        self._terms: dict[str, str] = {}
        self._excluded: dict[str, None] = {}
        self._filters: list[FieldFilter] = []

    def add_term(self, text: str) -> None:
        display = text.strip()
        folded = display.casefold()
        if folded and folded not in self._terms:
            self._terms[folded] = display

    def add_excluded(self, text: str) -> None:
        folded = text.strip().casefold()
        if folded:
            self._excluded[folded] = None

    def add_filter(self, field_filter: FieldFilter) -> None:
        if field_filter not in self._filters:
            self._filters.append(field_filter)

    def build(self, query: str) -> ParsedQuery:
        return ParsedQuery(
            original_query=query,
            terms=tuple(self._terms),
            display_terms=tuple(self._terms.values()),
            filters=tuple(self._filters),
            excluded_terms=tuple(self._excluded),
        )


def _word_text(token: Token) -> str:
    return token.text if token.quoted else token.text.replace(_QUOTE, "")


def parse_query(query: str) -> ParsedQuery:
    """Parse a raw query string.

    Never raises: malformed filters, unknown field names and dangling
    operators all become literal terms.

    Args:
        query: The raw query string.

    Returns:
        The parsed query.

    Examples:
        >>> parsed = parse_query('status:planned "user session" API')
        >>> parsed.terms
        ('user session', 'api')
        >>> parsed.filters[0].value
        'planned'
    """
    builder = _QueryBuilder()
    pending_not: Token | None = None

    for token in tokenize(query):
        negated = pending_not is not None

        if token.quoted:
            if negated:
                builder.add_excluded(token.text)
            else:
                builder.add_term(token.text)
            pending_not = None
            continue

        keyword = token.text.upper()
        if keyword == "AND":
            continue
        if keyword == "NOT":
            if pending_not is not None:
                builder.add_term(pending_not.text)
            pending_not = token
            continue

        if not negated and token.text.startswith("-") and len(token.text) > 1:
            negated = True
            token = Token(token.text[1:])  # noqa: PLW2901

        field_filter = _parse_filter(token.text, negated=negated)
        if field_filter is not None:
            builder.add_filter(field_filter)
        elif negated:
            builder.add_excluded(_word_text(token))
        else:
            builder.add_term(_word_text(token))
        pending_not = None

    # A NOT with nothing to negate is an ordinary word
    if pending_not is not None:
        builder.add_term(pending_not.text)

    return builder.build(query)


def get_search_syntax_help() -> str:
    """Return help text describing the query syntax."""
    return """\
Search Syntax:
  term                 Simple term search (case-insensitive)
  "exact phrase"       Match an exact phrase
  term1 AND term2      Both terms must match (AND is optional)
  NOT term, -term      Exclude specs containing term

Field Filters:
  status:in-progress   Filter by status
  tag:api              Filter by tag
  priority:high        Filter by priority
  assignee:marvin      Filter by assignee
  assignee:"Ada L"     Quote values containing spaces
  NOT status:archived  Negate a filter

Date Filters:
  created:>2025-11-01             Created after date
  created:<2025-11-15             Created before date
  created:2025-11-01..2025-11-15  Created in date range (inclusive)
  updated:>=2025-11-01            Updated on or after date

Archived specs are hidden unless status:archived is given.

Examples:
  api authentication        Specs containing both terms
  tag:api status:planned    API specs that are planned
  dashboard -deprecated     Dashboard specs not mentioning deprecated"""
