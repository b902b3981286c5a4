"""
Filter normalization and predicate composition for movie searches.

Raw request parameters become a typed ``FilterSpec``; the spec becomes a
list of tagged ``Condition`` objects that know nothing about SQL; the
conditions are finally compiled into SQLAlchemy clauses and AND-ed by the
caller.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple

from sqlalchemy import String, literal, or_
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement

from .errors import InvalidFilterError
from .models import CastMember, Genre, Movie

ALL = "all"
SORT_FIELDS = ("title", "year", "rating")
SORT_ORDERS = ("asc", "desc")
DEFAULT_SORT_BY = "rating"
DEFAULT_SORT_ORDER = "desc"

# Fields a free-text query is matched against
TEXT_SEARCH_FIELDS = ("title", "director", "cast")


class ConditionKind(str, Enum):
    TEXT_MATCH = "text_match"
    EQUALS = "equals"
    RANGE = "range"


@dataclass(frozen=True)
class Condition:
    """
    One AND-ed search constraint.

    TEXT_MATCH is satisfied when ``value`` is a case-insensitive substring
    of any of ``fields``. EQUALS and RANGE apply to a single field; for
    RANGE ``value`` and ``upper`` are inclusive bounds, either may be None.
    """

    kind: ConditionKind
    fields: Tuple[str, ...]
    value: Any = None
    upper: Any = None


@dataclass(frozen=True)
class FilterSpec:
    query: str = ""
    genre: Optional[str] = None
    year: Optional[int] = None
    year_from: Optional[int] = None
    year_to: Optional[int] = None
    sort_by: str = DEFAULT_SORT_BY
    sort_order: str = DEFAULT_SORT_ORDER


def _is_unset(value: Optional[str]) -> bool:
    return value is None or value.strip() == "" or value.strip() == ALL


def _parse_year(year: Optional[str]) -> Optional[int]:
    if _is_unset(year):
        return None
    try:
        return int(year.strip())
    except ValueError:
        raise InvalidFilterError(f"Invalid year filter: {year!r}") from None


def normalize_filters(
    query: Optional[str] = None,
    genre: Optional[str] = None,
    year: Optional[str] = None,
    year_from: Optional[int] = None,
    year_to: Optional[int] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
) -> FilterSpec:
    """Apply defaults and sentinels to raw parameters, rejecting bad values."""
    sort_by = sort_by or DEFAULT_SORT_BY
    if sort_by not in SORT_FIELDS:
        raise InvalidFilterError(
            f"Invalid sortBy {sort_by!r}; expected one of {', '.join(SORT_FIELDS)}"
        )

    sort_order = sort_order or DEFAULT_SORT_ORDER
    if sort_order not in SORT_ORDERS:
        raise InvalidFilterError(
            f"Invalid sortOrder {sort_order!r}; expected one of {', '.join(SORT_ORDERS)}"
        )

    if year_from is not None and year_to is not None and year_from > year_to:
        raise InvalidFilterError(f"yearFrom ({year_from}) is after yearTo ({year_to})")

    return FilterSpec(
        query=(query or "").strip(),
        genre=None if _is_unset(genre) else genre,
        year=_parse_year(year),
        year_from=year_from,
        year_to=year_to,
        sort_by=sort_by,
        sort_order=sort_order,
    )


def build_conditions(spec: FilterSpec) -> List[Condition]:
    conditions: List[Condition] = []

    if spec.query:
        conditions.append(Condition(ConditionKind.TEXT_MATCH, TEXT_SEARCH_FIELDS, spec.query))

    if spec.genre is not None:
        conditions.append(Condition(ConditionKind.EQUALS, ("genre",), spec.genre))

    if spec.year is not None:
        conditions.append(Condition(ConditionKind.EQUALS, ("year",), spec.year))

    if spec.year_from is not None or spec.year_to is not None:
        conditions.append(
            Condition(ConditionKind.RANGE, ("year",), spec.year_from, spec.year_to)
        )

    return conditions


# ---------------------------------------------------------------------------
# SQLAlchemy translation
# ---------------------------------------------------------------------------

_SCALAR_COLUMNS = {
    "id": Movie.id,
    "title": Movie.title,
    "director": Movie.director,
    "year": Movie.year,
    "rating": Movie.rating,
}

LIKE_ESCAPE = "\\"


class casefold(FunctionElement):
    """
    Unicode case fold. Renders lower() by default; SQLite's lower() only
    folds ASCII, so there it calls the casefold() function registered by
    ``database.build_engine``.
    """

    type = String()
    name = "casefold"
    inherit_cache = True


@compiles(casefold)
def _compile_casefold(element, compiler, **kw):
    return "lower(%s)" % compiler.process(element.clauses, **kw)


@compiles(casefold, "sqlite")
def _compile_casefold_sqlite(element, compiler, **kw):
    return "casefold(%s)" % compiler.process(element.clauses, **kw)


def like_pattern(text: str) -> str:
    """Wrap ``text`` for a substring LIKE, matching % and _ literally."""
    escaped = (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _column(field: str):
    try:
        return _SCALAR_COLUMNS[field]
    except KeyError:
        raise ValueError(f"Unknown movie field: {field}") from None


def _folded_like(column, pattern: str):
    return casefold(column).like(casefold(literal(pattern, String)), escape=LIKE_ESCAPE)


def _text_match(field: str, pattern: str):
    if field == "cast":
        return Movie.cast.any(_folded_like(CastMember.actor_name, pattern))
    return _folded_like(_column(field), pattern)


def _equals(field: str, value: Any):
    if field == "genre":
        return Movie.genres.any(Genre.name == value)
    return _column(field) == value


def _in_range(field: str, lower: Any, upper: Any):
    column = _column(field)
    if lower is not None and upper is not None:
        return column.between(lower, upper)
    if lower is not None:
        return column >= lower
    return column <= upper


def to_clause(condition: Condition):
    # Genre and cast become EXISTS sub-selects so that matching one linked
    # row never drops the movie's other genre/cast rows from aggregation.
    if condition.kind is ConditionKind.TEXT_MATCH:
        pattern = like_pattern(condition.value)
        return or_(*(_text_match(field, pattern) for field in condition.fields))

    (field,) = condition.fields
    if condition.kind is ConditionKind.EQUALS:
        return _equals(field, condition.value)
    return _in_range(field, condition.value, condition.upper)


def compile_conditions(conditions: List[Condition]) -> list:
    return [to_clause(condition) for condition in conditions]
