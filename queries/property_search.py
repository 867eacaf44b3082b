"""
queries/property_search.py
--------------------------
Builds the filtered property search query.

The search form submits any subset of the criteria below. Each present
criterion contributes one condition; conditions are joined with AND under a
single WHERE, and the result limit is always the last bound parameter:

    >>> plan = build_property_search({"city": "Vancouver", "minimum_rating": 4}, limit=5)
    >>> plan.params
    ['%Vancouver%', '4', 5]

Nightly costs are stored in cents, so price bounds are converted before
binding. The rating filter compares against the per-property average, which
is computed in a grouped derived table so it is already resolved when the
WHERE conditions run. Grouping happens in that base, so the closing
clauses are only ORDER BY and LIMIT.
"""

from dataclasses import dataclass, field, fields
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping, Optional, Union

from config import DEFAULT_RESULT_LIMIT, INCLUDE_UNREVIEWED_PROPERTIES
from utils.logger import get_logger

logger = get_logger(__name__)

PYFORMAT = "pyformat"   # %s, what psycopg2 expects
NUMERIC = "numeric"     # $1, $2, ...

_BASE_SQL = """SELECT *
FROM (
  SELECT properties.*, avg(property_reviews.rating) AS average_rating
  FROM properties
  {join} property_reviews ON properties.id = property_reviews.property_id
  GROUP BY properties.id
) AS properties"""


# ── PLAN ──────────────────────────────────────────────────

@dataclass(frozen=True)
class Placeholder:
    """Marks where the parameter at `position` (1-based) is bound."""
    position: int


Token = Union[str, Placeholder]


@dataclass
class QueryPlan:
    """
    A query under construction: a fixed base, the filter clauses that were
    emitted, the closing tokens, and the parameters in binding order.

    The Nth placeholder in the rendered text always refers to params[N-1].
    """
    base: str
    clauses: list[tuple[Token, ...]] = field(default_factory=list)
    tail: list[Token] = field(default_factory=list)
    params: list[Any] = field(default_factory=list)

    def bind(self, value: Any) -> Placeholder:
        """Append a parameter and return the placeholder that refers to it."""
        self.params.append(value)
        return Placeholder(len(self.params))

    def where(self, *tokens: Token) -> None:
        """Add one filter condition."""
        self.clauses.append(tokens)

    def close(self, *tokens: Token) -> None:
        """Add tokens after the filter conditions (ORDER BY, LIMIT...)."""
        self.tail.extend(tokens)

    def tokens(self) -> list[Token]:
        """Every token in rendering order, with WHERE/AND keywords inserted."""
        out: list[Token] = [self.base]
        for i, clause in enumerate(self.clauses):
            out.append("WHERE" if i == 0 else "AND")
            out.extend(clause)
        out.extend(self.tail)
        return out

    def to_sql(self, paramstyle: str = PYFORMAT) -> str:
        """
        Render the query text.

        Args:
            paramstyle: PYFORMAT renders every placeholder as ``%s``,
                NUMERIC renders ``$1``, ``$2``, ...

        Raises:
            ValueError: If placeholders would not appear in binding order,
                or the paramstyle is unknown.
        """
        if paramstyle not in (PYFORMAT, NUMERIC):
            raise ValueError(f"Unknown paramstyle: {paramstyle!r}")
        tokens = self.tokens()
        positions = [t.position for t in tokens if isinstance(t, Placeholder)]
        if positions != list(range(1, len(self.params) + 1)):
            raise ValueError(f"Placeholders out of binding order: {positions}")

        parts = []
        for t in tokens:
            if isinstance(t, Placeholder):
                parts.append("%s" if paramstyle == PYFORMAT else f"${t.position}")
            else:
                parts.append(t)
        return " ".join(parts)

    def __str__(self) -> str:
        return self.to_sql(NUMERIC)


# ── CRITERIA ──────────────────────────────────────────────

def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


@dataclass(frozen=True)
class SearchCriteria:
    """
    Optional property search filters, as submitted by the search form.

    Prices are in major currency units (dollars). A blank form field and
    None both mean "not filtered".
    """
    owner_id: Optional[int] = None
    city: Optional[str] = None
    minimum_price_per_night: Optional[Union[Decimal, float, str]] = None
    maximum_price_per_night: Optional[Union[Decimal, float, str]] = None
    minimum_rating: Optional[Union[float, str]] = None

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> "SearchCriteria":
        """Build criteria from a sparse mapping; unknown keys are ignored."""
        if not options:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{
            k: (None if _is_blank(v) else v)
            for k, v in options.items()
            if k in known
        })

    def has(self, name: str) -> bool:
        return not _is_blank(getattr(self, name))

    def is_empty(self) -> bool:
        return not any(self.has(f.name) for f in fields(self))


def to_cents(amount: Union[Decimal, float, int, str]) -> int:
    """Convert a major-unit amount to cents, rounding half up."""
    cents = Decimal(str(amount)) * 100
    return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


# ── BUILDER ───────────────────────────────────────────────

def build_property_search(
    criteria: Union[SearchCriteria, Mapping[str, Any], None] = None,
    limit: int = DEFAULT_RESULT_LIMIT,
    include_unreviewed: Optional[bool] = None,
) -> QueryPlan:
    """
    Build the property search query for the given criteria.

    Args:
        criteria: SearchCriteria or a plain mapping of the same keys.
        limit: Maximum number of properties returned.
        include_unreviewed: Keep properties with no reviews (LEFT JOIN).
            Defaults to the INCLUDE_UNREVIEWED_PROPERTIES setting.

    Returns:
        A QueryPlan; render with ``plan.to_sql()`` and bind ``plan.params``.
    """
    if not isinstance(criteria, SearchCriteria):
        criteria = SearchCriteria.from_mapping(criteria)
    if include_unreviewed is None:
        include_unreviewed = INCLUDE_UNREVIEWED_PROPERTIES

    plan = QueryPlan(base=_BASE_SQL.format(join="LEFT JOIN" if include_unreviewed else "JOIN"))

    if criteria.has("owner_id"):
        plan.where("properties.owner_id =", plan.bind(str(criteria.owner_id)))

    if criteria.has("city"):
        plan.where("properties.city ILIKE", plan.bind(f"%{criteria.city}%"))

    has_min = criteria.has("minimum_price_per_night")
    has_max = criteria.has("maximum_price_per_night")
    if has_min and has_max:
        low = plan.bind(str(to_cents(criteria.minimum_price_per_night)))
        high = plan.bind(str(to_cents(criteria.maximum_price_per_night)))
        plan.where("properties.cost_per_night BETWEEN", low, "AND", high)
    elif has_min:
        plan.where(
            "properties.cost_per_night >=",
            plan.bind(str(to_cents(criteria.minimum_price_per_night))),
        )
    elif has_max:
        plan.where(
            "properties.cost_per_night <=",
            plan.bind(str(to_cents(criteria.maximum_price_per_night))),
        )

    if criteria.has("minimum_rating"):
        plan.where("properties.average_rating >=", plan.bind(str(criteria.minimum_rating)))

    plan.close("ORDER BY properties.cost_per_night", "LIMIT", plan.bind(limit))

    logger.debug("Property search: %s %s", plan, plan.params)
    return plan
