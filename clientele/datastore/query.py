"""Document store query model.

Queries select documents of one kind, optionally scoped under an
ancestor key, narrowed by property filters and sorted by properties.
The constraints of the underlying store apply to every backend:

- inequality filters may target a single property only
- when a query has both an inequality filter and sort orders, the
  first sort order must be on the inequality property
"""

import operator
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Literal

from clientele.datastore.codec import normalize
from clientele.datastore.keys import Key
from clientele.errors import InvalidQueryError
from clientele.observability.logging import get_logger

logger = get_logger(__name__)

FilterOp = Literal["=", "<", "<=", ">", ">="]

_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "=": operator.eq,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}

INEQUALITY_OPS = frozenset({"<", "<=", ">", ">="})


@dataclass(frozen=True)
class PropertyFilter:
    """Comparison of a document property against a value."""

    property: str
    op: FilterOp
    value: Any

    @property
    def is_inequality(self) -> bool:
        return self.op in INEQUALITY_OPS

    def matches(self, data: dict[str, Any]) -> bool:
        """Evaluate the filter against document data.

        Documents without the property, or holding a null or a value of
        an incomparable type, never match. Naive datetimes are taken as UTC.
        """
        stored = data.get(self.property)
        if stored is None:
            return False
        try:
            return bool(_OPERATORS[self.op](normalize(stored), normalize(self.value)))
        except TypeError:
            logger.debug(
                "filter_value_incomparable",
                property=self.property,
                op=self.op,
                stored_type=type(stored).__name__,
                value_type=type(self.value).__name__,
            )
            return False


@dataclass(frozen=True)
class PropertyOrder:
    """Sort order on a document property."""

    property: str
    descending: bool = False


@dataclass
class Query:
    """Fluent query builder.

    Example:
        Query("Membership").has_ancestor(customer_key).filter(
            "supplier_id", "=", "s1"
        ).order("_metadata_created")
    """

    kind: str
    ancestor: Key | None = None
    filters: list[PropertyFilter] = field(default_factory=list)
    orders: list[PropertyOrder] = field(default_factory=list)

    def has_ancestor(self, key: Key) -> "Query":
        self.ancestor = key
        return self

    def filter(self, property: str, op: FilterOp, value: Any) -> "Query":
        if op not in _OPERATORS:
            raise InvalidQueryError(f"Unsupported filter operator: {op}")
        self.filters.append(PropertyFilter(property, op, value))
        return self

    def order(self, property: str, descending: bool = False) -> "Query":
        self.orders.append(PropertyOrder(property, descending))
        return self

    def validate(self) -> None:
        """Check the query against the store's constraints.

        Raises:
            InvalidQueryError: If the query cannot be executed
        """
        inequality_properties = {f.property for f in self.filters if f.is_inequality}
        if len(inequality_properties) > 1:
            raise InvalidQueryError(
                "Inequality filters are limited to one property, got: "
                + ", ".join(sorted(inequality_properties))
            )
        if inequality_properties and self.orders:
            (inequality_property,) = inequality_properties
            if self.orders[0].property != inequality_property:
                raise InvalidQueryError(
                    f"The first sort order must be on '{inequality_property}' "
                    "when filtering on it by inequality"
                )

    def matches(self, key: Key, data: dict[str, Any]) -> bool:
        """Whether a document satisfies kind, ancestor and filters."""
        if key.kind != self.kind:
            return False
        if self.ancestor is not None and not self.ancestor.is_ancestor_of(key):
            return False
        return all(f.matches(data) for f in self.filters)
