"""Categories - Closed tag set for trace nodes and line vertices.

This module maps a trace node's (kind, subtype) pair onto a Category.
Trace producers disagree on two details, so the mapping is expressed as
versioned ClassificationTables:
- v1: keeps InternalAssumption, folds postconditions into ExplicitAssertion
- v2: folds Internal into ImplicitAssumption, splits postconditions out
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class NodeKind(Enum):
    """Kinds of trace nodes emitted by the verifier."""

    ASSUMPTION = "Assumption"
    ASSERTION = "Assertion"
    INFEASIBLE = "Infeasible"
    OTHER = "Other"

    @classmethod
    def parse(cls, raw: str) -> NodeKind:
        """Map a raw kind string to a NodeKind (unknown kinds -> OTHER)."""
        try:
            return cls(raw.strip())
        except ValueError:
            return cls.OTHER


class Category(Enum):
    """Category of a trace node, unioned per source line."""

    EXPLICIT_ASSUMPTION = "ExplicitAssumption"
    IMPLICIT_ASSUMPTION = "ImplicitAssumption"
    INTERNAL_ASSUMPTION = "InternalAssumption"
    EXPLICIT_ASSERTION = "ExplicitAssertion"
    EXPLICIT_ASSERTION_POSTCONDITION = "ExplicitAssertionPostcondition"
    IMPLICIT_ASSERTION = "ImplicitAssertion"
    INFEASIBLE = "Infeasible"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, raw: str) -> Category:
        """Parse a category name.

        Raises:
            ValueError: If ``raw`` names no category.
        """
        try:
            return cls(raw.strip())
        except ValueError:
            valid = ", ".join(c.value for c in cls)
            raise ValueError(f"Unknown category '{raw}'. Must be one of: {valid}") from None


ALL_CATEGORIES: frozenset[Category] = frozenset(Category)

POSTCONDITION_SUBTYPES = frozenset({"ImplicitPostcondition", "ExplicitPostcondition"})

# Toggles offered by the filter panel and the categories each one governs
FILTER_GROUPS: dict[Category, frozenset[Category]] = {
    Category.EXPLICIT_ASSUMPTION: frozenset({Category.EXPLICIT_ASSUMPTION}),
    Category.IMPLICIT_ASSUMPTION: frozenset(
        {Category.IMPLICIT_ASSUMPTION, Category.INTERNAL_ASSUMPTION}
    ),
    Category.EXPLICIT_ASSERTION: frozenset(
        {Category.EXPLICIT_ASSERTION, Category.EXPLICIT_ASSERTION_POSTCONDITION}
    ),
    Category.IMPLICIT_ASSERTION: frozenset({Category.IMPLICIT_ASSERTION}),
}


@dataclass(frozen=True)
class ClassificationTable:
    """One trace producer's (kind, subtype) -> Category mapping.

    Attributes:
        name: Version label ("v1", "v2").
        internal_assumptions: Whether subtype ``Internal`` gets its own category.
        split_postconditions: Whether postcondition assertions get their own
            category instead of counting as ExplicitAssertion.
    """

    name: str
    internal_assumptions: bool
    split_postconditions: bool

    def classify(self, kind: NodeKind, subtype: str) -> Category:
        """Return the category for a trace node."""
        subtype = subtype.strip()
        if kind is NodeKind.ASSUMPTION:
            if subtype == "Explicit":
                return Category.EXPLICIT_ASSUMPTION
            if subtype == "Internal" and self.internal_assumptions:
                return Category.INTERNAL_ASSUMPTION
            # PathCondition, LoopInvariant, Implicit, ...
            return Category.IMPLICIT_ASSUMPTION
        if kind is NodeKind.ASSERTION:
            if subtype == "Explicit":
                return Category.EXPLICIT_ASSERTION
            if subtype in POSTCONDITION_SUBTYPES:
                if self.split_postconditions:
                    return Category.EXPLICIT_ASSERTION_POSTCONDITION
                return Category.EXPLICIT_ASSERTION
            return Category.IMPLICIT_ASSERTION
        if kind is NodeKind.INFEASIBLE:
            return Category.INFEASIBLE
        return Category.UNKNOWN


V1_TABLE = ClassificationTable(name="v1", internal_assumptions=True, split_postconditions=False)
V2_TABLE = ClassificationTable(name="v2", internal_assumptions=False, split_postconditions=True)

CANONICAL_TABLE = V2_TABLE


def classify(kind: NodeKind | str, subtype: str, table: ClassificationTable = CANONICAL_TABLE) -> Category:
    """Classify a trace node by kind and subtype.

    Args:
        kind: NodeKind or raw kind string.
        subtype: Raw subtype string (Explicit, Implicit, ...).
        table: Classification table of the trace producer.

    Returns:
        The node's Category (Unknown when no rule matches).
    """
    if isinstance(kind, str):
        kind = NodeKind.parse(kind)
    return table.classify(kind, subtype)


def expand_filter_groups(toggles: Iterable[Category]) -> frozenset[Category]:
    """Expand filter-panel toggles into the categories they enable.

    Categories without a toggle (Infeasible, Unknown) are always enabled.

    Args:
        toggles: Enabled filter-panel toggles.

    Returns:
        The full set of enabled categories.
    """
    enabled = set(ALL_CATEGORIES)
    for toggle, governed in FILTER_GROUPS.items():
        if toggle not in toggles:
            enabled -= governed
    return frozenset(enabled)


def parse_categories(names: Iterable[str]) -> frozenset[Category]:
    """Parse category names, raising ValueError on the first unknown one."""
    return frozenset(Category.parse(name) for name in names)


__all__ = [
    "ALL_CATEGORIES",
    "CANONICAL_TABLE",
    "Category",
    "ClassificationTable",
    "FILTER_GROUPS",
    "NodeKind",
    "V1_TABLE",
    "V2_TABLE",
    "classify",
    "expand_filter_groups",
    "parse_categories",
]
