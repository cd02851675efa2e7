"""
Predicate selection for compiled exclusion rules.
"""

from typing import Sequence

from shared.errors import InvalidRuleError
from shared.logging import get_logger
from .models import Comparator, Operator, PredicateKind, RulePredicate

logger = get_logger("exclusions.rules.predicates")


def select_kind(comparator: Comparator, operator: Operator) -> PredicateKind:
    """Pick the predicate variant for a comparator/operator pair."""
    if comparator == Comparator.EQUALS and operator == Operator.OR:
        return PredicateKind.EQUALS_ANY

    if operator == Operator.OR:
        return PredicateKind.CONTAINS_ANY

    # EQUALS + AND has no variant of its own and is evaluated as CONTAINS + AND
    if comparator == Comparator.EQUALS:
        logger.debug("EQUALS with AND evaluated as CONTAINS with AND")
    return PredicateKind.CONTAINS_ALL


def build_predicate(comparator: Comparator, operator: Operator, values: Sequence[str]) -> RulePredicate:
    """Build the predicate for a rule's parsed values."""
    if not values:
        raise InvalidRuleError("Predicate requires at least one value")

    return RulePredicate(kind=select_kind(comparator, operator), values=tuple(values))
