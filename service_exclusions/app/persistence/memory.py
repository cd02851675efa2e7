"""
In-memory rule store.
"""

import itertools
from typing import Dict, Iterable, List, Optional

from shared.logging import get_logger
from ..rules.models import ExclusionRule


class InMemoryRuleStore:
    """Rule store holding rows in insertion order."""

    def __init__(self, rules: Optional[Iterable[ExclusionRule]] = None):
        self.logger = get_logger("exclusions.persistence.memory")
        self._ids = itertools.count(1)
        self._rules: Dict[object, ExclusionRule] = {}
        for rule in rules or []:
            self.add_rule(rule)

    def add_rule(self, rule: ExclusionRule) -> ExclusionRule:
        """Add a rule, assigning an ID when it has none."""
        if rule.id is None:
            rule = rule.model_copy(update={"id": next(self._ids)})
        self._rules[rule.id] = rule
        self.logger.debug("Rule added", rule_id=rule.id, field_name=rule.field_name)
        return rule

    def remove_rule(self, rule_id) -> bool:
        """Remove a rule by ID."""
        if self._rules.pop(rule_id, None) is None:
            return False
        self.logger.debug("Rule removed", rule_id=rule_id)
        return True

    def replace_all(self, rules: Iterable[ExclusionRule]):
        """Replace every stored rule."""
        self._rules = {}
        for rule in rules:
            self.add_rule(rule)

    async def load_all(self) -> List[ExclusionRule]:
        return list(self._rules.values())
