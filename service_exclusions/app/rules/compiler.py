"""
Compilation of stored exclusion rules into a RuleSet.
"""

from typing import Iterable, List, Optional

from shared.errors import InvalidRuleError
from shared.logging import get_logger
from shared.metrics import ExclusionMetrics
from .models import CompiledRule, ExclusionRule, RuleSet
from .parser import parse_rule_values
from .predicates import build_predicate


class RuleCompiler:
    """Turns stored rule rows into an immutable RuleSet."""

    def __init__(self, metrics: Optional[ExclusionMetrics] = None):
        self.logger = get_logger("exclusions.rules.compiler")
        self.metrics = metrics

    def compile_rule(self, rule: ExclusionRule) -> CompiledRule:
        """Compile a single rule row."""
        try:
            values = parse_rule_values(rule.rule_values)
            predicate = build_predicate(rule.comparator, rule.operator, values)
        except InvalidRuleError as e:
            e.details.update({"rule_id": rule.id, "field_name": rule.field_name})
            raise

        return CompiledRule(field_name=rule.field_name, predicate=predicate)

    def compile(self, rules: Iterable[ExclusionRule]) -> RuleSet:
        """
        Compile every rule row into a RuleSet.

        The whole batch fails if any row is invalid. When several rows
        target the same field the last one wins.
        """
        compiled: List[CompiledRule] = []
        seen = set()

        for rule in rules:
            try:
                compiled_rule = self.compile_rule(rule)
            except InvalidRuleError as e:
                self.logger.error("Rejecting rule set", rule_id=rule.id, field_name=rule.field_name, error=e.message)
                if self.metrics:
                    self.metrics.record_compilation(compiled=0, rejected=1)
                raise

            if compiled_rule.field_name in seen:
                self.logger.warning(
                    "Duplicate rule field, overwriting previous rule",
                    rule_id=rule.id,
                    field_name=rule.field_name
                )
            seen.add(compiled_rule.field_name)
            compiled.append(compiled_rule)

        rule_set = RuleSet.from_compiled(compiled)

        if self.metrics:
            self.metrics.record_compilation(compiled=len(compiled))

        self.logger.info("Rules compiled", rules=len(compiled), fields=len(rule_set))
        return rule_set


def compile_rules(rules: Iterable[ExclusionRule]) -> RuleSet:
    """Convenience function to compile rule rows."""
    return RuleCompiler().compile(rules)
