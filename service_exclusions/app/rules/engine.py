"""
Exclusion evaluation engine.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, List, Optional, Sequence

from shared.logging import get_logger
from shared.metrics import ExclusionMetrics
from .accessor import FieldAccessor
from .compiler import RuleCompiler
from .models import ExclusionRule, RuleSet


class ExclusionEngine:
    """
    Evaluates records against the active RuleSet.

    The RuleSet is never mutated: ``load`` compiles a new one and swaps the
    reference. Every call reads the reference once, so a reload running
    alongside an evaluation cannot expose a partially built rule map.
    """

    def __init__(
        self,
        rule_set: Optional[RuleSet] = None,
        accessor: Optional[FieldAccessor] = None,
        metrics: Optional[ExclusionMetrics] = None,
    ):
        self.logger = get_logger("exclusions.rules.engine")
        self.accessor = accessor or FieldAccessor()
        self.metrics = metrics
        self.compiler = RuleCompiler(metrics)
        self._rule_set = rule_set if rule_set is not None else RuleSet()
        self._load_lock = threading.Lock()

    @property
    def rule_set(self) -> RuleSet:
        """The active RuleSet snapshot."""
        return self._rule_set

    def load(self, rules: Iterable[ExclusionRule]) -> RuleSet:
        """Compile rule rows and publish them as the active RuleSet."""
        with self._load_lock:
            rule_set = self.compiler.compile(rules)
            self._rule_set = rule_set

        if self.metrics:
            self.metrics.set_rule_set_size(len(rule_set))
        self.logger.info("Rule set published", fields=list(rule_set))
        return rule_set

    def _is_invalid(self, rule_set: RuleSet, record: Any) -> bool:
        for field_name, predicate in rule_set.items():
            if predicate.test(self.accessor.lookup(record, field_name)):
                return True
        return False

    def _evaluate(self, rule_set: RuleSet, record: Any) -> bool:
        invalid = self._is_invalid(rule_set, record)
        if self.metrics:
            self.metrics.record_evaluation(invalid)
        return invalid

    def is_invalid(self, record: Any) -> bool:
        """Check whether a record matches any exclusion rule."""
        return self._evaluate(self._rule_set, record)

    def matching_rules(self, record: Any) -> List[str]:
        """Get the fields whose rules the record matches."""
        rule_set = self._rule_set
        return [
            field_name for field_name, predicate in rule_set.items()
            if predicate.test(self.accessor.lookup(record, field_name))
        ]

    def filter_valid(self, records: Iterable[Any]) -> List[Any]:
        """Get only the valid records, in input order."""
        rule_set = self._rule_set
        return [record for record in records if not self._evaluate(rule_set, record)]

    def filter_valid_concurrent(self, records: Sequence[Any], max_workers: int = 4) -> List[Any]:
        """Same as ``filter_valid``, evaluating records on a thread pool."""
        rule_set = self._rule_set
        records = list(records)

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            verdicts = list(executor.map(lambda record: self._evaluate(rule_set, record), records))

        return [record for record, invalid in zip(records, verdicts) if not invalid]
