"""
Rules engine package.

Defines the exclusion rule model and the pipeline that turns stored rule
rows into predicates and applies them to records.

Modules of interest:
- models: Rule rows, predicate variants and the RuleSet mapping.
- parser: Splits comma-separated rule values.
- predicates: Chooses the predicate for a comparator/operator pair.
- compiler: Builds a RuleSet from rule rows.
- accessor: Case-insensitive field lookup on records.
- engine: Single-record and batch evaluation.
"""

from .accessor import FieldAccessor
from .compiler import RuleCompiler, compile_rules
from .engine import ExclusionEngine
from .models import (
    Comparator, CompiledRule, ExclusionRule, Operator, PersonRecord,
    PredicateKind, RulePredicate, RuleSet
)
from .parser import parse_rule_values
from .predicates import build_predicate

__all__ = [
    "Comparator",
    "CompiledRule",
    "ExclusionEngine",
    "ExclusionRule",
    "FieldAccessor",
    "Operator",
    "PersonRecord",
    "PredicateKind",
    "RuleCompiler",
    "RulePredicate",
    "RuleSet",
    "build_predicate",
    "compile_rules",
    "parse_rule_values",
]
