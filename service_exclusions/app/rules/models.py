"""
Rule data models for the Exclusion Rules service.
"""

from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple, Union
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Operator(str, Enum):
    """How the values of a rule combine."""
    AND = "AND"
    OR = "OR"


class Comparator(str, Enum):
    """How a field value is compared with each rule value."""
    EQUALS = "EQUALS"
    CONTAINS = "CONTAINS"


class PredicateKind(str, Enum):
    """Compiled predicate variants."""
    EQUALS_ANY = "equals_any"
    CONTAINS_ANY = "contains_any"
    CONTAINS_ALL = "contains_all"


class ExclusionRule(BaseModel):
    """
    Persisted exclusion rule row.

    ``rule_values`` holds the disallowed values separated by commas, e.g.
    ``field_name="location", comparator=EQUALS, operator=OR,
    rule_values="jupiter,mars"`` marks every record located on jupiter or
    mars as invalid.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[Union[int, str]] = Field(None, description="Rule ID")
    field_name: str = Field(..., alias="fieldName", description="Record field the rule applies to")
    operator: Operator = Field(..., description="AND or OR over rule_values")
    comparator: Comparator = Field(..., description="EQUALS or CONTAINS")
    rule_values: Optional[str] = Field(None, alias="ruleValues", description="Comma-separated disallowed values")

    @field_validator("operator", "comparator", mode="before")
    @classmethod
    def _upper_enum(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value


@dataclass(frozen=True)
class RulePredicate:
    """Predicate over a field's string value."""
    kind: PredicateKind
    values: Tuple[str, ...]

    def test(self, value: str) -> bool:
        if self.kind is PredicateKind.EQUALS_ANY:
            return any(value == v for v in self.values)
        if self.kind is PredicateKind.CONTAINS_ANY:
            return any(v in value for v in self.values)
        return all(v in value for v in self.values)

    __call__ = test


@dataclass(frozen=True)
class CompiledRule:
    """A field name paired with its compiled predicate."""
    field_name: str
    predicate: RulePredicate


class RuleSet(Mapping[str, RulePredicate]):
    """
    Immutable mapping of field name to predicate.

    Iteration follows insertion order. A field name compiled twice keeps
    the position of its first occurrence and the predicate of its last.
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: Optional[Mapping[str, RulePredicate]] = None):
        self._rules = MappingProxyType(dict(rules or {}))

    @classmethod
    def from_compiled(cls, compiled) -> "RuleSet":
        rules: Dict[str, RulePredicate] = {}
        for rule in compiled:
            rules[rule.field_name] = rule.predicate
        return cls(rules)

    def __getitem__(self, field_name: str) -> RulePredicate:
        return self._rules[field_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleSet({dict(self._rules)!r})"


class PersonRecord(BaseModel):
    """Person data received from an upstream API."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    internal_code: Optional[str] = Field(None, alias="internalCode")
    email: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
