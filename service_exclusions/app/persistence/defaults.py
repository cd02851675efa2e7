"""
Example exclusion rules seeded into empty rule stores.
"""

from ..rules.models import Comparator, ExclusionRule, Operator

DEFAULT_RULES = [
    ExclusionRule(field_name="name", comparator=Comparator.CONTAINS, operator=Operator.OR,
                  rule_values="1,2,3,4,5,6,7,8,9,0"),
    ExclusionRule(field_name="email", comparator=Comparator.CONTAINS, operator=Operator.OR,
                  rule_values="@exclude.me"),
    ExclusionRule(field_name="internalCode", comparator=Comparator.CONTAINS, operator=Operator.AND,
                  rule_values="a,b"),
    ExclusionRule(field_name="location", comparator=Comparator.EQUALS, operator=Operator.OR,
                  rule_values="jupiter,mars"),
]
