"""
Rule value parsing.
"""

from typing import Optional, Tuple

from shared.errors import InvalidRuleError

SEPARATOR = ","


def parse_rule_values(raw: Optional[str]) -> Tuple[str, ...]:
    """
    Split a stored ``rule_values`` string into its literal values.

    Values are split on commas and kept verbatim: ``"a, b"`` yields
    ``("a", " b")``. Trailing empty values are dropped, so ``"a,b,,"`` yields
    ``("a", "b")`` while ``"a,,b"`` keeps its interior empty value. A string
    without commas is stripped and returned as a single value.

    Raises:
        InvalidRuleError: ``raw`` is missing, blank, or has no non-empty value.
    """
    if raw is None or not raw.strip():
        raise InvalidRuleError("Rule values are empty", {"rule_values": raw})

    if SEPARATOR not in raw:
        return (raw.strip(),)

    values = raw.split(SEPARATOR)
    while values and not values[-1]:
        values.pop()

    if not any(values):
        raise InvalidRuleError("Rule values contain no value", {"rule_values": raw})
    return tuple(values)
