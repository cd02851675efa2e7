"""
JSON file rule store.

The file holds a list of rule rows::

    [
        {"field_name": "email", "comparator": "CONTAINS", "operator": "OR",
         "rule_values": "@exclude.me"}
    ]

The camelCase column names of the rule table (``fieldName``,
``ruleValues``) are accepted as well.
"""

import json
from pathlib import Path
from typing import List, Union

from pydantic import ValidationError

from shared.errors import RuleStoreError
from shared.logging import get_logger
from ..rules.models import ExclusionRule


class FileRuleStore:
    """Rule store reading rule rows from a JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.logger = get_logger("exclusions.persistence.file")

    async def load_all(self) -> List[ExclusionRule]:
        """Read every rule row from the file."""
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except FileNotFoundError:
            raise RuleStoreError("file", f"Rules file not found: {self.path}")
        except json.JSONDecodeError as e:
            raise RuleStoreError("file", f"Malformed rules file: {e}", {"path": str(self.path)})

        if not isinstance(raw, list):
            raise RuleStoreError("file", "Rules file must contain a list", {"path": str(self.path)})

        rules = []
        for index, row in enumerate(raw):
            try:
                rule = ExclusionRule.model_validate(row)
            except ValidationError as e:
                raise RuleStoreError("file", f"Invalid rule row {index}", {"path": str(self.path), "errors": e.errors()})
            if rule.id is None:
                rule = rule.model_copy(update={"id": index + 1})
            rules.append(rule)

        self.logger.info("Rules read from file", path=str(self.path), rules=len(rules))
        return rules
