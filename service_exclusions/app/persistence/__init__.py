"""
Rule stores.

A rule store supplies the full set of exclusion rule rows on demand via
``load_all``. How rows are kept is up to the store: in memory, in a JSON
file, or in PostgreSQL.
"""

from typing import List, Protocol

from shared.config import ServiceConfig
from shared.errors import RuleStoreError
from ..rules.models import ExclusionRule
from .defaults import DEFAULT_RULES
from .file import FileRuleStore
from .memory import InMemoryRuleStore
from .postgres import PostgreSQLRuleStore


class RuleStore(Protocol):
    async def load_all(self) -> List[ExclusionRule]:
        ...


def create_rule_store(config: ServiceConfig) -> RuleStore:
    """Create the rule store selected by configuration."""
    if config.rule_store == "postgres":
        return PostgreSQLRuleStore(
            config.postgres_dsn,
            min_size=config.postgres_min_pool_size,
            max_size=config.postgres_max_pool_size
        )

    if config.rule_store == "file":
        if not config.rules_file:
            raise RuleStoreError("file", "rules_file is not configured")
        return FileRuleStore(config.rules_file)

    return InMemoryRuleStore(DEFAULT_RULES)


__all__ = [
    "DEFAULT_RULES",
    "FileRuleStore",
    "InMemoryRuleStore",
    "PostgreSQLRuleStore",
    "RuleStore",
    "create_rule_store",
]
