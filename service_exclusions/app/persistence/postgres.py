"""
PostgreSQL rule store for the Exclusion Rules service.
"""

from typing import Any, Dict, List, Optional, Sequence

import asyncpg

from shared.errors import RuleStoreError
from shared.logging import get_logger
from ..rules.models import ExclusionRule
from .defaults import DEFAULT_RULES


class PostgreSQLRuleStore:
    """PostgreSQL rule store backed by an asyncpg pool."""

    def __init__(self, dsn: str, min_size: int = 1, max_size: int = 5):
        self.dsn = dsn
        self.min_size = min_size
        self.max_size = max_size
        self.logger = get_logger("exclusions.persistence.postgres")
        self.pool: Optional[asyncpg.Pool] = None

    async def start(self):
        """Start the rule store."""
        try:
            self.pool = await asyncpg.create_pool(
                self.dsn,
                min_size=self.min_size,
                max_size=self.max_size,
                command_timeout=30
            )

            # Create tables if they don't exist
            await self._create_tables()

            self.logger.info("PostgreSQL rule store started")

        except (OSError, asyncpg.PostgresError) as e:
            self.logger.error("Failed to start PostgreSQL rule store", error=str(e))
            raise RuleStoreError("postgres", str(e))

    async def stop(self):
        """Stop the rule store."""
        if self.pool:
            await self.pool.close()
            self.pool = None
            self.logger.info("PostgreSQL rule store stopped")

    def _acquire(self):
        """Acquire a pooled connection; the store must be started."""
        if self.pool is None:
            raise RuleStoreError("postgres", "Rule store is not started")
        return self.pool.acquire()

    async def _create_tables(self):
        """Create database tables."""
        async with self._acquire() as conn:
            await conn.execute("""
                CREATE TABLE IF NOT EXISTS exclusion_rule (
                    id BIGSERIAL PRIMARY KEY,
                    field_name VARCHAR(255) NOT NULL,
                    comparator VARCHAR(20) NOT NULL,
                    operator VARCHAR(20) NOT NULL,
                    rule_values TEXT
                );
            """)

    async def load_all(self) -> List[ExclusionRule]:
        """Load all rules from the database."""
        try:
            async with self._acquire() as conn:
                rows = await conn.fetch("""
                    SELECT id, field_name, comparator, operator, rule_values
                    FROM exclusion_rule ORDER BY id ASC
                """)

        except (OSError, asyncpg.PostgresError) as e:
            self.logger.error("Error loading all rules", error=str(e))
            raise RuleStoreError("postgres", str(e))

        return [self._row_to_rule(row) for row in rows]

    async def save_rule(self, rule: ExclusionRule) -> Optional[int]:
        """Insert a rule, returning its generated ID."""
        try:
            async with self._acquire() as conn:
                rule_id = await conn.fetchval("""
                    INSERT INTO exclusion_rule (field_name, comparator, operator, rule_values)
                    VALUES ($1, $2, $3, $4)
                    RETURNING id
                """,
                    rule.field_name, rule.comparator.value, rule.operator.value, rule.rule_values
                )

                self.logger.info("Rule saved", rule_id=rule_id, field_name=rule.field_name)
                return rule_id

        except (OSError, asyncpg.PostgresError) as e:
            self.logger.error("Error saving rule", field_name=rule.field_name, error=str(e))
            return None

    async def seed_default_rules(self, rules: Sequence[ExclusionRule] = DEFAULT_RULES) -> int:
        """
        Insert the example rules when the table is empty.

        Returns the number of rows inserted, 0 when the table already held
        rules. Raises RuleStoreError when some rows could not be inserted;
        rows that were inserted are left in place.
        """
        if await self.get_rule_count() > 0:
            return 0

        inserted = 0
        for rule in rules:
            if await self.save_rule(rule) is not None:
                inserted += 1

        if inserted < len(rules):
            self.logger.error("Rule seeding incomplete", inserted=inserted, expected=len(rules))
            raise RuleStoreError(
                "postgres",
                "Rule seeding incomplete",
                {"inserted": inserted, "expected": len(rules)}
            )

        self.logger.info("Default rules seeded", inserted=inserted)
        return inserted

    async def delete_rule(self, rule_id: int) -> bool:
        """Delete a rule from the database."""
        try:
            async with self._acquire() as conn:
                result = await conn.execute("""
                    DELETE FROM exclusion_rule WHERE id = $1
                """, rule_id)

                if result == "DELETE 1":
                    self.logger.info("Rule deleted", rule_id=rule_id)
                    return True
                else:
                    self.logger.warning("Rule not found for deletion", rule_id=rule_id)
                    return False

        except (OSError, asyncpg.PostgresError) as e:
            self.logger.error("Error deleting rule", rule_id=rule_id, error=str(e))
            return False

    async def get_rule_count(self) -> int:
        """Get total number of rules."""
        async with self._acquire() as conn:
            count = await conn.fetchval("SELECT COUNT(*) FROM exclusion_rule")
            return count or 0

    def _row_to_rule(self, row) -> ExclusionRule:
        """Convert database row to ExclusionRule object."""
        data: Dict[str, Any] = dict(row)
        return ExclusionRule(
            id=data["id"],
            field_name=data["field_name"],
            comparator=data["comparator"],
            operator=data["operator"],
            rule_values=data["rule_values"]
        )

    async def health_check(self) -> bool:
        """Check database health."""
        if self.pool is None:
            return False
        try:
            async with self._acquire() as conn:
                await conn.fetchval("SELECT 1")
                return True
        except (OSError, asyncpg.PostgresError):
            return False
