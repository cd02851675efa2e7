"""
Exclusion Rules service.

Owns a rule store and an ExclusionEngine. Rules are read and compiled when
the service starts and again on every ``reload``; records are then checked
against the compiled RuleSet.
"""

from typing import Any, Iterable, List, Optional

from shared.config import ServiceConfig, get_config
from shared.errors import ExclusionsException
from shared.logging import configure_logging, get_logger, set_batch_id, clear_context
from shared.metrics import ExclusionMetrics, get_metrics_collector

from .persistence import RuleStore, create_rule_store
from .rules.engine import ExclusionEngine
from .rules.models import RuleSet


class ExclusionService:
    """Exclusion Rules service implementation."""

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        store: Optional[RuleStore] = None,
        metrics: Optional[ExclusionMetrics] = None,
    ):
        self.config = config or get_config()
        self.service_name = self.config.service_name

        # Configure logging
        configure_logging(self.service_name, self.config.log_level)
        self.logger = get_logger(f"{self.service_name}.service")

        self.metrics = metrics or get_metrics_collector(self.service_name)
        self.store = store if store is not None else create_rule_store(self.config)
        self.engine = ExclusionEngine(metrics=self.metrics)
        self.started = False
        self.metrics_served = False

    async def start(self):
        """Start the rule store and compile the initial rule set."""
        start_store = getattr(self.store, "start", None)
        if start_store is not None:
            await start_store()

        await self.reload()

        if self.config.metrics_port is not None and not self.metrics_served:
            self.metrics.start_metrics_server(self.config.metrics_port)
            self.metrics_served = True
            self.logger.info("Metrics server started", port=self.config.metrics_port)

        self.started = True
        self.logger.info("Exclusion service started", store=type(self.store).__name__)

    async def stop(self):
        """Stop the rule store."""
        stop_store = getattr(self.store, "stop", None)
        if stop_store is not None:
            await stop_store()
        self.started = False
        self.logger.info("Exclusion service stopped")

    async def reload(self) -> RuleSet:
        """
        Rebuild the rule set from the store.

        On failure the previous rule set stays active and the error is
        re-raised to the caller.
        """
        try:
            rules = await self.store.load_all()
            rule_set = self.engine.load(rules)
        except ExclusionsException as e:
            self.metrics.record_reload("failed")
            self.logger.error(
                "Rule reload failed, keeping previous rule set",
                code=e.code,
                error=e.message,
                details=e.details,
                active_fields=len(self.engine.rule_set)
            )
            raise

        self.metrics.record_reload("success")
        return rule_set

    @property
    def rule_set(self) -> RuleSet:
        return self.engine.rule_set

    def is_invalid(self, record: Any) -> bool:
        """Check a single record."""
        return self.engine.is_invalid(record)

    def filter_valid(self, records: Iterable[Any], concurrent: bool = False) -> List[Any]:
        """Filter a batch of records down to the valid ones."""
        records = list(records)
        batch_id = set_batch_id()
        try:
            if concurrent:
                valid = self.engine.filter_valid_concurrent(records, self.config.filter_max_workers)
            else:
                valid = self.engine.filter_valid(records)

            self.logger.info(
                "Batch filtered",
                batch_id=batch_id,
                records=len(records),
                valid=len(valid),
                excluded=len(records) - len(valid)
            )
            return valid
        finally:
            clear_context()
