"""
Tests for the Exclusion Rules service.
"""

import pytest
from unittest.mock import AsyncMock, patch

from service_exclusions.app.persistence import InMemoryRuleStore, PostgreSQLRuleStore
from service_exclusions.app.service import ExclusionService
from shared.config import get_config
from shared.errors import InvalidRuleError, RuleStoreError


@pytest.fixture
def store(default_rules):
    """Create in-memory store with the reference rules."""
    return InMemoryRuleStore(default_rules)


@pytest.fixture
def service(store, metrics):
    """Create service instance."""
    return ExclusionService(config=get_config(log_level="warning"), store=store, metrics=metrics)


class TestExclusionService:
    """Test cases for ExclusionService."""

    @pytest.mark.asyncio
    async def test_start_compiles_rules(self, service):
        """Test start loads the rule set from the store."""
        await service.start()

        assert service.started is True
        assert list(service.rule_set) == ["name", "email", "internalCode", "location"]

    @pytest.mark.asyncio
    async def test_start_and_stop_store_lifecycle(self, metrics):
        """Test stores with a lifecycle are started and stopped."""
        store = AsyncMock()
        store.load_all.return_value = []
        service = ExclusionService(config=get_config(log_level="warning"), store=store, metrics=metrics)

        await service.start()
        await service.stop()

        store.start.assert_awaited_once()
        store.stop.assert_awaited_once()
        assert service.started is False

    @pytest.mark.asyncio
    async def test_is_invalid(self, service, factory):
        """Test single record checks."""
        await service.start()

        assert service.is_invalid(factory.create_person()) is False
        assert service.is_invalid(factory.create_robot(name="Robot 1234")) is True

    @pytest.mark.asyncio
    async def test_filter_valid(self, service, factory):
        """Test batch filtering, sequential and concurrent."""
        await service.start()
        records = [
            factory.create_robot(internal_code="R001a"),
            factory.create_robot(internal_code="BOT1ab"),
            factory.create_person(name="Dobberius Louis The Free Elf", location="HG"),
        ]

        assert service.filter_valid(records) == [records[0], records[2]]
        assert service.filter_valid(records, concurrent=True) == [records[0], records[2]]

    @pytest.mark.asyncio
    async def test_reload_picks_up_store_changes(self, service, store, factory):
        """Test reload rebuilds the rule set from the store."""
        await service.start()
        robot = factory.create_robot(company="Evil Corp")
        assert service.is_invalid(robot) is False

        store.add_rule(factory.create_rule("company", rule_values="Evil"))
        await service.reload()

        assert service.is_invalid(robot) is True

    @pytest.mark.asyncio
    async def test_reload_with_invalid_rule_keeps_previous(self, service, store, factory, metrics):
        """Test a bad rule leaves the previous rule set active."""
        await service.start()
        active = service.rule_set

        store.add_rule(factory.create_rule("company", rule_values=""))
        with pytest.raises(InvalidRuleError):
            await service.reload()

        assert service.rule_set is active
        assert metrics.sample("rule_reloads_total", status="success") == 1
        assert metrics.sample("rule_reloads_total", status="failed") == 1

    @pytest.mark.asyncio
    async def test_reload_with_store_failure_keeps_previous(self, service, store):
        """Test a store error leaves the previous rule set active."""
        await service.start()
        active = service.rule_set

        store.load_all = AsyncMock(side_effect=RuleStoreError("memory", "unavailable"))
        with pytest.raises(RuleStoreError):
            await service.reload()

        assert service.rule_set is active

    def test_default_store_from_config(self, metrics):
        """Test the configured store is created when none is given."""
        service = ExclusionService(config=get_config(log_level="warning", rule_store="memory"), metrics=metrics)

        assert isinstance(service.store, InMemoryRuleStore)

    @pytest.mark.asyncio
    async def test_reload_before_store_started(self, metrics):
        """Test reloading from a Postgres store that was never started."""
        service = ExclusionService(
            config=get_config(log_level="warning"),
            store=PostgreSQLRuleStore("postgres://localhost:5432/exclusions"),
            metrics=metrics
        )

        with pytest.raises(RuleStoreError):
            await service.reload()

        assert len(service.rule_set) == 0
        assert metrics.sample("rule_reloads_total", status="failed") == 1


class TestMetricsServer:
    """Test cases for the Prometheus endpoint."""

    @pytest.mark.asyncio
    async def test_metrics_server_started_on_configured_port(self, store, metrics):
        """Test start serves metrics when a port is configured."""
        service = ExclusionService(
            config=get_config(log_level="warning", metrics_port=9464),
            store=store,
            metrics=metrics
        )

        with patch("shared.metrics.start_http_server") as start_http_server:
            await service.start()
            await service.stop()
            await service.start()

        start_http_server.assert_called_once_with(9464, registry=metrics.registry)

    @pytest.mark.asyncio
    async def test_no_metrics_server_without_port(self, service):
        """Test start does not serve metrics by default."""
        with patch("shared.metrics.start_http_server") as start_http_server:
            await service.start()

        start_http_server.assert_not_called()
