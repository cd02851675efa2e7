"""
Shared fixtures and factory methods for Exclusion Rules service tests.
"""

from typing import List, Optional

import pytest
from prometheus_client import CollectorRegistry

from service_exclusions.app.rules.models import Comparator, ExclusionRule, Operator, PersonRecord
from shared.metrics import ExclusionMetrics


class TestDataFactory:
    """Factory for creating test data."""

    __test__ = False

    @staticmethod
    def create_rule(
        field_name: str,
        comparator: Comparator = Comparator.CONTAINS,
        operator: Operator = Operator.OR,
        rule_values: Optional[str] = "x",
        rule_id: Optional[int] = None,
    ) -> ExclusionRule:
        """Create a rule row."""
        return ExclusionRule(
            id=rule_id,
            field_name=field_name,
            comparator=comparator,
            operator=operator,
            rule_values=rule_values
        )

    @staticmethod
    def create_default_rules() -> List[ExclusionRule]:
        """Create the four reference rules with IDs."""
        return [
            TestDataFactory.create_rule("name", Comparator.CONTAINS, Operator.OR, "1,2,3,4,5,6,7,8,9,0", 1),
            TestDataFactory.create_rule("email", Comparator.CONTAINS, Operator.OR, "@exclude.me", 2),
            TestDataFactory.create_rule("internalCode", Comparator.CONTAINS, Operator.AND, "a,b", 3),
            TestDataFactory.create_rule("location", Comparator.EQUALS, Operator.OR, "jupiter,mars", 4),
        ]

    @staticmethod
    def create_person(
        name: str = "Daniane P. Gomes",
        email: str = "danianepg@gmail.com",
        internal_code: str = "DPG001",
        company: str = "ACME",
        location: str = "BR",
    ) -> PersonRecord:
        """Create a person record that passes the reference rules."""
        return PersonRecord(
            name=name,
            email=email,
            internal_code=internal_code,
            company=company,
            location=location
        )

    @staticmethod
    def create_robot(**overrides) -> PersonRecord:
        """Create a person record with robot defaults."""
        data = {
            "name": "Robot",
            "email": "robot@robot.com",
            "internal_code": "R001",
            "company": "ACME",
            "location": "NZ",
        }
        data.update(overrides)
        return PersonRecord(**data)


def create_test_metrics() -> ExclusionMetrics:
    """Create a metrics collector on a private registry."""
    return ExclusionMetrics("exclusions-test", registry=CollectorRegistry())


@pytest.fixture
def factory():
    """Test data factory."""
    return TestDataFactory


@pytest.fixture
def metrics():
    """Metrics collector on a private registry."""
    return create_test_metrics()


@pytest.fixture
def default_rules():
    """The four reference rules."""
    return TestDataFactory.create_default_rules()
