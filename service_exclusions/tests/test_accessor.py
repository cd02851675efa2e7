"""
Unit tests for FieldAccessor.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional

import pytest

from service_exclusions.app.rules.accessor import AccessorTable, FieldAccessor
from service_exclusions.app.rules.models import PersonRecord
from shared.errors import UnknownFieldError


@dataclass
class Device:
    serial: str
    owner: Optional[str] = None
    active: bool = True


class Tier(str, Enum):
    GOLD = "gold"


class Account(NamedTuple):
    login: str
    tier: Tier


class Legacy:
    def __init__(self, code):
        self.code = code


class TestFieldAccessor:
    """Test cases for FieldAccessor."""

    @pytest.fixture
    def accessor(self):
        """Create FieldAccessor instance."""
        return FieldAccessor()

    def test_pydantic_record_case_insensitive(self, accessor):
        """Test field names match regardless of case."""
        person = PersonRecord(name="Robot 1", location="NZ")

        assert accessor.lookup(person, "name") == "Robot 1"
        assert accessor.lookup(person, "NAME") == "Robot 1"
        assert accessor.lookup(person, "Location") == "NZ"

    def test_pydantic_alias(self, accessor):
        """Test camelCase aliases resolve to the declared field."""
        person = PersonRecord(internal_code="BOT1ab")

        assert accessor.lookup(person, "internalCode") == "BOT1ab"
        assert accessor.lookup(person, "internal_code") == "BOT1ab"

    def test_none_becomes_null(self, accessor):
        """Test missing values read as the string 'null'."""
        assert accessor.lookup(PersonRecord(), "email") == "null"

    def test_dataclass_record(self, accessor):
        """Test dataclass fields and value stringification."""
        device = Device(serial="SN-1")

        assert accessor.lookup(device, "Serial") == "SN-1"
        assert accessor.lookup(device, "owner") == "null"
        assert accessor.lookup(device, "active") == "true"

    def test_named_tuple_record(self, accessor):
        """Test named tuple fields and enum values."""
        account = Account(login="bob", tier=Tier.GOLD)

        assert accessor.lookup(account, "LOGIN") == "bob"
        assert accessor.lookup(account, "tier") == "gold"

    def test_mapping_record(self, accessor):
        """Test mapping keys match case-insensitively."""
        record = {"Name": "Daniane", "age": 7}

        assert accessor.lookup(record, "name") == "Daniane"
        assert accessor.lookup(record, "age") == "7"

    def test_unknown_field(self, accessor):
        """Test a missing field raises UnknownFieldError."""
        with pytest.raises(UnknownFieldError) as exc_info:
            accessor.lookup(PersonRecord(name="x"), "nickname")

        assert exc_info.value.code == "UNKNOWN_FIELD"
        assert exc_info.value.field_name == "nickname"
        assert exc_info.value.record_type == "PersonRecord"

    def test_unknown_mapping_key(self, accessor):
        """Test a missing key raises UnknownFieldError."""
        with pytest.raises(UnknownFieldError):
            accessor.lookup({"name": "x"}, "email")

    def test_undeclared_type_has_no_fields(self, accessor):
        """Test plain objects need a registered table."""
        with pytest.raises(UnknownFieldError):
            accessor.lookup(Legacy("L1"), "code")

    def test_registered_table(self, accessor):
        """Test an explicitly registered accessor table."""
        accessor.register(Legacy, {"code": lambda record: record.code})

        assert accessor.lookup(Legacy("L1"), "CODE") == "L1"

    def test_table_built_once_per_type(self, accessor):
        """Test accessor tables are cached per record type."""
        first = accessor.table_for(PersonRecord)
        second = accessor.table_for(PersonRecord)

        assert first is second
        assert "internalcode" in first.field_names

    def test_first_declaration_wins_on_case_clash(self):
        """Test names differing only in case keep the first getter."""
        table = AccessorTable(dict, {"Code": lambda r: "first", "code": lambda r: "second"})

        assert table.getter("CODE")(None) == "first"
