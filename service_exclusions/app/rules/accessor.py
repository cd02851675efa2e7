"""
Field access by name for records validated against exclusion rules.

Each record type gets an accessor table built once from its declared
schema: dataclass fields, pydantic model fields (and their aliases), or
named tuple fields. Other types can register a table explicitly.
Mappings are looked up by key. Names always match case-insensitively.
"""

import dataclasses
import threading
from enum import Enum
from operator import attrgetter
from typing import Any, Callable, Dict, Mapping, Optional, Type

from pydantic import BaseModel

from shared.errors import UnknownFieldError

Getter = Callable[[Any], Any]

NULL_VALUE = "null"


class AccessorTable:
    """Case-insensitive field name to getter table for one record type."""

    def __init__(self, record_type: Type, getters: Mapping[str, Getter]):
        self.record_type = record_type
        self._getters: Dict[str, Getter] = {}
        for name, getter in getters.items():
            # First declaration wins when names differ only in case
            self._getters.setdefault(name.lower(), getter)

    @classmethod
    def for_type(cls, record_type: Type) -> "AccessorTable":
        """Build a table from the record type's declared fields."""
        getters: Dict[str, Getter] = {}

        if dataclasses.is_dataclass(record_type):
            for f in dataclasses.fields(record_type):
                getters[f.name] = attrgetter(f.name)

        elif issubclass(record_type, BaseModel):
            for name, info in record_type.model_fields.items():
                getters[name] = attrgetter(name)
                if info.alias:
                    getters.setdefault(info.alias, attrgetter(name))

        elif issubclass(record_type, tuple) and hasattr(record_type, "_fields"):
            for name in record_type._fields:
                getters[name] = attrgetter(name)

        return cls(record_type, getters)

    def getter(self, field_name: str) -> Optional[Getter]:
        return self._getters.get(field_name.lower())

    @property
    def field_names(self):
        return list(self._getters)


def stringify(value: Any) -> str:
    """String form of a field value; missing values become ``"null"``."""
    if value is None:
        return NULL_VALUE
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class FieldAccessor:
    """Reads named fields off records as strings."""

    def __init__(self):
        self._tables: Dict[Type, AccessorTable] = {}
        self._lock = threading.Lock()

    def register(self, record_type: Type, getters: Mapping[str, Getter]) -> AccessorTable:
        """Register an explicit accessor table for a record type."""
        table = AccessorTable(record_type, getters)
        with self._lock:
            self._tables[record_type] = table
        return table

    def table_for(self, record_type: Type) -> AccessorTable:
        """Get (building once) the accessor table for a record type."""
        table = self._tables.get(record_type)
        if table is None:
            with self._lock:
                table = self._tables.get(record_type)
                if table is None:
                    table = AccessorTable.for_type(record_type)
                    self._tables[record_type] = table
        return table

    def lookup(self, record: Any, field_name: str) -> str:
        """
        Get a record field's value as a string.

        Raises:
            UnknownFieldError: no field on the record matches ``field_name``.
        """
        if isinstance(record, Mapping):
            return stringify(self._lookup_mapping(record, field_name))

        getter = self.table_for(type(record)).getter(field_name)
        if getter is None:
            raise UnknownFieldError(field_name, type(record).__name__)
        return stringify(getter(record))

    @staticmethod
    def _lookup_mapping(record: Mapping, field_name: str) -> Any:
        if field_name in record:
            return record[field_name]

        wanted = field_name.lower()
        for key, value in record.items():
            if isinstance(key, str) and key.lower() == wanted:
                return value

        raise UnknownFieldError(field_name, type(record).__name__)
