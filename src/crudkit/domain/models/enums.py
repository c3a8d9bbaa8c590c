"""Attribute selectors used by the date-range and text-search queries.

Both enums use the str mixin so they serialize cleanly to JSON and compare
equal to plain strings (FastAPI / Pydantic default behaviour).
"""

from __future__ import annotations

from enum import Enum


class _Selector(str, Enum):
    @classmethod
    def parse(cls, value: str):
        """Resolve a selector from its name or value, ignoring case.

        Raises ValueError for unknown names.
        """
        key = value.strip().lower()
        for member in cls:
            if member.value == key or member.name.lower() == key:
                return member
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown {cls.__name__} '{value}' (expected one of: {choices})")


class TimeStamp(_Selector):
    CREATED = "created"
    MODIFIED = "modified"
    ACCESSED = "accessed"


class TextField(_Selector):
    NAME = "name"
