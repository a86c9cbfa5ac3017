"""Document taxonomy and role access tables.

Both tables are shared with any previously stored data, so the display values
must not change.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping


class Category(str, Enum):
    FINANCE = "Finance"
    HR = "HR"
    LEGAL = "Legal"
    CONTRACTS = "Contracts"
    TECHNICAL_REPORTS = "Technical Reports"
    INVOICES = "Invoices"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: "str | Category") -> "Category":
        """Resolve a display value (case-insensitive) to a category."""
        if isinstance(value, Category):
            return value
        wanted = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        raise ValueError(f"Unknown document category: {value!r}")


class Role(str, Enum):
    ADMIN = "admin"
    FINANCE = "finance"
    HR = "hr"
    LEGAL = "legal"
    TECHNICAL = "technical"

    @classmethod
    def lookup(cls, value: "str | Role | None") -> "Role | None":
        """Return the matching role or ``None`` for anything unmapped."""
        if isinstance(value, Role):
            return value
        if value is None:
            return None
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


# admin is unrestricted and deliberately absent.
ROLE_CATEGORIES: Mapping[Role, frozenset[Category]] = {
    Role.FINANCE: frozenset({Category.FINANCE, Category.INVOICES}),
    Role.HR: frozenset({Category.HR}),
    Role.LEGAL: frozenset({Category.LEGAL, Category.CONTRACTS}),
    Role.TECHNICAL: frozenset({Category.TECHNICAL_REPORTS}),
}


__all__ = ["Category", "Role", "ROLE_CATEGORIES"]
