from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class User:
    """Represents an authenticated caller, as recovered from a bearer token."""

    user_id: str
    email: str = ""


@dataclass(slots=True)
class Assessment:
    """Snapshot of a stored assessment record."""

    id: str
    title: Any
    description: Any
    due_date: Any
    owner_id: str | None = None
