"""User entity."""

from dataclasses import dataclass
from uuid import UUID


@dataclass
class User:
    """Application user whose permissions are resolved and edited."""

    id: UUID
    name: str
    email: str | None = None
