"""User profile data model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Profile:
    """Per-user display data. One profile per owner, created lazily."""

    owner: str
    username: str | None = None
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def display_name(self) -> str:
        return self.username or self.owner

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "owner": self.owner,
            "username": self.username,
            "display_name": self.display_name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
