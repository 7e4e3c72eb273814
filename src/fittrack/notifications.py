"""User-facing notifications for operation outcomes."""

from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    """How a notification should be presented."""

    INFO = "info"
    DESTRUCTIVE = "destructive"


@dataclass
class Notification:
    """A title/description pair shown to the user after an operation."""

    title: str
    description: str = ""
    severity: Severity = Severity.INFO

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "severity": self.severity.value,
        }
