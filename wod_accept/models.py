"""Data models for invitations and reservation results"""
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .utils.timezone import format_timestamp


@dataclass(frozen=True)
class FileEvent:
    """A file that appeared in the watched directory"""
    path: Path
    kind: str = "created"


@dataclass(frozen=True)
class ClassDetails:
    """Represents the class an invitation was accepted for"""
    program: str
    time: datetime  # UTC, minute precision


@dataclass(frozen=True)
class ReservationResult:
    """Outcome scraped from the confirmation page"""
    status: str
    details: ClassDetails
    
    def summary(self) -> str:
        """One-line text pushed to the operator on success"""
        return f"{self.status} ({self.details.program}, {format_timestamp(self.details.time)})"


@dataclass(frozen=True)
class PushoverCredentials:
    """Application token and user key for the push service"""
    token: str
    user: str
    
    def __repr__(self):
        return f"PushoverCredentials(token='{self.token[:4]}...', user='{self.user[:4]}...')"
