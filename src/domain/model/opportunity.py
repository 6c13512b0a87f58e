from dataclasses import dataclass
from datetime import datetime


@dataclass
class Opportunity:
    """A volunteer opportunity. Written by an external collaborator; read-only here."""
    id: str
    title: str
    description: str | None = None
    location: str | None = None
    duration: str | None = None
    volunteers_needed: int | None = None
    date_created: datetime | None = None
