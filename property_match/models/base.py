"""Base models shared across the marketplace."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Event:
    """Standard event envelope for outbound notifications."""

    event_id: str
    event_type: str  # entity.action (e.g., property.submitted)
    event_time: datetime
    source: str  # Service/system that generated
    subject: str  # Entity ID affected
    data: dict
    metadata: dict = field(default_factory=dict)
