# events/models.py
"""
Business event records.

Every successful mutation performed by the command layer appends one
BusinessEvent to the store's event log. Events are immutable and are
never removed, except when an enclosing store.atomic() block rolls back.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class BusinessEvent:
    id: str
    sequence: int
    event_type: str
    aggregate_type: str
    aggregate_id: str
    occurred_at: datetime
    data: Dict[str, Any] = field(default_factory=dict)
    company_id: Optional[str] = None
    caused_by_admin_id: Optional[str] = None
    caused_by_event_id: Optional[str] = None

    def __str__(self):
        return f"#{self.sequence} {self.event_type} {self.aggregate_type}:{self.aggregate_id}"
