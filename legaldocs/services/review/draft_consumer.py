"""Callback port between the review surface and a document draft."""

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from legaldocs.schemas.extraction import ExtractedClause, ExtractedParty
from legaldocs.schemas.review import PartyRole


@dataclass(frozen=True)
class DateRange:
    start: Optional[str] = None
    end: Optional[str] = None


@runtime_checkable
class DraftConsumer(Protocol):
    """Anything that accepts items applied from an extraction review.

    The review surface calls these fire-and-forget: return values are
    ignored and the same item may arrive any number of times.
    """

    def on_use_party(self, party: ExtractedParty, role: PartyRole) -> None:
        ...

    def on_use_clause(self, clause: ExtractedClause) -> None:
        ...

    def on_use_amount(self, value: float, description: str) -> None:
        ...

    def on_use_dates(self, dates: DateRange) -> None:
        ...
