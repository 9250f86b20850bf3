"""Extraction review surface and the draft consumer port."""

from legaldocs.services.review.clipboard import Clipboard, InMemoryClipboard
from legaldocs.services.review.draft_consumer import DateRange, DraftConsumer
from legaldocs.services.review.draft_document import DraftDocument, PartyInfo
from legaldocs.services.review.review_surface import ExtractionReviewSurface, format_amount

__all__ = [
    "Clipboard",
    "InMemoryClipboard",
    "DateRange",
    "DraftConsumer",
    "DraftDocument",
    "PartyInfo",
    "ExtractionReviewSurface",
    "format_amount",
]
