"""Pydantic schemas for extraction records, review views and saved profiles."""

from legaldocs.schemas.extraction import (
    ClauseImportance,
    ClauseType,
    CustomDate,
    ExtractedClause,
    ExtractedDates,
    ExtractedFinancialAmount,
    ExtractedFinancials,
    ExtractedParty,
    ExtractionRecord,
    ExtractionStatus,
    FileCategory,
    KeyTerm,
    PartyType,
)
from legaldocs.schemas.profiles import (
    ProfileCreate,
    ProfileData,
    ProfileDataPatch,
    ProfileType,
    ProfileUpdate,
    SavedProfile,
)
from legaldocs.schemas.review import EmptyState, PartyRole, ReviewView

__all__ = [
    "ClauseImportance",
    "ClauseType",
    "CustomDate",
    "ExtractedClause",
    "ExtractedDates",
    "ExtractedFinancialAmount",
    "ExtractedFinancials",
    "ExtractedParty",
    "ExtractionRecord",
    "ExtractionStatus",
    "FileCategory",
    "KeyTerm",
    "PartyType",
    "ProfileCreate",
    "ProfileData",
    "ProfileDataPatch",
    "ProfileType",
    "ProfileUpdate",
    "SavedProfile",
    "EmptyState",
    "PartyRole",
    "ReviewView",
]
