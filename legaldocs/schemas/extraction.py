"""Pydantic schemas for structured legal document extractions.

An ExtractionRecord is produced once per uploaded document by the external
extraction source and is never mutated afterwards. Every category is optional
in the source payload: missing collections become empty tuples and missing
aggregates become empty aggregates, so consumers never have to guard against
None. Collections are validated entry by entry and a malformed entry is
dropped without affecting the rest of the record.
"""

import re
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from legaldocs.utils.logging import get_logger

LOGGER = get_logger(__name__)

EnumType = TypeVar("EnumType", bound=Enum)
ModelType = TypeVar("ModelType", bound=BaseModel)

NUMBER_PATTERN = re.compile(r"-?\d+(?:\.\d+)?")


def _clamp_confidence(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return min(max(number, 0.0), 1.0)


def coerce_enum(enum_cls: Type[EnumType], value: Any, fallback: EnumType) -> EnumType:
    """Map a raw value onto ``enum_cls``, returning ``fallback`` when it does not fit."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, Enum):
        value = value.value
    if value is None:
        return fallback
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        return fallback


def parse_amount(value: Any) -> float:
    """Read a monetary value such as ``5000``, ``"5,000.50"`` or ``"AED 5,000"``."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    match = NUMBER_PATTERN.search(str(value).replace(",", ""))
    return float(match.group()) if match else 0.0


def valid_items(model_cls: Type[ModelType], value: Any, category: str) -> Tuple[ModelType, ...]:
    """Validate each entry of a collection on its own, dropping the ones that do not fit.

    A malformed entry costs only itself: the rest of the collection, and the
    rest of the record, are kept.
    """
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        LOGGER.warning(f"Ignoring {category}: expected a list, got {type(value).__name__}")
        return ()

    items = []
    for index, item in enumerate(value):
        try:
            items.append(model_cls.model_validate(item))
        except PydanticValidationError as e:
            LOGGER.warning(
                f"Dropping invalid {category} entry at index {index}",
                extra={"category": category, "index": index, "errors": e.error_count()},
            )
    return tuple(items)


def text_items(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value else ()
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(item for item in value if isinstance(item, str) and item)


def _valid_aggregate(model_cls: Type[ModelType], value: Any, category: str) -> ModelType:
    if isinstance(value, model_cls):
        return value
    if not isinstance(value, dict):
        if value is not None:
            LOGGER.warning(f"Ignoring {category}: expected an object, got {type(value).__name__}")
        return model_cls()
    try:
        return model_cls.model_validate(value)
    except PydanticValidationError as e:
        LOGGER.warning(f"Ignoring invalid {category}", extra={"category": category, "errors": e.error_count()})
        return model_cls()


Confidence = Annotated[float, BeforeValidator(_clamp_confidence)]


class ExtractionBaseModel(BaseModel):
    """Base model for extracted entities with shared config."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
    )


class PartyType(str, Enum):
    INDIVIDUAL = "individual"
    COMPANY = "company"
    UNKNOWN = "unknown"


class ClauseType(str, Enum):
    """Closed set of clause categories assigned by the extractor."""
    PREAMBLE = "preamble"
    RECITAL = "recital"
    DEFINITION = "definition"
    OBLIGATION = "obligation"
    RIGHT = "right"
    TERMINATION = "termination"
    CONFIDENTIALITY = "confidentiality"
    INDEMNITY = "indemnity"
    LIABILITY = "liability"
    DISPUTE = "dispute"
    GOVERNING_LAW = "governing_law"
    SIGNATURE = "signature"
    WITNESS = "witness"
    SCHEDULE = "schedule"
    OTHER = "other"

    @classmethod
    def coerce(cls, value: Any) -> "ClauseType":
        """Map any raw value onto the enumeration, unknown values become OTHER."""
        clause_type = coerce_enum(cls, value, cls.OTHER)
        if clause_type is cls.OTHER and value not in (None, cls.OTHER, cls.OTHER.value):
            LOGGER.debug(f"Unrecognized clause type {value!r}, using 'other'")
        return clause_type


class ClauseImportance(str, Enum):
    CRITICAL = "critical"
    STANDARD = "standard"
    OPTIONAL = "optional"


class FileCategory(str, Enum):
    PDF = "pdf"
    WORD = "word"
    IMAGE = "image"
    TEXT = "text"


class DocumentLanguage(str, Enum):
    EN = "en"
    AR = "ar"
    MIXED = "mixed"
    UNKNOWN = "unknown"


class ExtractionStatus(str, Enum):
    COMPLETED = "completed"
    ERROR = "error"


class KeyTerm(ExtractionBaseModel):
    """One entry of the ordered key-terms list (duplicates by term allowed)."""
    term: str
    value: str = ""
    confidence: Confidence = 0.0


class ExtractedParty(ExtractionBaseModel):
    """A party named in the source document."""
    name: str = ""
    name_ar: Optional[str] = None
    type: PartyType = PartyType.INDIVIDUAL
    role: Optional[str] = None
    id_number: Optional[str] = None
    nationality: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    registration_number: Optional[str] = None
    confidence: Confidence = 0.0

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> PartyType:
        if value is None:
            return PartyType.INDIVIDUAL
        return coerce_enum(PartyType, value, PartyType.UNKNOWN)

    @field_validator("name", mode="before")
    @classmethod
    def _name_default(cls, value: Any) -> Any:
        return value or ""

    @property
    def is_company(self) -> bool:
        return self.type is PartyType.COMPANY


class ExtractedFinancialAmount(ExtractionBaseModel):
    """A single monetary amount found in the document."""
    value: float = 0.0
    description: str = ""
    type: str = "other"
    frequency: Optional[str] = None
    confidence: Confidence = 0.0

    @field_validator("value", mode="before")
    @classmethod
    def _parse_value(cls, value: Any) -> float:
        return parse_amount(value)

    @field_validator("description", "type", mode="before")
    @classmethod
    def _text_default(cls, value: Any) -> Any:
        return "" if value is None else value


class ExtractedFinancials(ExtractionBaseModel):
    """The single financial aggregate of a document."""
    currency: Optional[str] = None
    amounts: Tuple[ExtractedFinancialAmount, ...] = Field(default_factory=tuple)
    payment_terms: Optional[str] = None

    @field_validator("amounts", mode="before")
    @classmethod
    def _valid_amounts(cls, value: Any) -> Tuple[ExtractedFinancialAmount, ...]:
        return valid_items(ExtractedFinancialAmount, value, "amounts")


class CustomDate(ExtractionBaseModel):
    label: str = ""
    date: str = ""
    confidence: Confidence = 0.0

    @field_validator("label", "date", mode="before")
    @classmethod
    def _text_default(cls, value: Any) -> Any:
        return "" if value is None else value


class ExtractedDates(ExtractionBaseModel):
    """Named dates of the document plus any extra labelled dates."""
    effective_date: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    signature_date: Optional[str] = None
    notice_period: Optional[str] = None
    renewal_date: Optional[str] = None
    custom_dates: Tuple[CustomDate, ...] = Field(default_factory=tuple)

    @field_validator("custom_dates", mode="before")
    @classmethod
    def _valid_custom_dates(cls, value: Any) -> Tuple[CustomDate, ...]:
        return valid_items(CustomDate, value, "custom dates")


class ExtractedClause(ExtractionBaseModel):
    """A clause of the source document."""
    id: str
    title: str = ""
    title_ar: Optional[str] = None
    content: str = ""
    content_ar: Optional[str] = None
    type: ClauseType = ClauseType.OTHER
    importance: ClauseImportance = ClauseImportance.STANDARD
    confidence: Confidence = 0.0

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> ClauseType:
        return ClauseType.coerce(value)

    @field_validator("importance", mode="before")
    @classmethod
    def _coerce_importance(cls, value: Any) -> ClauseImportance:
        return coerce_enum(ClauseImportance, value, ClauseImportance.STANDARD)

    @field_validator("title", "content", mode="before")
    @classmethod
    def _text_default(cls, value: Any) -> Any:
        return value or ""

    @property
    def is_critical(self) -> bool:
        return self.importance is ClauseImportance.CRITICAL


class ExtractionRecord(ExtractionBaseModel):
    """Structured result of parsing one legal document."""

    # Provenance
    id: Optional[str] = None
    file_name: str = ""
    file_type: Optional[FileCategory] = None
    file_size: int = 0
    uploaded_at: Optional[datetime] = None

    # Classification
    document_type: str = "unknown"
    document_type_confidence: Confidence = 0.0
    language: DocumentLanguage = DocumentLanguage.UNKNOWN
    jurisdiction: Optional[str] = None

    # Raw extracted text
    raw_text: str = ""
    page_count: Optional[int] = None

    # Smart extractions
    parties: Tuple[ExtractedParty, ...] = Field(default_factory=tuple)
    financials: ExtractedFinancials = Field(default_factory=ExtractedFinancials)
    dates: ExtractedDates = Field(default_factory=ExtractedDates)
    clauses: Tuple[ExtractedClause, ...] = Field(default_factory=tuple)

    # Summary
    summary: str = ""
    summary_ar: Optional[str] = None
    key_terms: Tuple[KeyTerm, ...] = Field(default_factory=tuple)

    # Warnings and notes
    warnings: Tuple[str, ...] = Field(default_factory=tuple)
    notes: Tuple[str, ...] = Field(default_factory=tuple)

    # Processing metadata
    processing_time: float = 0.0
    extraction_model: Optional[str] = None
    status: ExtractionStatus = ExtractionStatus.COMPLETED
    error: Optional[str] = None

    @field_validator("parties", mode="before")
    @classmethod
    def _valid_parties(cls, value: Any) -> Tuple[ExtractedParty, ...]:
        return valid_items(ExtractedParty, value, "parties")

    @field_validator("clauses", mode="before")
    @classmethod
    def _valid_clauses(cls, value: Any) -> Tuple[ExtractedClause, ...]:
        # Clauses without an id get a positional one so they stay addressable
        if isinstance(value, (list, tuple)):
            taken = {str(item.get("id")) for item in value if isinstance(item, dict) and item.get("id")}
            numbered = []
            for index, item in enumerate(value):
                if isinstance(item, dict) and item.get("id") in (None, ""):
                    clause_id = f"clause-{index + 1}"
                    while clause_id in taken:
                        clause_id = f"{clause_id}-{index + 1}"
                    taken.add(clause_id)
                    item = {**item, "id": clause_id}
                numbered.append(item)
            value = numbered
        return valid_items(ExtractedClause, value, "clauses")

    @field_validator("key_terms", mode="before")
    @classmethod
    def _valid_key_terms(cls, value: Any) -> Tuple[KeyTerm, ...]:
        return valid_items(KeyTerm, value, "key terms")

    @field_validator("warnings", "notes", mode="before")
    @classmethod
    def _text_items(cls, value: Any) -> Tuple[str, ...]:
        return text_items(value)

    @field_validator("financials", mode="before")
    @classmethod
    def _valid_financials(cls, value: Any) -> Any:
        return _valid_aggregate(ExtractedFinancials, value, "financials")

    @field_validator("dates", mode="before")
    @classmethod
    def _valid_dates(cls, value: Any) -> Any:
        return _valid_aggregate(ExtractedDates, value, "dates")

    @field_validator("document_type", mode="before")
    @classmethod
    def _document_type_default(cls, value: Any) -> Any:
        return value or "unknown"

    @field_validator("file_name", "summary", "raw_text", mode="before")
    @classmethod
    def _text_default(cls, value: Any) -> Any:
        return value or ""

    @field_validator("file_size", "processing_time", mode="before")
    @classmethod
    def _number_default(cls, value: Any) -> Any:
        return value or 0

    @field_validator("file_type", mode="before")
    @classmethod
    def _coerce_file_type(cls, value: Any) -> Optional[FileCategory]:
        return coerce_enum(FileCategory, value, None)

    @field_validator("language", mode="before")
    @classmethod
    def _coerce_language(cls, value: Any) -> DocumentLanguage:
        return coerce_enum(DocumentLanguage, value, DocumentLanguage.UNKNOWN)

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> ExtractionStatus:
        return coerce_enum(ExtractionStatus, value, ExtractionStatus.COMPLETED)

    @property
    def is_failed(self) -> bool:
        return self.status is ExtractionStatus.ERROR

    def find_clause(self, clause_id: str) -> Optional[ExtractedClause]:
        """Return the clause with the given id, if any."""
        for clause in self.clauses:
            if clause.id == clause_id:
                return clause
        return None
