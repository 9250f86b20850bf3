"""View models produced by the extraction review surface.

Each review tab renders into one of these models: localized labels, the text
direction, the rows to display, the apply actions that are available and,
when the category has nothing to show, an explicit empty state.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from legaldocs.schemas.extraction import ClauseType
from legaldocs.utils.localization import Locale, TextDirection


class ReviewView(str, Enum):
    """The six mutually exclusive review tabs."""
    SUMMARY = "summary"
    PARTIES = "parties"
    FINANCIALS = "financials"
    DATES = "dates"
    CLAUSES = "clauses"
    WARNINGS = "warnings"


class PartyRole(str, Enum):
    """Draft slot a party can be applied to."""
    PARTY_A = "partyA"
    PARTY_B = "partyB"


class ApplyAction(str, Enum):
    USE_AS_PARTY_A = "use_as_party_a"
    USE_AS_PARTY_B = "use_as_party_b"
    USE_CLAUSE = "use_clause"
    USE_AMOUNT = "use_amount"
    USE_DATES = "use_dates"


class EmptyState(BaseModel):
    """Neutral 'nothing found' placeholder shown instead of rows."""
    icon: str = Field(..., description="Icon name shown above the message")
    message: str = Field(..., description="Localized message")


class ActionButton(BaseModel):
    action: ApplyAction
    label: str


class DetailItem(BaseModel):
    label: str
    value: str


class ReviewHeader(BaseModel):
    title: str
    file_name: str
    file_size: str
    document_type: str
    confidence_percent: int = Field(..., ge=0, le=100)
    confidence_label: str


class TabItem(BaseModel):
    view: ReviewView
    label: str
    badge: Optional[int] = Field(default=None, description="Count shown on the tab when non-zero")
    badge_variant: Optional[str] = None
    active: bool = False


class BaseViewModel(BaseModel):
    view: ReviewView
    label: str
    locale: Locale
    direction: TextDirection
    empty_state: Optional[EmptyState] = None

    @property
    def is_empty(self) -> bool:
        return self.empty_state is not None


class KeyTermItem(BaseModel):
    term: str
    value: str


class SummaryViewModel(BaseViewModel):
    view: ReviewView = ReviewView.SUMMARY
    summary: str = ""
    key_terms_label: str = ""
    key_terms: List[KeyTermItem] = Field(default_factory=list)
    jurisdiction: Optional[str] = None
    jurisdiction_label: str = ""


class PartyRow(BaseModel):
    index: int
    name: str
    alternate_name: Optional[str] = None
    icon: str
    badge: str
    details: List[DetailItem] = Field(default_factory=list)
    actions: List[ActionButton] = Field(default_factory=list)


class PartiesViewModel(BaseViewModel):
    view: ReviewView = ReviewView.PARTIES
    rows: List[PartyRow] = Field(default_factory=list)


class AmountRow(BaseModel):
    index: int
    value: float
    display_value: str
    description: str
    type: str
    frequency: Optional[str] = None
    actions: List[ActionButton] = Field(default_factory=list)


class FinancialsViewModel(BaseViewModel):
    view: ReviewView = ReviewView.FINANCIALS
    currency: Optional[str] = None
    currency_label: Optional[str] = None
    rows: List[AmountRow] = Field(default_factory=list)
    payment_terms: Optional[str] = None
    payment_terms_label: str = ""


class DateItem(BaseModel):
    label: str
    value: str


class DatesViewModel(BaseViewModel):
    view: ReviewView = ReviewView.DATES
    items: List[DateItem] = Field(default_factory=list)
    actions: List[ActionButton] = Field(default_factory=list)


class ClauseRow(BaseModel):
    id: str
    title: str
    alternate_title: Optional[str] = None
    type: ClauseType
    type_label: str
    type_color: str
    is_critical: bool = False
    critical_label: Optional[str] = None
    content: str
    confidence_percent: int = Field(..., ge=0, le=100)
    confidence_label: str
    copied: bool = False
    copy_label: str
    actions: List[ActionButton] = Field(default_factory=list)


class ClausesViewModel(BaseViewModel):
    view: ReviewView = ReviewView.CLAUSES
    rows: List[ClauseRow] = Field(default_factory=list)


class WarningsViewModel(BaseViewModel):
    view: ReviewView = ReviewView.WARNINGS
    warnings: List[str] = Field(default_factory=list)
    notes_label: str = ""
    notes: List[str] = Field(default_factory=list)


class ReviewRender(BaseModel):
    """Every tab of the review surface rendered at once."""
    locale: Locale
    direction: TextDirection
    header: ReviewHeader
    tabs: List[TabItem]
    active_view: ReviewView
    summary: SummaryViewModel
    parties: PartiesViewModel
    financials: FinancialsViewModel
    dates: DatesViewModel
    clauses: ClausesViewModel
    warnings: WarningsViewModel
