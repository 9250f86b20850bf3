"""Extraction review surface.

Presents one ExtractionRecord across six mutually exclusive views and lets
the user hand individual items (a party, a clause, an amount, the contract
dates) to a draft consumer. The surface never mutates the record it shows.
"""

import time
from typing import Any, Callable, Dict, List, Optional, Union

from legaldocs.config import settings
from legaldocs.core.exceptions import ValidationError
from legaldocs.schemas.extraction import (
    ExtractedClause,
    ExtractedFinancialAmount,
    ExtractedParty,
    ExtractionRecord,
)
from legaldocs.schemas.review import (
    ActionButton,
    AmountRow,
    ApplyAction,
    BaseViewModel,
    ClauseRow,
    ClausesViewModel,
    DateItem,
    DatesViewModel,
    DetailItem,
    EmptyState,
    FinancialsViewModel,
    KeyTermItem,
    PartiesViewModel,
    PartyRole,
    PartyRow,
    ReviewHeader,
    ReviewRender,
    ReviewView,
    SummaryViewModel,
    TabItem,
    WarningsViewModel,
)
from legaldocs.services.extraction.clause_types import ClauseTypeMapper
from legaldocs.services.extraction.document_validation import format_file_size
from legaldocs.services.review.clipboard import Clipboard, InMemoryClipboard
from legaldocs.services.review.draft_consumer import DateRange, DraftConsumer
from legaldocs.utils.localization import (
    LocaleLike,
    alternate_localized,
    label,
    pick_localized,
    resolve_locale,
    text_direction,
)
from legaldocs.utils.logging import get_logger

LOGGER = get_logger(__name__)

PartyCallback = Callable[[ExtractedParty, PartyRole], Any]
ClauseCallback = Callable[[ExtractedClause], Any]
AmountCallback = Callable[[float, str], Any]
DatesCallback = Callable[[DateRange], Any]

EMPTY_STATE_ICONS: Dict[ReviewView, str] = {
    ReviewView.SUMMARY: "file-text",
    ReviewView.PARTIES: "users",
    ReviewView.FINANCIALS: "dollar-sign",
    ReviewView.DATES: "calendar",
    ReviewView.CLAUSES: "file-text",
    ReviewView.WARNINGS: "check-circle",
}

DATE_FIELDS = (
    "effective_date",
    "start_date",
    "end_date",
    "signature_date",
    "notice_period",
    "renewal_date",
)


def format_amount(value: float, currency: Optional[str] = None) -> str:
    """Amount with thousands separators, trailing zero decimals dropped."""
    number = f"{value:,.2f}".rstrip("0").rstrip(".")
    return f"{currency} {number}" if currency else number


class ExtractionReviewSurface:
    """Review state for a single extraction record.

    Holds the active view and the copy acknowledgment. Apply operations are
    forwarded to the bound callbacks; a callback that raises is logged and
    never disturbs the surface's own state.
    """

    def __init__(
        self,
        record: Optional[ExtractionRecord],
        locale: LocaleLike = "en",
        on_use_party: Optional[PartyCallback] = None,
        on_use_clause: Optional[ClauseCallback] = None,
        on_use_amount: Optional[AmountCallback] = None,
        on_use_dates: Optional[DatesCallback] = None,
        clipboard: Optional[Clipboard] = None,
        copy_ack_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.record = record
        self.locale = resolve_locale(locale)
        self.direction = text_direction(self.locale)
        self.on_use_party = on_use_party
        self.on_use_clause = on_use_clause
        self.on_use_amount = on_use_amount
        self.on_use_dates = on_use_dates
        self.clipboard = clipboard if clipboard is not None else InMemoryClipboard()
        self.copy_ack_seconds = (
            settings.copy_ack_seconds if copy_ack_seconds is None else copy_ack_seconds
        )
        self._clock = clock
        self._active_view = ReviewView.SUMMARY
        self._copied_id: Optional[str] = None
        self._copied_at: float = 0.0

    @classmethod
    def from_consumer(
        cls,
        record: Optional[ExtractionRecord],
        consumer: DraftConsumer,
        locale: LocaleLike = "en",
        **kwargs: Any,
    ) -> "ExtractionReviewSurface":
        """Build a surface with all four callbacks bound to ``consumer``."""
        return cls(
            record,
            locale=locale,
            on_use_party=consumer.on_use_party,
            on_use_clause=consumer.on_use_clause,
            on_use_amount=consumer.on_use_amount,
            on_use_dates=consumer.on_use_dates,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # View selection
    # ------------------------------------------------------------------

    @property
    def active_view(self) -> ReviewView:
        return self._active_view

    def select_view(self, view: Union[ReviewView, str]) -> ReviewView:
        """Make ``view`` the single active view.

        Raises:
            ValidationError: If ``view`` is not one of the six review views
        """
        self._active_view = self._coerce_view(view)
        return self._active_view

    @staticmethod
    def _coerce_view(view: Union[ReviewView, str]) -> ReviewView:
        if isinstance(view, ReviewView):
            return view
        try:
            return ReviewView(str(view).strip().lower())
        except ValueError as e:
            raise ValidationError(f"Unknown review view: {view}", original_error=e) from e

    # ------------------------------------------------------------------
    # Apply actions
    # ------------------------------------------------------------------

    def _invoke(self, name: str, callback: Optional[Callable[..., Any]], *args: Any) -> None:
        if callback is None:
            LOGGER.debug(f"No {name} callback bound, ignoring apply")
            return
        try:
            callback(*args)
        except Exception as e:
            LOGGER.error(
                f"Draft consumer {name} callback failed: {str(e)}",
                exc_info=True,
                extra={"callback": name, "document_type": self._document_type_raw()},
            )

    def apply_party(self, party: ExtractedParty, target_role: PartyRole) -> None:
        """Forward ``(party, target_role)`` to the consumer unchanged."""
        self._invoke("on_use_party", self.on_use_party, party, target_role)

    def apply_clause(self, clause: ExtractedClause) -> None:
        self._invoke("on_use_clause", self.on_use_clause, clause)

    def apply_amount(self, value: float, description: str) -> None:
        """Forward exactly one amount and its description.

        The amount's type and frequency are not part of the consumer contract.
        """
        self._invoke("on_use_amount", self.on_use_amount, value, description)

    def apply_amount_item(self, amount: ExtractedFinancialAmount) -> None:
        self.apply_amount(amount.value, amount.description)

    @property
    def can_apply_dates(self) -> bool:
        return (
            self.on_use_dates is not None
            and self.record is not None
            and bool(self.record.dates.start_date)
        )

    def apply_dates(self) -> None:
        """Forward the start/end pair, only when a start date was extracted."""
        if not self.can_apply_dates:
            LOGGER.debug("Dates apply unavailable, no start date or no callback")
            return
        dates = self.record.dates
        self._invoke(
            "on_use_dates",
            self.on_use_dates,
            DateRange(start=dates.start_date, end=dates.end_date),
        )

    # ------------------------------------------------------------------
    # Clipboard
    # ------------------------------------------------------------------

    @property
    def copied_id(self) -> Optional[str]:
        """Id of the clause showing the copy acknowledgment, if still fresh."""
        if self._copied_id is not None and self._clock() - self._copied_at >= self.copy_ack_seconds:
            self._copied_id = None
        return self._copied_id

    def is_copied(self, clause_id: str) -> bool:
        return clause_id is not None and self.copied_id == clause_id

    def copy_clause_text(self, clause_id: str) -> bool:
        """Copy a clause's content to the clipboard.

        On success the clause becomes the only one acknowledged as copied,
        replacing any earlier acknowledgment. A failed write shows nothing.

        Returns:
            bool: Whether the acknowledgment is now shown for ``clause_id``
        """
        clause = self.record.find_clause(clause_id) if self.record else None
        if clause is None:
            LOGGER.warning("Copy requested for unknown clause", extra={"clause_id": clause_id})
            return False

        try:
            self.clipboard.write_text(clause.content)
        except Exception as e:
            LOGGER.warning(
                f"Clipboard write failed: {str(e)}",
                extra={"clause_id": clause_id},
            )
            return False

        self._copied_id = clause.id
        self._copied_at = self._clock()
        return True

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> BaseViewModel:
        """Render the active view."""
        return self.render_view(self._active_view)

    def render_view(self, view: Union[ReviewView, str]) -> BaseViewModel:
        renderers = {
            ReviewView.SUMMARY: self._render_summary,
            ReviewView.PARTIES: self._render_parties,
            ReviewView.FINANCIALS: self._render_financials,
            ReviewView.DATES: self._render_dates,
            ReviewView.CLAUSES: self._render_clauses,
            ReviewView.WARNINGS: self._render_warnings,
        }
        return renderers[self._coerce_view(view)]()

    def render_all(self) -> ReviewRender:
        """Render the header, the tab strip and every view."""
        return ReviewRender(
            locale=self.locale,
            direction=self.direction,
            header=self.render_header(),
            tabs=self.render_tabs(),
            active_view=self._active_view,
            summary=self._render_summary(),
            parties=self._render_parties(),
            financials=self._render_financials(),
            dates=self._render_dates(),
            clauses=self._render_clauses(),
            warnings=self._render_warnings(),
        )

    def _label(self, key: str) -> str:
        return label(key, self.locale)

    def _document_type_raw(self) -> Optional[str]:
        return self.record.document_type if self.record else None

    def _empty_state(self, view: ReviewView, message_key: str = "no_data") -> EmptyState:
        return EmptyState(icon=EMPTY_STATE_ICONS[view], message=self._label(message_key))

    def _view_fields(self, view: ReviewView) -> Dict[str, Any]:
        return {
            "view": view,
            "label": self._label(view.value),
            "locale": self.locale,
            "direction": self.direction,
        }

    def render_header(self) -> ReviewHeader:
        record = self.record
        document_type = record.document_type.replace("_", " ") if record and record.document_type else ""
        confidence = record.document_type_confidence if record else 0.0
        return ReviewHeader(
            title=self._label("title"),
            file_name=record.file_name if record else "",
            file_size=format_file_size(record.file_size if record else 0),
            document_type=document_type or self._label("unknown_document"),
            confidence_percent=round(confidence * 100),
            confidence_label=self._label("confidence"),
        )

    def render_tabs(self) -> List[TabItem]:
        record = self.record
        counts = {
            ReviewView.PARTIES: (len(record.parties) if record else 0, "secondary"),
            ReviewView.CLAUSES: (len(record.clauses) if record else 0, "secondary"),
            ReviewView.WARNINGS: (len(record.warnings) if record else 0, "destructive"),
        }
        tabs = []
        for view in ReviewView:
            count, variant = counts.get(view, (0, None))
            tabs.append(
                TabItem(
                    view=view,
                    label=self._label(view.value),
                    badge=count or None,
                    badge_variant=variant if count else None,
                    active=view is self._active_view,
                )
            )
        return tabs

    def _render_summary(self) -> SummaryViewModel:
        fields = self._view_fields(ReviewView.SUMMARY)
        record = self.record
        summary = pick_localized(record.summary, record.summary_ar, self.locale) if record else ""
        if not record or not (summary or record.key_terms or record.jurisdiction):
            return SummaryViewModel(**fields, empty_state=self._empty_state(ReviewView.SUMMARY))

        return SummaryViewModel(
            **fields,
            summary=summary,
            key_terms_label=self._label("key_terms"),
            key_terms=[KeyTermItem(term=term.term, value=term.value) for term in record.key_terms],
            jurisdiction=record.jurisdiction,
            jurisdiction_label=self._label("jurisdiction"),
        )

    def _party_details(self, party: ExtractedParty) -> List[DetailItem]:
        details = []
        for key in ("id_number", "nationality", "phone", "email"):
            value = getattr(party, key)
            if value:
                details.append(DetailItem(label=self._label(key), value=value))
        return details

    def _render_parties(self) -> PartiesViewModel:
        fields = self._view_fields(ReviewView.PARTIES)
        if not self.record or not self.record.parties:
            return PartiesViewModel(**fields, empty_state=self._empty_state(ReviewView.PARTIES))

        actions = []
        if self.on_use_party is not None:
            actions = [
                ActionButton(action=ApplyAction.USE_AS_PARTY_A, label=self._label("use_as_party_a")),
                ActionButton(action=ApplyAction.USE_AS_PARTY_B, label=self._label("use_as_party_b")),
            ]

        rows = []
        for index, party in enumerate(self.record.parties):
            rows.append(
                PartyRow(
                    index=index,
                    name=pick_localized(party.name, party.name_ar, self.locale),
                    alternate_name=alternate_localized(party.name, party.name_ar, self.locale),
                    icon="building" if party.is_company else "user",
                    badge=party.role.replace("_", " ") if party.role else party.type.value,
                    details=self._party_details(party),
                    actions=list(actions),
                )
            )
        return PartiesViewModel(**fields, rows=rows)

    def _render_financials(self) -> FinancialsViewModel:
        fields = self._view_fields(ReviewView.FINANCIALS)
        financials = self.record.financials if self.record else None
        if not financials or not financials.amounts:
            return FinancialsViewModel(**fields, empty_state=self._empty_state(ReviewView.FINANCIALS))

        actions = []
        if self.on_use_amount is not None:
            actions = [ActionButton(action=ApplyAction.USE_AMOUNT, label=self._label("use_amount"))]

        currency = financials.currency or ""
        rows = [
            AmountRow(
                index=index,
                value=amount.value,
                display_value=format_amount(amount.value, currency),
                description=amount.description,
                type=amount.type,
                frequency=amount.frequency,
                actions=list(actions),
            )
            for index, amount in enumerate(financials.amounts)
        ]
        return FinancialsViewModel(
            **fields,
            currency=financials.currency,
            currency_label=self._label("currency") if financials.currency else None,
            rows=rows,
            payment_terms=financials.payment_terms,
            payment_terms_label=self._label("payment_terms"),
        )

    def _render_dates(self) -> DatesViewModel:
        fields = self._view_fields(ReviewView.DATES)
        dates = self.record.dates if self.record else None
        items = []
        if dates is not None:
            for key in DATE_FIELDS:
                value = getattr(dates, key)
                if value:
                    items.append(DateItem(label=self._label(key), value=value))
            items.extend(DateItem(label=custom.label, value=custom.date) for custom in dates.custom_dates)

        if not items:
            return DatesViewModel(**fields, empty_state=self._empty_state(ReviewView.DATES))

        actions = []
        if self.can_apply_dates:
            actions = [ActionButton(action=ApplyAction.USE_DATES, label=self._label("use_dates"))]
        return DatesViewModel(**fields, items=items, actions=actions)

    def _render_clauses(self) -> ClausesViewModel:
        fields = self._view_fields(ReviewView.CLAUSES)
        if not self.record or not self.record.clauses:
            return ClausesViewModel(**fields, empty_state=self._empty_state(ReviewView.CLAUSES))

        actions = []
        if self.on_use_clause is not None:
            actions = [ActionButton(action=ApplyAction.USE_CLAUSE, label=self._label("use_clause"))]

        copied_id = self.copied_id
        rows = []
        for clause in self.record.clauses:
            copied = copied_id is not None and clause.id == copied_id
            rows.append(
                ClauseRow(
                    id=clause.id,
                    title=pick_localized(clause.title, clause.title_ar, self.locale),
                    alternate_title=alternate_localized(clause.title, clause.title_ar, self.locale),
                    type=clause.type,
                    type_label=ClauseTypeMapper.label(clause.type, self.locale),
                    type_color=ClauseTypeMapper.color(clause.type),
                    is_critical=clause.is_critical,
                    critical_label=self._label("critical") if clause.is_critical else None,
                    content=clause.content,
                    confidence_percent=round(clause.confidence * 100),
                    confidence_label=self._label("confidence"),
                    copied=copied,
                    copy_label=self._label("copied" if copied else "copy"),
                    actions=list(actions),
                )
            )
        return ClausesViewModel(**fields, rows=rows)

    def _render_warnings(self) -> WarningsViewModel:
        fields = self._view_fields(ReviewView.WARNINGS)
        record = self.record
        if not record or not (record.warnings or record.notes):
            return WarningsViewModel(
                **fields,
                empty_state=self._empty_state(ReviewView.WARNINGS, "no_warnings"),
            )
        return WarningsViewModel(
            **fields,
            warnings=list(record.warnings),
            notes_label=self._label("notes"),
            notes=list(record.notes),
        )
