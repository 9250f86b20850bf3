"""In-progress document draft that accepts applied extraction items.

This is the form state of the document generator: two party slots, the
contract amount and term dates, the jurisdiction and free-form additional
terms. It implements the DraftConsumer callbacks and can also be filled from
a saved profile.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from legaldocs.core.exceptions import ValidationError
from legaldocs.schemas.extraction import ExtractedClause, ExtractedParty
from legaldocs.schemas.profiles import SavedProfile
from legaldocs.schemas.review import PartyRole
from legaldocs.services.review.draft_consumer import DateRange
from legaldocs.utils.localization import Locale, LocaleLike, pick_localized, resolve_locale
from legaldocs.utils.logging import get_logger

LOGGER = get_logger(__name__)

CLAUSE_SEPARATOR = "\n\n"


@dataclass
class PartyInfo:
    name: str = ""
    id_number: str = ""
    nationality: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""
    whatsapp: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.name


@dataclass
class DraftDocument:
    """Form state of a document being drafted."""
    language: Locale = Locale.EN
    party_a: PartyInfo = field(default_factory=PartyInfo)
    party_b: PartyInfo = field(default_factory=PartyInfo)
    amount: Optional[float] = None
    amount_description: str = ""
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    jurisdiction: str = ""
    additional_terms: str = ""
    applied_clause_ids: List[str] = field(default_factory=list)

    @classmethod
    def for_locale(cls, locale: LocaleLike) -> "DraftDocument":
        return cls(language=resolve_locale(locale))

    def _set_party(self, role: Union[PartyRole, str], info: PartyInfo) -> None:
        try:
            target = role if isinstance(role, PartyRole) else PartyRole(str(role))
        except ValueError as e:
            raise ValidationError(f"Unknown party role: {role}", original_error=e) from e

        if target is PartyRole.PARTY_A:
            self.party_a = info
        else:
            self.party_b = info

    def on_use_party(self, party: ExtractedParty, role: Union[PartyRole, str]) -> None:
        """Overwrite a party slot with an extracted party.

        Raises:
            ValidationError: If ``role`` is not partyA or partyB
        """
        info = PartyInfo(
            name=pick_localized(party.name, party.name_ar, self.language),
            id_number=party.id_number or "",
            nationality=party.nationality or "",
            address=party.address or "",
            phone=party.phone or "",
            email=party.email or "",
        )
        self._set_party(role, info)
        LOGGER.debug("Applied extracted party", extra={"role": getattr(role, "value", role)})

    def on_use_clause(self, clause: ExtractedClause) -> None:
        """Append the clause text to the additional terms."""
        content = pick_localized(clause.content, clause.content_ar, self.language)
        if not content:
            return
        if self.additional_terms:
            self.additional_terms = f"{self.additional_terms}{CLAUSE_SEPARATOR}{content}"
        else:
            self.additional_terms = content
        self.applied_clause_ids.append(clause.id)

    def on_use_amount(self, value: float, description: str) -> None:
        self.amount = value
        self.amount_description = description

    def on_use_dates(self, dates: DateRange) -> None:
        self.start_date = dates.start
        self.end_date = dates.end

    def apply_profile(self, profile: SavedProfile, role: Union[PartyRole, str] = PartyRole.PARTY_A) -> None:
        """Fill a party slot from a saved profile."""
        data = profile.data
        info = PartyInfo(
            name=data.name,
            id_number=data.id_number,
            nationality=data.nationality,
            address=data.address,
            phone=data.phone,
            email=data.email,
            whatsapp=data.whatsapp,
        )
        self._set_party(role, info)
        LOGGER.debug("Applied saved profile", extra={"profile_id": profile.id, "role": getattr(role, "value", role)})
