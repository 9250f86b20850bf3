"""Display metadata for clause types.

This mapper is the single source of truth for the label and color of each
clause category. Values outside the closed enumeration always resolve to the
``other`` entry.
"""

from dataclasses import dataclass
from typing import Any, Dict

from legaldocs.schemas.extraction import ClauseType
from legaldocs.utils.localization import LocaleLike, pick_localized


@dataclass(frozen=True)
class ClauseTypeInfo:
    en: str
    ar: str
    color: str


class ClauseTypeMapper:
    """Maps clause types to their bilingual labels and badge colors."""

    CLAUSE_TYPE_INFO: Dict[ClauseType, ClauseTypeInfo] = {
        ClauseType.PREAMBLE: ClauseTypeInfo("Preamble", "التمهيد", "bg-blue-100 text-blue-800"),
        ClauseType.RECITAL: ClauseTypeInfo("Recital", "المقدمة", "bg-indigo-100 text-indigo-800"),
        ClauseType.DEFINITION: ClauseTypeInfo("Definition", "تعريف", "bg-purple-100 text-purple-800"),
        ClauseType.OBLIGATION: ClauseTypeInfo("Obligation", "التزام", "bg-orange-100 text-orange-800"),
        ClauseType.RIGHT: ClauseTypeInfo("Right", "حق", "bg-green-100 text-green-800"),
        ClauseType.TERMINATION: ClauseTypeInfo("Termination", "إنهاء", "bg-red-100 text-red-800"),
        ClauseType.CONFIDENTIALITY: ClauseTypeInfo("Confidentiality", "سرية", "bg-yellow-100 text-yellow-800"),
        ClauseType.INDEMNITY: ClauseTypeInfo("Indemnity", "تعويض", "bg-pink-100 text-pink-800"),
        ClauseType.LIABILITY: ClauseTypeInfo("Liability", "مسؤولية", "bg-rose-100 text-rose-800"),
        ClauseType.DISPUTE: ClauseTypeInfo("Dispute", "نزاع", "bg-amber-100 text-amber-800"),
        ClauseType.GOVERNING_LAW: ClauseTypeInfo("Governing Law", "القانون", "bg-cyan-100 text-cyan-800"),
        ClauseType.SIGNATURE: ClauseTypeInfo("Signature", "توقيع", "bg-teal-100 text-teal-800"),
        ClauseType.WITNESS: ClauseTypeInfo("Witness", "شهود", "bg-emerald-100 text-emerald-800"),
        ClauseType.SCHEDULE: ClauseTypeInfo("Schedule", "جدول", "bg-slate-100 text-slate-800"),
        ClauseType.OTHER: ClauseTypeInfo("Other", "أخرى", "bg-gray-100 text-gray-800"),
    }

    @classmethod
    def info(cls, clause_type: Any) -> ClauseTypeInfo:
        """Get display metadata, falling back to ``other``.

        Args:
            clause_type: ClauseType or raw string

        Returns:
            ClauseTypeInfo: Labels and color for the type
        """
        return cls.CLAUSE_TYPE_INFO[ClauseType.coerce(clause_type)]

    @classmethod
    def label(cls, clause_type: Any, locale: LocaleLike) -> str:
        """Localized label for a clause type."""
        info = cls.info(clause_type)
        return pick_localized(info.en, info.ar, locale)

    @classmethod
    def color(cls, clause_type: Any) -> str:
        return cls.info(clause_type).color
