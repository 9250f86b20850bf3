"""Locale handling shared by every review view.

A single rule decides which side of a bilingual value is displayed, and the
locale also fixes the text direction. Both are computed here so views never
branch on the locale themselves.
"""

from enum import Enum
from typing import Dict, Optional, Union


class Locale(str, Enum):
    """Supported display locales."""
    EN = "en"
    AR = "ar"


class TextDirection(str, Enum):
    LTR = "ltr"
    RTL = "rtl"


LocaleLike = Union[Locale, str]


def resolve_locale(value: Optional[LocaleLike], default: Locale = Locale.EN) -> Locale:
    """Coerce a raw locale value into a supported Locale.

    Regional variants (``ar-AE``, ``en_US``) map to their language; anything
    unsupported falls back to ``default``.
    """
    if isinstance(value, Locale):
        return value
    if not value:
        return default
    language = str(value).strip().lower().replace("_", "-").split("-")[0]
    try:
        return Locale(language)
    except ValueError:
        return default


def text_direction(locale: LocaleLike) -> TextDirection:
    """Arabic renders right-to-left, everything else left-to-right."""
    return TextDirection.RTL if resolve_locale(locale) is Locale.AR else TextDirection.LTR


def pick_localized(
    value_en: Optional[str],
    value_ar: Optional[str],
    locale: LocaleLike,
) -> str:
    """Pick the displayed side of a bilingual value.

    The Arabic value wins only when the locale is Arabic, the Arabic value is
    non-empty and it differs from the English value. Otherwise the English
    value is shown, unless it is empty, in which case the Arabic value stands
    in for it.

    Args:
        value_en: English/default value
        value_ar: Arabic value
        locale: Active locale

    Returns:
        str: The string to display (possibly empty)
    """
    english = value_en or ""
    arabic = value_ar or ""

    if resolve_locale(locale) is Locale.AR and arabic and arabic != english:
        return arabic
    if not english and arabic:
        return arabic
    return english


def alternate_localized(
    value_en: Optional[str],
    value_ar: Optional[str],
    locale: LocaleLike,
) -> Optional[str]:
    """Return the side of a bilingual value that is not displayed.

    Used for the secondary line under party names and clause titles. None
    when both sides are equal or one is missing.
    """
    english = value_en or ""
    arabic = value_ar or ""
    if not english or not arabic or english == arabic:
        return None
    shown = pick_localized(english, arabic, locale)
    return english if shown == arabic else arabic


UI_LABELS: Dict[str, Dict[str, str]] = {
    "title": {"en": "Extraction Results", "ar": "نتائج الاستخراج"},
    "summary": {"en": "Summary", "ar": "ملخص"},
    "parties": {"en": "Parties", "ar": "الأطراف"},
    "financials": {"en": "Financials", "ar": "المالية"},
    "dates": {"en": "Dates", "ar": "التواريخ"},
    "clauses": {"en": "Clauses", "ar": "البنود"},
    "warnings": {"en": "Warnings", "ar": "تحذيرات"},
    "notes": {"en": "Notes", "ar": "ملاحظات"},
    "key_terms": {"en": "Key Terms", "ar": "المصطلحات الرئيسية"},
    "jurisdiction": {"en": "Jurisdiction", "ar": "الاختصاص القضائي"},
    "use_as_party_a": {"en": "Use as Party A", "ar": "استخدم كطرف أول"},
    "use_as_party_b": {"en": "Use as Party B", "ar": "استخدم كطرف ثاني"},
    "use_clause": {"en": "Use Clause", "ar": "استخدم البند"},
    "use_amount": {"en": "Use Amount", "ar": "استخدم المبلغ"},
    "use_dates": {"en": "Use Dates", "ar": "استخدم التواريخ"},
    "copy": {"en": "Copy", "ar": "نسخ"},
    "copied": {"en": "Copied", "ar": "تم النسخ"},
    "confidence": {"en": "Confidence", "ar": "الثقة"},
    "no_data": {"en": "No data found", "ar": "لا توجد بيانات"},
    "no_warnings": {"en": "No warnings found", "ar": "لا توجد تحذيرات"},
    "currency": {"en": "Currency", "ar": "العملة"},
    "payment_terms": {"en": "Payment Terms", "ar": "شروط الدفع"},
    "effective_date": {"en": "Effective Date", "ar": "تاريخ السريان"},
    "start_date": {"en": "Start Date", "ar": "تاريخ البدء"},
    "end_date": {"en": "End Date", "ar": "تاريخ الانتهاء"},
    "signature_date": {"en": "Signature Date", "ar": "تاريخ التوقيع"},
    "notice_period": {"en": "Notice Period", "ar": "فترة الإشعار"},
    "renewal_date": {"en": "Renewal Date", "ar": "تاريخ التجديد"},
    "critical": {"en": "Critical", "ar": "هام"},
    "id_number": {"en": "ID", "ar": "رقم الهوية"},
    "nationality": {"en": "Nationality", "ar": "الجنسية"},
    "phone": {"en": "Phone", "ar": "الهاتف"},
    "email": {"en": "Email", "ar": "البريد الإلكتروني"},
    "unknown_document": {"en": "Unknown", "ar": "غير معروف"},
}


def label(key: str, locale: LocaleLike) -> str:
    """Look up a UI label for the locale, falling back to English then the key."""
    entry = UI_LABELS.get(key)
    if not entry:
        return key
    return pick_localized(entry.get("en"), entry.get("ar"), locale) or key
