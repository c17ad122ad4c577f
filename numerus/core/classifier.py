# file: numerus/core/classifier.py
"""
Did classification.

A did is classified into a region (NADP, international), a surface format
(E.164, NPAN, 1NPAN, US international, shortcode, N11) and a toll state. The
grammar predicates below are independent and may overlap; precedence between
them lives only in the ordered rule tuples used by `classify`.

All functions are pure. Predicates return False for non-string input.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, TypeVar

import phonenumbers

from numerus.core.errors import InvalidNumberFormatError
from numerus.core.types import (
    UNKNOWN_CLASSIFICATION,
    Classification,
    ExtractedNumber,
    Format,
    Region,
    ServiceCode,
    SplitNadpNumber,
    TollState,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Patterns are applied with `fullmatch`. `[0-9]` rather than `\d` keeps
# non-ASCII digits out.
_NADP = re.compile(
    r"(?:\+1|1)?(?P<area_code>[2-9][0-9]{2})(?P<exchange>[2-9][0-9]{2})(?P<subscriber>[0-9]{4})"
)
_INTL = re.compile(r"011[2-9][0-9][0-9]{8,13}")
_US_INTL = re.compile(r"(?:011|\+)[2-9][0-9]{5,16}")
_SHORTCODE = re.compile(r"[2-9][0-9]{4,5}")
_TOLLFREE = re.compile(r"(?:\+1|1)?(?:800|888|877|866|855|844|833)[2-9][0-9]{2}[0-9]{4}")
_PREMIUM = re.compile(r"(?:\+1|1)?900[2-9][0-9]{2}[0-9]{4}")
_E164 = re.compile(r"\+[1-9][0-9][0-9]{8,13}")
_NPAN = re.compile(r"[2-9][0-9]{2}[2-9][0-9]{6}")
_ONE_NPAN = re.compile(r"1[2-9][0-9]{2}[2-9][0-9]{6}")
_N11 = re.compile(r"[2-9]11")

_DIALABLE = re.compile(r"(?:\+|011)(?P<digits>[0-9]+)")
_HAS_DIGIT = re.compile(r"[0-9]")

# Assigned country calling codes, including non-geographic ones (800, 882, ...).
_COUNTRY_CODES: frozenset[str] = frozenset(
    str(cc) for cc in phonenumbers.COUNTRY_CODE_TO_REGION_CODE
)
_MAX_NATIONAL_DIGITS = 14

# ITU numbering zones: which leading digits form 3, 2 and 1 digit calling codes.
# Covers codes that are spare or not yet assigned.
_ZONE_CALLING_CODE = re.compile(
    r"(?P<country_code>9[976]\d|8[987530]\d|6[987]\d|5[90]\d|42\d|3[875]\d|2[98654321]\d"
    r"|9[8543210]|8[6421]|6[6543210]|5[87654321]|4[987654310]|3[9643210]|2[70]|7|1)"
    r"(?P<national_number>\d{1,14})"
)

N11_SERVICES: dict[str, ServiceCode] = {
    entry.did: entry
    for entry in (
        ServiceCode("211", "Community Services", "service"),
        ServiceCode("311", "Municipal Government Services", "service"),
        ServiceCode("411", "Directory Information", "directory_info"),
        ServiceCode("511", "Traffic Information", "traffic_info"),
        ServiceCode("611", "Telco Customer Service & Repair", "support"),
        ServiceCode("711", "TDD and Relay", "tdd"),
        ServiceCode("811", "Public Utility Location", "utility"),
        ServiceCode("911", "Emergency Services", "emergency"),
        ServiceCode("933", "Emergency Address Verification", "address_check"),
    )
}


def _matches(pattern: re.Pattern[str], did: object) -> bool:
    return isinstance(did, str) and pattern.fullmatch(did) is not None


# -- grammar predicates -- #


def is_n11(did: object) -> bool:
    """Return True for a 3-digit N11 service code (211, 911, ...)."""

    return _matches(_N11, did)


def is_e164(did: object) -> bool:
    """Return True for `+` followed by 10 to 15 digits, the first one non-zero."""

    return _matches(_E164, did)


def is_nadp(did: object) -> bool:
    """Return True if the did belongs to the North American Dial Plan."""

    return _matches(_NADP, did)


def is_nadp_e164(did: object) -> bool:
    return is_nadp(did) and is_e164(did)


def is_npan(did: object) -> bool:
    return _matches(_NPAN, did)


def is_1npan(did: object) -> bool:
    return _matches(_ONE_NPAN, did)


def is_shortcode(did: object) -> bool:
    """Return True for a 5 or 6 digit US shortcode."""

    return _matches(_SHORTCODE, did)


def is_tollfree(did: object) -> bool:
    return is_nadp(did) and _matches(_TOLLFREE, did)


def is_premium(did: object) -> bool:
    """Return True for a premium-rate (900) NADP number."""

    return _matches(_PREMIUM, did)


def is_usintl(did: object) -> bool:
    """Return True for an international did dialled as `011...` or `+...` (non-NADP)."""

    return _matches(_US_INTL, did)


def is_intl(did: object) -> bool:
    """Return True if the did is outside the NADP."""

    return _matches(_INTL, did) or is_usintl(did)


# -- precedence rules -- #

Rule = tuple[Callable[[object], bool], T]

FORMAT_RULES: tuple[Rule[Format], ...] = (
    (is_n11, Format.N11),
    (is_e164, Format.E164),
    (is_npan, Format.NPAN),
    (is_1npan, Format.ONE_NPAN),
    (is_shortcode, Format.SHORTCODE),
    (is_usintl, Format.US_INTL),
)

REGION_RULES: tuple[Rule[Region], ...] = (
    (is_n11, Region.NADP),
    (is_nadp, Region.NADP),
    (is_shortcode, Region.NADP),
    (is_usintl, Region.INTERNATIONAL),
    (is_intl, Region.INTERNATIONAL),
)

# TollFree and Premium are checked before the generic NADP rule so they win.
TOLLSTATE_RULES: tuple[Rule[TollState], ...] = (
    (is_tollfree, TollState.TOLLFREE),
    (is_shortcode, TollState.SHORTCODE),
    (is_n11, TollState.SERVICE_CODE),
    (is_premium, TollState.PREMIUM),
    (is_nadp, TollState.STANDARD),
    (is_usintl, TollState.INTERNATIONAL),
    (is_intl, TollState.INTERNATIONAL),
)


def _first_match(rules: tuple[Rule[T], ...], did: object, default: T) -> T:
    for predicate, result in rules:
        if predicate(did):
            return result
    return default


def format_of(did: object) -> Format:
    return _first_match(FORMAT_RULES, did, Format.UNKNOWN)


def region_of(did: object) -> Region:
    return _first_match(REGION_RULES, did, Region.UNKNOWN)


def tollstate_of(did: object) -> TollState:
    return _first_match(TOLLSTATE_RULES, did, TollState.UNKNOWN)


def service_info(did: object) -> ServiceCode | None:
    """Return the N11 table entry for `did`, if any."""

    if not isinstance(did, str):
        return None
    return N11_SERVICES.get(did)


def classify(did: object) -> Classification:
    """
    Classify a did into region, format and toll state.

    Never raises: anything that matches no grammar rule (including non-string
    input) yields the all-unknown classification.
    """

    if not isinstance(did, str):
        return UNKNOWN_CLASSIFICATION

    tollstate = tollstate_of(did)
    service_code: str | None = None
    if tollstate is TollState.SERVICE_CODE:
        entry = service_info(did)
        service_code = entry.code if entry is not None else "unknown"

    return Classification(
        region=region_of(did),
        format=format_of(did),
        tollstate=tollstate,
        service_code=service_code,
    )


# -- decomposition -- #


def _dialable_form(did: str) -> str:
    # NPAN/1NPAN dids carry an implicit NADP country code.
    if is_npan(did):
        return f"+1{did}"
    if is_1npan(did):
        return f"+{did}"
    return did


def _split_country_code(digits: str) -> ExtractedNumber | None:
    for width in (3, 2, 1):
        country_code, national = digits[:width], digits[width:]
        if country_code not in _COUNTRY_CODES:
            continue
        if 1 <= len(national) <= _MAX_NATIONAL_DIGITS:
            return ExtractedNumber(country_code=country_code, national_number=national)
        return None

    m = _ZONE_CALLING_CODE.fullmatch(digits)
    if m is None:
        return None
    return ExtractedNumber(
        country_code=m.group("country_code"), national_number=m.group("national_number")
    )


def extract(did: object) -> ExtractedNumber:
    """
    Split a did into country calling code and national number.

    N11 dids always report country code "1" with the did itself as the number.
    Otherwise the `+`/`011` prefix is removed and the longest assigned calling
    code (3, then 2, then 1 digits) is taken from the front. Unassigned codes
    are split by numbering zone, so "+999123" gives ("999", "123").

    Raises:
        InvalidNumberFormatError: non-string input, no digits, no `+`/`011`
            prefix after NADP lifting, or no calling code matches.
    """

    if not isinstance(did, str):
        raise InvalidNumberFormatError(f"Cannot extract from {type(did).__name__}")

    if is_n11(did):
        return ExtractedNumber(country_code="1", national_number=did)

    if _HAS_DIGIT.search(did) is None:
        raise InvalidNumberFormatError(f"Not a telephone number: {did!r}")

    m = _DIALABLE.fullmatch(_dialable_form(did))
    if m is None:
        raise InvalidNumberFormatError(f"No international prefix in {did!r}")

    extracted = _split_country_code(m.group("digits"))
    if extracted is None:
        raise InvalidNumberFormatError(f"Unrecognized country calling code in {did!r}")
    return extracted


def split(did: object) -> SplitNadpNumber:
    """
    Split a NADP did into area code, exchange and subscriber number.

    Raises:
        InvalidNumberFormatError: if the did is not NADP shaped.
    """

    m = _NADP.fullmatch(did) if isinstance(did, str) else None
    if m is None:
        raise InvalidNumberFormatError(f"Not a NADP number: {did!r}")
    return SplitNadpNumber(
        area_code=m.group("area_code"),
        exchange=m.group("exchange"),
        subscriber=m.group("subscriber"),
    )
