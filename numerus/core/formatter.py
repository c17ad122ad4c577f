# file: numerus/core/formatter.py
"""
Format conversion and pretty printing.

Conversions are driven by the did's current classification through an explicit
matrix (current format -> target format -> transform). A conversion outside the
number's region (e.g. an international number to NPAN) raises
`InvalidFormatError` instead of producing a malformed string.

Pretty printing (`format`) is best effort and never fails on a string: any did
it cannot split or extract is returned unchanged. This hides some invalid input
on purpose; use `classify` or the `to_*` conversions when validation matters.
"""

from __future__ import annotations

import logging
from typing import Callable

from numerus.core.classifier import classify, extract, split
from numerus.core.errors import InvalidFormatError, InvalidNumberError, InvalidNumberFormatError
from numerus.core.types import Format, Region

logger = logging.getLogger(__name__)

Transform = Callable[[str], str]

_SHORT_FORMATS = frozenset({Format.SHORTCODE, Format.N11})
_NADP_FORMATS = frozenset({Format.E164, Format.NPAN, Format.ONE_NPAN})


def _same(did: str) -> str:
    return did


def _prepend(prefix: str) -> Transform:
    def transform(did: str) -> str:
        return f"{prefix}{did}"

    return transform


def _replace_prefix(old: str, new: str) -> Transform:
    def transform(did: str) -> str:
        if did.startswith(old):
            return f"{new}{did[len(old):]}"
        return did

    return transform


# Missing entries are unsupported conversions.
CONVERSIONS: dict[Format, dict[Format, Transform]] = {
    Format.E164: {
        Format.E164: _same,
        Format.NPAN: _replace_prefix("+1", ""),
        Format.ONE_NPAN: _replace_prefix("+", ""),
        Format.US_INTL: _replace_prefix("+", "011"),
    },
    Format.NPAN: {
        Format.E164: _prepend("+1"),
        Format.NPAN: _same,
        Format.ONE_NPAN: _prepend("1"),
    },
    Format.ONE_NPAN: {
        Format.E164: _prepend("+"),
        Format.NPAN: _replace_prefix("1", ""),
        Format.ONE_NPAN: _same,
    },
    Format.US_INTL: {
        Format.E164: _replace_prefix("011", "+"),
        Format.US_INTL: _same,
    },
    Format.SHORTCODE: {Format.SHORTCODE: _same},
    Format.N11: {Format.SHORTCODE: _same},
    Format.UNKNOWN: {},
}

# Targets only reachable from one region.
TARGET_REGIONS: dict[Format, Region] = {
    Format.NPAN: Region.NADP,
    Format.ONE_NPAN: Region.NADP,
    Format.US_INTL: Region.INTERNATIONAL,
}

TARGET_FORMATS = (Format.E164, Format.NPAN, Format.ONE_NPAN, Format.US_INTL, Format.SHORTCODE)


def convert(did: object, target: Format) -> str:
    """
    Convert `did` into the `target` format.

    Raises:
        InvalidFormatError: non-string input, or the conversion is not defined
            for the did's current format/region.
    """

    if not isinstance(did, str):
        raise InvalidFormatError(f"Cannot convert {type(did).__name__}")

    classification = classify(did)
    required_region = TARGET_REGIONS.get(target)
    if required_region is not None and classification.region is not required_region:
        raise InvalidFormatError(
            f"{did!r} is {classification.region.value}; {target.value} requires "
            f"{required_region.value}"
        )

    transform = CONVERSIONS[classification.format].get(target)
    if transform is None:
        raise InvalidFormatError(
            f"Cannot convert {did!r} from {classification.format.value} to {target.value}"
        )
    return transform(did)


def to_e164(did: object) -> str:
    return convert(did, Format.E164)


def to_npan(did: object) -> str:
    return convert(did, Format.NPAN)


def to_1npan(did: object) -> str:
    return convert(did, Format.ONE_NPAN)


def to_usintl(did: object) -> str:
    return convert(did, Format.US_INTL)


def to_shortcode(did: object) -> str:
    return convert(did, Format.SHORTCODE)


def normalize(did: object, target: Format | str | None = None) -> str:
    """
    Normalize a did.

    Without a target the did is converted to E.164, except shortcodes and N11
    service codes which are returned unchanged. With a target, the conversion
    matrix decides.

    Raises:
        InvalidFormatError: unknown target, or an unsupported conversion.
    """

    if target is None:
        if isinstance(did, str) and classify(did).format in _SHORT_FORMATS:
            return did
        return to_e164(did)

    try:
        fmt = Format(target)
    except ValueError as exc:
        raise InvalidFormatError(f"Unknown target format: {target!r}") from exc
    if fmt not in TARGET_FORMATS:
        raise InvalidFormatError(f"Unsupported target format: {fmt.value}")
    return convert(did, fmt)


def format(did: object, region: Region | str | None = None) -> str:
    """
    Pretty print a did.

    NADP numbers render as "+1 (AAA) EEE SSSS", international numbers as
    "+<country code> <number>". Shortcodes, N11 codes and anything that cannot
    be decomposed are returned unchanged. `region` overrides the classified
    region.

    Raises:
        InvalidNumberError: if `did` is not a string.
        InvalidFormatError: if `region` is not a known region.
    """

    if not isinstance(did, str):
        raise InvalidNumberError(f"Expected a string did, got {type(did).__name__}")

    classification = classify(did)
    if classification.format in _SHORT_FORMATS:
        return did

    try:
        effective = Region(region) if region is not None else classification.region
    except ValueError as exc:
        raise InvalidFormatError(f"Unknown region: {region!r}") from exc

    if effective is Region.NADP and classification.format in _NADP_FORMATS:
        try:
            parts = split(did)
        except InvalidNumberFormatError:
            logger.debug("Cannot split %r as NADP; returning unchanged", did)
            return did
        return f"+1 ({parts.area_code}) {parts.exchange} {parts.subscriber}"

    if effective is Region.INTERNATIONAL:
        try:
            extracted = extract(did)
        except InvalidNumberFormatError:
            logger.debug("Cannot extract country code from %r; returning unchanged", did)
            return did
        return f"+{extracted.country_code} {extracted.national_number}"

    return did
