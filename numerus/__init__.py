# file: numerus/__init__.py
"""
numerus - telephone number (did) classification and conversion.

Classify a did into region, format and toll state, convert it between E.164
and the North American Dial Plan formats (NPAN, 1NPAN, US international), pretty
print it, and enrich it with country and state metadata.
"""

from __future__ import annotations

from numerus.core.classifier import (
    classify,
    extract,
    is_1npan,
    is_e164,
    is_intl,
    is_n11,
    is_nadp,
    is_nadp_e164,
    is_npan,
    is_premium,
    is_shortcode,
    is_tollfree,
    is_usintl,
    split,
)
from numerus.core.formatter import format, normalize, to_1npan, to_e164, to_npan, to_usintl
from numerus.core.metadata import MetadataAssembler, metadata
from numerus.core.types import Classification, Format, Metadata, Region, TollState

__all__ = [
    "__version__",
    "version",
    "classify",
    "extract",
    "split",
    "normalize",
    "format",
    "metadata",
    "to_e164",
    "to_npan",
    "to_1npan",
    "to_usintl",
    "is_e164",
    "is_npan",
    "is_1npan",
    "is_nadp",
    "is_nadp_e164",
    "is_n11",
    "is_shortcode",
    "is_tollfree",
    "is_premium",
    "is_usintl",
    "is_intl",
    "MetadataAssembler",
    "Classification",
    "Format",
    "Metadata",
    "Region",
    "TollState",
]

__version__ = "0.3.0"


def version() -> str:
    return f"numerus-{__version__}"
