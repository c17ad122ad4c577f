# file: numerus/core/types.py
"""
Value types shared by the classifier, formatter and metadata assembler.

Everything here is immutable. Enum values are the lowercase tags used in the
external metadata record, so `Format.ONE_NPAN.value == "one_npan"`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Region(str, Enum):
    NADP = "nadp"
    INTERNATIONAL = "international"
    UNKNOWN = "unknown"


class Format(str, Enum):
    E164 = "e164"
    NPAN = "npan"
    ONE_NPAN = "one_npan"
    US_INTL = "us_intl"
    SHORTCODE = "shortcode"
    N11 = "n11"
    UNKNOWN = "unknown"


class TollState(str, Enum):
    TOLLFREE = "tollfree"
    PREMIUM = "premium"
    STANDARD = "standard"
    SHORTCODE = "shortcode"
    SERVICE_CODE = "service_code"
    INTERNATIONAL = "international"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class ServiceCode:
    """An entry of the N11 service table (e.g. 911 -> emergency)."""

    did: str
    description: str
    code: str


@dataclass(frozen=True, slots=True)
class Classification:
    """
    Region, format and toll state of a did.

    `service_code` is only set when `tollstate` is `TollState.SERVICE_CODE`; it
    holds the sub-code from the N11 table ("emergency", "directory_info", or
    "unknown" for an N11 number missing from the table).
    """

    region: Region
    format: Format
    tollstate: TollState
    service_code: str | None = None

    @property
    def tollstate_label(self) -> str:
        if self.tollstate is TollState.SERVICE_CODE:
            return self.service_code or "unknown"
        return self.tollstate.value

    def to_dict(self) -> dict[str, str]:
        return {
            "region": self.region.value,
            "format": self.format.value,
            "tollstate": self.tollstate_label,
        }


UNKNOWN_CLASSIFICATION = Classification(
    region=Region.UNKNOWN, format=Format.UNKNOWN, tollstate=TollState.UNKNOWN
)


@dataclass(frozen=True, slots=True)
class ExtractedNumber:
    country_code: str
    national_number: str

    def to_dict(self) -> dict[str, str]:
        return {"country_code": self.country_code, "national_number": self.national_number}


@dataclass(frozen=True, slots=True)
class SplitNadpNumber:
    area_code: str
    exchange: str
    subscriber: str

    def digits(self) -> str:
        return f"{self.area_code}{self.exchange}{self.subscriber}"

    def to_dict(self) -> dict[str, str]:
        return {"area_code": self.area_code, "exchange": self.exchange, "subscriber": self.subscriber}


@dataclass(frozen=True, slots=True)
class CountryMetadata:
    iso2: str
    iso3: str
    name: str


@dataclass(frozen=True, slots=True)
class NadpMetadata:
    """
    Reference data for a NADP area code.

    `state_iso`/`state_name` are empty strings for territories outside the US
    and Canada (e.g. Barbados, 246).
    """

    country_iso: str
    country_name: str
    state_iso: str
    state_name: str


@dataclass(frozen=True, slots=True)
class Place:
    name: str = ""
    iso: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "iso": self.iso}


@dataclass(frozen=True, slots=True)
class Metadata:
    """
    Enrichment record for a did.

    `country is None` means no reference data was attached (`"meta": {}` in the
    external record). A country without a state renders `"state": {}`.
    """

    did: str
    normalized: str
    formatted: str
    classification: Classification
    country: Place | None = None
    state: Place | None = None

    @property
    def region(self) -> Region:
        return self.classification.region

    @property
    def tollstate(self) -> str:
        return self.classification.tollstate_label

    def to_dict(self) -> dict[str, Any]:
        meta: dict[str, Any] = {}
        if self.country is not None:
            meta["country"] = self.country.to_dict()
            meta["state"] = self.state.to_dict() if self.state is not None else {}
        return {
            "did": self.did,
            "normalized": self.normalized,
            "formatted": self.formatted,
            "region": self.region.value,
            "tollstate": self.tollstate,
            "meta": meta,
        }
