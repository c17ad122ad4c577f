# file: numerus/provider.py
"""
Reference-data lookup contract.

The metadata assembler only needs a synchronous `get(namespace, key)` that
returns the stored mapping or None. `numerus.cache.ReferenceCache` is the
bundled implementation; tests use plain in-memory fakes.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping, Protocol

from numerus.core.errors import NotFoundError
from numerus.core.types import CountryMetadata, NadpMetadata


class Namespace(str, Enum):
    COUNTRY = "country"
    NADP = "nadp"


class MetadataProvider(Protocol):
    def get(self, namespace: str, key: str) -> Mapping[str, str] | None:
        """
        Return the value stored under `key` in `namespace`, or None.

        Namespaces:
            country: calling code (e.g. "968") -> {iso, iso3, name}
            nadp: area code (e.g. "201") -> {country_iso, country_name, state_iso, state_name}
        """

        ...


def _key(value: object) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    return None


def _lookup(provider: MetadataProvider, namespace: Namespace, key: object) -> Mapping[str, str]:
    k = _key(key)
    value = provider.get(namespace.value, k) if k is not None else None
    if value is None:
        raise NotFoundError(f"No {namespace.value} metadata for {key!r}")
    return value


def country_metadata(provider: MetadataProvider, phonecode: object) -> CountryMetadata:
    """
    Return country metadata for a calling code ("968" or 968).

    NADP countries (calling code 1) are not part of the country table.

    Raises:
        NotFoundError: unknown code or unsupported key type.
    """

    value = _lookup(provider, Namespace.COUNTRY, phonecode)
    return CountryMetadata(
        iso2=str(value.get("iso") or ""),
        iso3=str(value.get("iso3") or ""),
        name=str(value.get("name") or ""),
    )


def nadp_metadata(provider: MetadataProvider, area_code: object) -> NadpMetadata:
    """
    Return reference data for a NADP area code ("201" or 201).

    Raises:
        NotFoundError: unknown area code or unsupported key type.
    """

    value = _lookup(provider, Namespace.NADP, area_code)
    return NadpMetadata(
        country_iso=str(value.get("country_iso") or ""),
        country_name=str(value.get("country_name") or ""),
        state_iso=str(value.get("state_iso") or ""),
        state_name=str(value.get("state_name") or ""),
    )
