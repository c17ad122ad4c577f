# file: numerus/core/metadata.py
"""
Metadata assembly.

Combines classification, formatting and reference-data lookups into a
`Metadata` record. Reference-data misses never fail the call; they degrade the
record to empty enrichment. Only dids that cannot be decomposed raise.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Callable

from numerus.core import classifier, formatter
from numerus.core.errors import InvalidNumberError, InvalidNumberFormatError, NotFoundError
from numerus.core.types import Classification, Format, Metadata, Place
from numerus.provider import MetadataProvider, country_metadata, nadp_metadata

logger = logging.getLogger(__name__)

# Shortcodes, N11 and toll-free numbers are attributed to the US.
UNITED_STATES = Place(name="United States", iso="US")

STATE_COUNTRIES = frozenset({"US", "CA"})


class MetadataAssembler:
    """Build enrichment records for dids using an injected `MetadataProvider`."""

    def __init__(self, provider: MetadataProvider) -> None:
        self._provider = provider
        self._handlers: dict[Format, Callable[[str, Classification], Metadata]] = {
            Format.UNKNOWN: self._unclassified,
            Format.SHORTCODE: self._short_number,
            Format.N11: self._short_number,
            Format.US_INTL: self._international,
            Format.E164: self._e164,
            Format.NPAN: self._national,
            Format.ONE_NPAN: self._national,
        }

    def metadata(self, did: object) -> Metadata:
        """
        Return the metadata record for `did`.

        Raises:
            InvalidNumberError: `did` is not a string.
            InvalidNumberFormatError: the did classifies but cannot be split
                or extracted.
        """

        if not isinstance(did, str):
            raise InvalidNumberError(f"Expected a string did, got {type(did).__name__}")

        classification = classifier.classify(did)
        handler = self._handlers.get(classification.format)
        if handler is None:
            raise InvalidNumberFormatError(f"No metadata for format {classification.format.value}")
        return handler(did, classification)

    # -- handlers -- #

    def _unclassified(self, did: str, classification: Classification) -> Metadata:
        return Metadata(did=did, normalized=did, formatted=did, classification=classification)

    def _short_number(self, did: str, classification: Classification) -> Metadata:
        return Metadata(
            did=did,
            normalized=did,
            formatted=did,
            classification=classification,
            country=UNITED_STATES,
        )

    def _enriched(
        self,
        did: str,
        classification: Classification,
        *,
        country: Place | None = None,
        state: Place | None = None,
    ) -> Metadata:
        return Metadata(
            did=did,
            normalized=formatter.normalize(did),
            formatted=formatter.format(did),
            classification=classification,
            country=country,
            state=state,
        )

    def _international(self, did: str, classification: Classification) -> Metadata:
        extracted = classifier.extract(did)
        try:
            country = country_metadata(self._provider, extracted.country_code)
        except NotFoundError:
            logger.debug("No country metadata for calling code %s", extracted.country_code)
            place = Place()
        else:
            place = Place(name=country.name, iso=country.iso2)
        return self._enriched(did, classification, country=place)

    def _e164(self, did: str, classification: Classification) -> Metadata:
        if classifier.is_tollfree(did):
            return self._enriched(did, classification, country=UNITED_STATES)
        if classifier.is_intl(did):
            return self._international(did, classification)

        parts = classifier.split(did)
        try:
            nadp = nadp_metadata(self._provider, parts.area_code)
        except NotFoundError:
            logger.debug("No NADP metadata for area code %s", parts.area_code)
            return self._enriched(did, classification)

        country = Place(name=nadp.country_name, iso=nadp.country_iso)
        if nadp.country_iso in STATE_COUNTRIES:
            state = Place(name=nadp.state_name, iso=nadp.state_iso)
            return self._enriched(did, classification, country=country, state=state)
        return self._enriched(did, classification, country=country)

    def _national(self, did: str, classification: Classification) -> Metadata:
        e164 = formatter.to_e164(did)
        result = self._e164(e164, classifier.classify(e164))
        return dataclasses.replace(result, did=did, classification=classification)


def metadata(did: object, *, provider: MetadataProvider) -> Metadata:
    """Shortcut for `MetadataAssembler(provider).metadata(did)`."""

    return MetadataAssembler(provider).metadata(did)
