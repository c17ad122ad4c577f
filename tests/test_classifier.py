# file: tests/test_classifier.py
from __future__ import annotations

import pytest

from numerus.core.classifier import (
    FORMAT_RULES,
    N11_SERVICES,
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
    service_info,
    split,
)
from numerus.core.errors import InvalidNumberFormatError
from numerus.core.types import (
    UNKNOWN_CLASSIFICATION,
    Classification,
    ExtractedNumber,
    Format,
    Region,
    SplitNadpNumber,
    TollState,
)

E164_DIDS = ["+12065551212", "+4402955555555"]
NPAN_DIDS = ["2065551212"]
ONE_NPAN_DIDS = ["12065551212"]
TOLLFREE_DIDS = [
    "+18005551212",
    "+18885551212",
    "+18775551212",
    "+18665551212",
    "+18555551212",
    "+18445551212",
    "+18335551212",
    "18005551212",
    "8885551212",
]
PREMIUM_DIDS = ["+19005551212", "19005551212", "9005551212"]
GARBAGE = [None, "randomstr", 1923, 0.0449]


@pytest.mark.parametrize("did", E164_DIDS)
def test_is_e164_matches(did: str) -> None:
    assert is_e164(did) is True


@pytest.mark.parametrize("did", NPAN_DIDS + ONE_NPAN_DIDS)
def test_is_e164_rejects_national_forms(did: str) -> None:
    assert is_e164(did) is False


def test_npan_and_1npan_are_exclusive() -> None:
    for did in NPAN_DIDS:
        assert is_npan(did) and not is_1npan(did)
    for did in ONE_NPAN_DIDS:
        assert is_1npan(did) and not is_npan(did)
    for did in E164_DIDS:
        assert not is_npan(did) and not is_1npan(did)


@pytest.mark.parametrize("did", TOLLFREE_DIDS)
def test_is_tollfree(did: str) -> None:
    assert is_tollfree(did) is True


@pytest.mark.parametrize("did", PREMIUM_DIDS)
def test_is_premium(did: str) -> None:
    assert is_premium(did) is True
    assert is_tollfree(did) is False


def test_grammar_edges() -> None:
    assert is_n11("911") and not is_n11("111") and not is_n11("9111")
    assert is_shortcode("98765") and is_shortcode("987654")
    assert not is_shortcode("18765") and not is_shortcode("9876543")
    # Area codes and exchanges never start with 0 or 1.
    assert not is_nadp("1065551212") and not is_nadp("2061551212")
    assert is_nadp_e164("+12065551212") and not is_nadp_e164("2065551212")
    assert is_usintl("011442083661177") and is_intl("011442083661177")
    assert not is_usintl("+12065551212")


@pytest.mark.parametrize(
    "predicate",
    [is_n11, is_e164, is_nadp, is_npan, is_1npan, is_shortcode, is_tollfree, is_premium, is_usintl, is_intl],
)
def test_predicates_reject_non_strings(predicate) -> None:
    for value in (None, 2065551212, 0.0449, b"+12065551212"):
        assert predicate(value) is False


def test_classify_nadp_e164_standard() -> None:
    assert classify("+12065551212") == Classification(
        region=Region.NADP, format=Format.E164, tollstate=TollState.STANDARD
    )


def test_classify_tollfree_wins_over_standard() -> None:
    c = classify("18005551212")
    assert c.tollstate is TollState.TOLLFREE
    assert c.region is Region.NADP
    assert c.format is Format.ONE_NPAN


def test_classify_premium() -> None:
    c = classify("9005551212")
    assert (c.region, c.format, c.tollstate) == (Region.NADP, Format.NPAN, TollState.PREMIUM)


def test_classify_n11_service_codes() -> None:
    c = classify("911")
    assert (c.region, c.format, c.tollstate) == (Region.NADP, Format.N11, TollState.SERVICE_CODE)
    assert c.service_code == "emergency"
    assert c.tollstate_label == "emergency"
    assert classify("411").service_code == "directory_info"
    assert classify("211").to_dict() == {"region": "nadp", "format": "n11", "tollstate": "service"}


def test_service_table_includes_address_check() -> None:
    # 933 is in the table but outside the N11 grammar.
    assert service_info("933") == N11_SERVICES["933"]
    assert service_info("933").code == "address_check"
    assert classify("933") == UNKNOWN_CLASSIFICATION
    assert service_info("999") is None
    assert service_info(911) is None


def test_classify_shortcode() -> None:
    c = classify("98765")
    assert (c.region, c.format, c.tollstate) == (Region.NADP, Format.SHORTCODE, TollState.SHORTCODE)


def test_classify_international() -> None:
    c = classify("+96824560742")
    assert (c.region, c.format, c.tollstate) == (
        Region.INTERNATIONAL,
        Format.E164,
        TollState.INTERNATIONAL,
    )
    c = classify("011442083661177")
    assert (c.region, c.format, c.tollstate) == (
        Region.INTERNATIONAL,
        Format.US_INTL,
        TollState.INTERNATIONAL,
    )


@pytest.mark.parametrize("value", GARBAGE + ["", "+", "0112"])
def test_classify_garbage_is_unknown(value: object) -> None:
    assert classify(value) == UNKNOWN_CLASSIFICATION


def test_classify_is_pure() -> None:
    for did in E164_DIDS + NPAN_DIDS + TOLLFREE_DIDS + ["911", "98765", "randomstr"]:
        assert classify(did) == classify(did)


def test_format_rules_cover_every_known_format() -> None:
    covered = {fmt for _, fmt in FORMAT_RULES}
    assert covered == set(Format) - {Format.UNKNOWN}


@pytest.mark.parametrize(
    ("did", "expected"),
    [
        ("+96824560742", ExtractedNumber("968", "24560742")),
        ("+4402955555555", ExtractedNumber("44", "02955555555")),
        ("011442083661177", ExtractedNumber("44", "2083661177")),
        ("+999123", ExtractedNumber("999", "123")),
        ("+99912345678", ExtractedNumber("999", "12345678")),
        ("+2812345678901", ExtractedNumber("281", "2345678901")),
        ("+80123456789", ExtractedNumber("801", "23456789")),
        ("+12065551212", ExtractedNumber("1", "2065551212")),
        ("2063130566", ExtractedNumber("1", "2063130566")),
        ("12063130566", ExtractedNumber("1", "2063130566")),
        ("911", ExtractedNumber("1", "911")),
    ],
)
def test_extract(did: str, expected: ExtractedNumber) -> None:
    assert extract(did) == expected


@pytest.mark.parametrize("value", GARBAGE + ["98765", "+", "+44", "+999"])
def test_extract_rejects_unparseable(value: object) -> None:
    with pytest.raises(InvalidNumberFormatError):
        extract(value)


def test_split_nadp_number() -> None:
    assert split("+12063130566") == SplitNadpNumber("206", "313", "0566")


@pytest.mark.parametrize("did", ["2063130566", "12063130566", "+12063130566", "+18005551212"])
def test_split_reassembles_digits(did: str) -> None:
    parts = split(did)
    prefix = did[: len(did) - 10]
    assert prefix in ("", "1", "+1")
    assert prefix + parts.digits() == did
    assert classify(did).region is Region.NADP


@pytest.mark.parametrize("value", [None, 2063130566, "+96824560742", "98765", "randomstr"])
def test_split_rejects_non_nadp(value: object) -> None:
    with pytest.raises(InvalidNumberFormatError):
        split(value)
