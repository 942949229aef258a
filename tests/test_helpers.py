"""
Tests for app.helpers: locale text, HTML decoding, invitation codes and nicknames.
"""

import re
from datetime import datetime, timedelta, timezone

import pytest

from app.exceptions import ServiceUnavailableError
from app.helpers import (
    INVITATION_CODE_ALPHABET,
    as_utc,
    calculate_expires_at,
    decode_html_entities,
    decode_localized_text,
    generate_invitation_code,
    generate_nickname,
    get_first_available_text,
    get_localized_text,
    has_any_localized_text,
    is_internal_email,
    locale_to_lang_code,
    parse_localized_text,
)


# ---------------------------------------------------------------------------
# Locale text
# ---------------------------------------------------------------------------


def test_parse_localized_text_ignores_non_mappings():
    assert parse_localized_text(None) == {}
    assert parse_localized_text("Seoul Clinic") == {}
    assert parse_localized_text({"ko_KR": "서울"}) == {"ko_KR": "서울"}


def test_get_localized_text_returns_empty_string_when_missing():
    name = {"ko_KR": "서울성형외과", "en_US": "Seoul Plastic Surgery"}
    assert get_localized_text(name, "en_US") == "Seoul Plastic Surgery"
    assert get_localized_text(name) == "서울성형외과"
    assert get_localized_text(name, "ja_JP") == ""
    assert get_localized_text(None) == ""


def test_get_first_available_text_follows_locale_priority():
    assert get_first_available_text({"ja_JP": "ソウル", "en_US": "Seoul"}) == "Seoul"
    assert get_first_available_text({"ko_KR": "  ", "th_TH": "โซล"}) == "โซล"
    assert get_first_available_text({}) == ""


def test_has_any_localized_text():
    assert has_any_localized_text({"en_US": "Notice"})
    assert not has_any_localized_text({"en_US": "   ", "ko_KR": None})
    assert not has_any_localized_text(None)


def test_locale_to_lang_code():
    assert locale_to_lang_code("zh_TW") == "zh"
    assert locale_to_lang_code("ar_SA") == "ar"
    assert locale_to_lang_code("fr_FR") == "fr"


def test_as_utc_treats_naive_values_as_utc():
    naive = datetime(2026, 3, 1, 9, 30)
    assert as_utc(naive) == datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)
    kst = timezone(timedelta(hours=9))
    assert as_utc(datetime(2026, 3, 1, 18, 30, tzinfo=kst)).hour == 9


# ---------------------------------------------------------------------------
# HTML entities
# ---------------------------------------------------------------------------


def test_decode_html_entities_named_and_numeric():
    assert decode_html_entities("Tom &amp; Jerry") == "Tom & Jerry"
    assert decode_html_entities("it&#39;s &quot;great&quot;") == 'it\'s "great"'
    assert decode_html_entities("&#x27;ok&#x27;") == "'ok'"
    assert decode_html_entities(None) is None


def test_decode_localized_text_decodes_every_value():
    decoded = decode_localized_text({"ko_KR": "좋아요 &amp; 추천", "en_US": None})
    assert decoded == {"ko_KR": "좋아요 & 추천", "en_US": None}
    assert decode_localized_text(None) is None


# ---------------------------------------------------------------------------
# Invitation codes
# ---------------------------------------------------------------------------


def test_generate_invitation_code_format():
    vip = generate_invitation_code("VIP")
    pay = generate_invitation_code("PAYMENT_REFERENCE")

    assert re.fullmatch(r"VIP-[A-Z0-9]{8}", vip)
    assert re.fullmatch(r"PAY-[A-Z0-9]{8}", pay)
    for char in vip[4:] + pay[4:]:
        assert char in INVITATION_CODE_ALPHABET
    assert not set("01IO") & set(INVITATION_CODE_ALPHABET)


def test_calculate_expires_at():
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert calculate_expires_at("VIP", 30, now=now) is None
    assert calculate_expires_at("PAYMENT_REFERENCE", 7, now=now) == now + timedelta(days=7)


# ---------------------------------------------------------------------------
# Nicknames
# ---------------------------------------------------------------------------


def test_generate_nickname_is_reproducible_with_seed():
    first = generate_nickname(seed="user-1")
    second = generate_nickname(seed="user-1")

    assert first == second
    assert first.canonical == first.display.lower()
    assert len(first.display) <= 20
    assert re.fullmatch(r"[A-Z][a-z]+[A-Z][a-z]+\d{2}", first.display)


def test_generate_nickname_skips_taken_names():
    taken = {generate_nickname(seed="user-2").canonical}

    result = generate_nickname(seed="user-2", is_taken=lambda name: name in taken)

    assert result.canonical not in taken


def test_generate_nickname_gives_up_after_max_attempts():
    with pytest.raises(ServiceUnavailableError):
        generate_nickname(seed="user-3", is_taken=lambda name: True, max_attempts=3)


def test_is_internal_email():
    assert is_internal_email("staff@example.com")
    assert is_internal_email("SEED@Dummy.com")
    assert not is_internal_email("patient@gmail.com")
    assert not is_internal_email(None)
