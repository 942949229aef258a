"""
KDoc Admin utility functions
"""

from __future__ import annotations

import html
import random
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Mapping, Optional

from app.exceptions import ServiceUnavailableError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # Rows read back from SQLite are naive; all timestamps are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# Locale text

SUPPORTED_LOCALES = (
    "ko_KR",
    "en_US",
    "th_TH",
    "zh_TW",
    "ja_JP",
    "hi_IN",
    "tl_PH",
    "ar_SA",
)

LOCALE_TO_LANG_CODE = {
    "ko_KR": "ko",
    "en_US": "en",
    "th_TH": "th",
    "zh_TW": "zh",
    "ja_JP": "ja",
    "hi_IN": "hi",
    "tl_PH": "tl",
    "ar_SA": "ar",
}

# Fallback order when a caller just wants "some" text
LOCALE_PRIORITY = SUPPORTED_LOCALES

# Banners are keyed by short language code instead of full locale
BANNER_LOCALES = ("ko", "en", "th", "zh", "ja", "hi")


def parse_localized_text(value: Any) -> Dict[str, Any]:
    """Return value when it is a locale mapping, otherwise an empty dict."""
    if isinstance(value, Mapping):
        return dict(value)
    return {}


def get_localized_text(text: Any, locale: str = "ko_KR") -> str:
    value = parse_localized_text(text).get(locale)
    return value if isinstance(value, str) else ""


def get_first_available_text(text: Any) -> str:
    """Pick the first non-empty translation following LOCALE_PRIORITY."""
    parsed = parse_localized_text(text)
    for locale in LOCALE_PRIORITY:
        value = parsed.get(locale)
        if isinstance(value, str) and value.strip():
            return value
    return ""


def has_any_localized_text(text: Any) -> bool:
    return any(
        isinstance(v, str) and v.strip() for v in parse_localized_text(text).values()
    )


def locale_to_lang_code(locale: str) -> str:
    return LOCALE_TO_LANG_CODE.get(locale, locale.split("_")[0].lower())


# HTML entities


def decode_html_entities(text: Optional[str]) -> Optional[str]:
    """Decode named and numeric HTML entities (``&amp;``, ``&#39;``, ``&#x27;``)."""
    if text is None:
        return None
    return html.unescape(text)


def decode_localized_text(text: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    if text is None:
        return None
    return {
        locale: decode_html_entities(value) if isinstance(value, str) else value
        for locale, value in text.items()
    }


# Invitation codes

# No 0/O or 1/I so codes can be read out over the phone
INVITATION_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
INVITATION_CODE_LENGTH = 8
INVITATION_CODE_PREFIXES = {"VIP": "VIP", "PAYMENT_REFERENCE": "PAY"}


def generate_invitation_code(kind: str) -> str:
    kind = getattr(kind, "value", kind)
    prefix = INVITATION_CODE_PREFIXES.get(kind, "INV")
    body = "".join(
        secrets.choice(INVITATION_CODE_ALPHABET) for _ in range(INVITATION_CODE_LENGTH)
    )
    return f"{prefix}-{body}"


def calculate_expires_at(
    kind: str, expires_in_days: Optional[int], now: Optional[datetime] = None
) -> Optional[datetime]:
    """VIP codes never expire; payment references expire after ``expires_in_days``."""
    kind = getattr(kind, "value", kind)
    if kind == "VIP" or not expires_in_days:
        return None
    return (now or utcnow()) + timedelta(days=expires_in_days)


# Nicknames

NICKNAME_ADJECTIVES = (
    "brave", "calm", "clever", "cosy", "eager", "gentle", "happy", "jolly",
    "kind", "lucky", "mellow", "merry", "noble", "proud", "quick", "quiet",
    "shiny", "sunny", "swift", "witty", "bright", "bold", "fresh", "lively",
)

NICKNAME_NOUNS = (
    "otter", "panda", "tiger", "falcon", "dolphin", "koala", "fox", "owl",
    "whale", "rabbit", "lion", "maple", "cedar", "river", "comet", "star",
    "cloud", "pebble", "breeze", "harbor", "meadow", "willow", "lotus", "crane",
)


@dataclass(frozen=True)
class NicknameResult:
    display: str
    canonical: str


def _build_nickname(rng: random.Random, max_length: int) -> str:
    adjective = rng.choice(NICKNAME_ADJECTIVES).capitalize()
    noun = rng.choice(NICKNAME_NOUNS).capitalize()
    tag = f"{rng.randint(0, 99):02d}"
    base = f"{adjective}{noun}"[: max(1, max_length - len(tag))]
    return f"{base}{tag}"


def generate_nickname(
    seed: Optional[Any] = None,
    is_taken: Optional[Callable[[str], bool]] = None,
    max_length: int = 20,
    max_attempts: int = 10,
) -> NicknameResult:
    """
    Generate a PascalCase nickname with a two digit tag, e.g. ``SunnyOtter07``.

    The same seed always yields the same sequence of candidates, so backfills
    are reproducible. ``is_taken`` receives the lower-cased candidate and is
    consulted before a nickname is returned.

    Raises:
        ServiceUnavailableError: when every attempt produced a taken nickname
    """
    for attempt in range(max_attempts):
        rng = random.Random(f"{seed}:{attempt}") if seed is not None else random.Random()
        display = _build_nickname(rng, max_length)
        canonical = display.lower()
        if is_taken is None or not is_taken(canonical):
            return NicknameResult(display=display, canonical=canonical)
    raise ServiceUnavailableError(
        f"Failed to generate unique nickname after {max_attempts} attempts"
    )


INTERNAL_EMAIL_DOMAINS = ("@example.com", "@dummy.com")


def is_internal_email(email: Optional[str]) -> bool:
    """Seeded/dummy accounts used by staff are excluded from statistics."""
    if not email:
        return False
    return email.lower().endswith(INTERNAL_EMAIL_DOMAINS)

