"""
Card Identity Resolution Service.

Maps a normalized filename token to a canonical tarot card identity.

Resolution order (first match wins):
1. Card back: token contains "back"
2. Major Arcana: exact match against the trump table (with synonyms)
3. Minor Arcana, structured: "<rank>_<suit>", "<rank>_of_<suit>" or "<suit>_<rank>"
4. Minor Arcana, loose: a suit name plus any embedded 1-2 digit number in 1-14
5. Fallback: display name built from the token, major bucket, no rank

INVARIANTS:
1. Resolution is TOTAL - every string yields a CardIdentity, nothing raises
2. Card-back detection precedes every other rule
3. Major Arcana lookup precedes Minor Arcana matching
4. Lookup tables are built once at import and never mutated

The loose fallback is a heuristic: a date or resolution tag embedded in a
filename ("cups_1080p") can be read as a rank.
"""

import logging
import re
from types import MappingProxyType

from tarotdeck.models.card_identity import Arcana, CardIdentity, Suit
from tarotdeck.parsers.filename import normalize_filename, strip_image_extension

logger = logging.getLogger(__name__)

CARD_BACK_MARKER = "back"

FALLBACK_NAME = "Unknown Card"

# =============================================================================
# MAJOR ARCANA
# =============================================================================

# (rank, canonical name, extra synonym keys)
# Keys with and without the leading "the_" are derived automatically.
_MAJOR_ARCANA: tuple[tuple[int, str, tuple[str, ...]], ...] = (
    (0, "The Fool", ()),
    (1, "The Magician", ()),
    (2, "The High Priestess", ("priestess",)),
    (3, "The Empress", ()),
    (4, "The Emperor", ()),
    (5, "The Hierophant", ()),
    (6, "The Lovers", ()),
    (7, "The Chariot", ()),
    (8, "Strength", ()),
    (9, "The Hermit", ()),
    (10, "Wheel of Fortune", ("wheel",)),
    (11, "Justice", ()),
    (12, "The Hanged Man", ()),
    (13, "Death", ()),
    (14, "Temperance", ()),
    (15, "The Devil", ()),
    (16, "The Tower", ()),
    (17, "The Star", ()),
    (18, "The Moon", ()),
    (19, "The Sun", ()),
    (20, "Judgement", ("judgment",)),
    (21, "The World", ()),
)


def _build_major_lookup() -> MappingProxyType[str, tuple[int, str]]:
    """Build the token -> (rank, name) table for all 22 trumps."""
    lookup: dict[str, tuple[int, str]] = {}
    for rank, name, synonyms in _MAJOR_ARCANA:
        key = normalize_filename(name)
        bare = key.removeprefix("the_")
        for token in (key, bare, f"the_{bare}", *synonyms):
            lookup[token] = (rank, name)
    return MappingProxyType(lookup)


MAJOR_ARCANA_LOOKUP = _build_major_lookup()

# =============================================================================
# MINOR ARCANA
# =============================================================================

SUIT_LOOKUP: MappingProxyType[str, Suit] = MappingProxyType({suit.value: suit for suit in Suit})

RANK_NAMES: MappingProxyType[int, str] = MappingProxyType(
    {
        1: "Ace",
        2: "Two",
        3: "Three",
        4: "Four",
        5: "Five",
        6: "Six",
        7: "Seven",
        8: "Eight",
        9: "Nine",
        10: "Ten",
        11: "Page",
        12: "Knight",
        13: "Queen",
        14: "King",
    }
)


def _build_rank_lookup() -> MappingProxyType[str, int]:
    """Build the token -> rank table: words, bare and zero-padded numerals."""
    lookup: dict[str, int] = {word.lower(): rank for rank, word in RANK_NAMES.items()}
    for rank in range(1, 11):
        lookup[str(rank)] = rank
        lookup[f"{rank:02d}"] = rank
    return MappingProxyType(lookup)


RANK_LOOKUP = _build_rank_lookup()

MIN_MINOR_RANK = 1
MAX_MINOR_RANK = 14

_RANK_ALTERNATION = "|".join(sorted(RANK_LOOKUP, key=len, reverse=True))
_SUIT_ALTERNATION = "|".join(SUIT_LOOKUP)

# "ace_wands", "ace_of_wands", "rws_01_of_cups_v2" - delimited by "_" or token ends
RANK_SUIT_PATTERN = re.compile(
    rf"(?:^|_)(?P<rank>{_RANK_ALTERNATION})_(?:of_)?(?P<suit>{_SUIT_ALTERNATION})(?:_|$)"
)

# "wands_ace", "cups_queen"
SUIT_RANK_PATTERN = re.compile(
    rf"(?:^|_)(?P<suit>{_SUIT_ALTERNATION})_(?P<rank>{_RANK_ALTERNATION})(?:_|$)"
)

# Any 1-2 digit run; "2023" yields "20" then "23"
EMBEDDED_NUMBER_PATTERN = re.compile(r"\d{1,2}")

WORD_SPLIT_PATTERN = re.compile(r"[\s_]+")


def minor_card_name(rank: int, suit: Suit) -> str:
    """Display name for a minor arcana card, e.g. "Queen of Cups"."""
    return f"{RANK_NAMES[rank]} of {suit.value.capitalize()}"


def _minor_identity(rank: int, suit: Suit) -> CardIdentity:
    return CardIdentity(
        name=minor_card_name(rank, suit),
        arcana=Arcana.MINOR,
        suit=suit,
        rank=rank,
    )


def _match_major(token: str) -> CardIdentity | None:
    entry = MAJOR_ARCANA_LOOKUP.get(token)
    if entry is None:
        return None
    rank, name = entry
    return CardIdentity(name=name, arcana=Arcana.MAJOR, rank=rank)


def _match_minor_structured(token: str) -> CardIdentity | None:
    match = RANK_SUIT_PATTERN.search(token) or SUIT_RANK_PATTERN.search(token)
    if match is None:
        return None
    return _minor_identity(RANK_LOOKUP[match.group("rank")], SUIT_LOOKUP[match.group("suit")])


def _match_minor_loose(token: str) -> CardIdentity | None:
    suit = next((s for key, s in SUIT_LOOKUP.items() if key in token), None)
    if suit is None:
        return None

    for number in EMBEDDED_NUMBER_PATTERN.findall(token):
        rank = int(number)
        if MIN_MINOR_RANK <= rank <= MAX_MINOR_RANK:
            return _minor_identity(rank, suit)

    return None


def fallback_display_name(token: str) -> str:
    """
    Build a best-effort display name from a token.

    "my_weird_file_17" -> "My Weird File 17"
    """
    words = [word for word in WORD_SPLIT_PATTERN.split(token) if word]
    if not words:
        return FALLBACK_NAME
    return " ".join(word[:1].upper() + word[1:] for word in words)


def resolve_card_identity(token: str) -> CardIdentity:
    """
    Resolve a normalized filename token to a card identity.

    Never raises. Tokens that match no rule fall back to a major-bucket
    identity with a display name derived from the token and no rank.

    Args:
        token: Output of normalize_filename()

    Returns:
        The resolved CardIdentity
    """
    if CARD_BACK_MARKER in token:
        return CardIdentity.card_back()

    identity = (
        _match_major(token)
        or _match_minor_structured(token)
        or _match_minor_loose(token)
        or CardIdentity(name=fallback_display_name(token), arcana=Arcana.MAJOR)
    )
    if not identity.is_resolved:
        logger.warning("Unrecognized card filename, using display-name fallback: %r", token)
    return identity


def resolve_filename(original_name: str) -> CardIdentity:
    """Strip the image extension, normalize and resolve an original filename."""
    return resolve_card_identity(normalize_filename(strip_image_extension(original_name)))
