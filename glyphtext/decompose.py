"""Word decomposition into primary and secondary letter streams."""

from __future__ import annotations

from dataclasses import dataclass

VOWELS = frozenset("aeiouy")

# Words drawn as a single glyph. The first-person pronoun is always
# substituted; the rest only when overrides are enabled.
ALWAYS_OVERRIDES: dict[str, str] = {"i": "first_person"}
OPTIONAL_OVERRIDES: dict[str, str] = {
    "the": "the",
    "that": "the",
    "they": "the",
}


@dataclass(frozen=True)
class Decomposition:
    """Letter streams for one word.

    Attributes:
        primary: Consonant-like letters, in word order.
        secondary: Vowel-like letters, in word order.
        reserve_offsets: Anchor index offsets (relative to the word's first
            anchor) whose cells must stay free of decals.
    """

    primary: tuple[str, ...]
    secondary: tuple[str, ...]
    reserve_offsets: tuple[int, ...]

    @property
    def is_override(self) -> bool:
        return not self.reserve_offsets


def override_key(word: str, use_overrides: bool = True) -> str | None:
    if word in ALWAYS_OVERRIDES:
        return ALWAYS_OVERRIDES[word]
    if use_overrides:
        return OPTIONAL_OVERRIDES.get(word)
    return None


def decompose_word(word: str, last: bool, use_overrides: bool = True) -> Decomposition:
    """Split a lower-cased word into its two letter streams.

    Args:
        word: Lower-cased word.
        last: True if nothing follows this word in the text.
        use_overrides: Whether optional whole-word overrides apply.

    Returns:
        Decomposition with the reservation offsets for the word.
    """
    key = override_key(word, use_overrides)
    if key is not None:
        return Decomposition(primary=(key,), secondary=(), reserve_offsets=())

    primary = tuple(c for c in word if c not in VOWELS)
    secondary = tuple(c for c in word if c in VOWELS)
    both = bool(primary) and bool(secondary)

    offsets = [0]
    if not (both and last):
        offsets.append(1)
    if both and not last:
        offsets.append(2)

    return Decomposition(primary=primary, secondary=secondary, reserve_offsets=tuple(offsets))
