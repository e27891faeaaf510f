"""
Allowed alphabets for the text and pdf endpoints

Every alphabet is a TriState:
- UNSET: never mentioned, the server decides (serialized as null)
- TRUE: explicitly allowed
- FALSE: explicitly disallowed

String tokens accepted by AlphabetSet.update():
- "en", "ru", ...   -> allow
- "!en" / "noen"    -> disallow
- "all"             -> allow every alphabet
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from .base import TriState, collect_flags
from .errors import UnknownOptionError, UnreasonableStateError

OPTION_NAME = "alphabets_allowed"

ALL_TOKEN = "all"
NEGATION_PREFIXES = ("!", "no")


class Alphabet(str, Enum):
    """Alphabet codes understood by the service"""
    EN = "en"  # English
    HI = "hi"  # Hindi Devanagari
    ZH = "zh"  # Chinese
    JA = "ja"  # Kana Hiragana or Katakana
    KO = "ko"  # Hangul Jamo
    RU = "ru"  # Russian
    TH = "th"  # Thai


KNOWN_TOKENS = (
    [a.value for a in Alphabet]
    + [f"{{no/!}}{a.value}" for a in Alphabet]
    + [ALL_TOKEN]
)


def parse_alphabet_token(token: str) -> List[Tuple[Alphabet, bool]]:
    """
    Translate one token into (alphabet, allowed) pairs

    Examples:
        >>> parse_alphabet_token("!ru")
        [(<Alphabet.RU: 'ru'>, False)]
    """
    token = token.strip()
    if token == ALL_TOKEN:
        return [(alphabet, True) for alphabet in Alphabet]

    codes = {a.value: a for a in Alphabet}
    if token in codes:
        return [(codes[token], True)]

    for prefix in NEGATION_PREFIXES:
        if token.startswith(prefix) and token[len(prefix):] in codes:
            return [(codes[token[len(prefix):]], False)]

    raise UnknownOptionError(OPTION_NAME, token, KNOWN_TOKENS)


@dataclass(frozen=True)
class AlphabetSet:
    """Per-alphabet allow/disallow state; never resolves to "all disallowed"."""

    en: TriState = TriState.UNSET
    hi: TriState = TriState.UNSET
    zh: TriState = TriState.UNSET
    ja: TriState = TriState.UNSET
    ko: TriState = TriState.UNSET
    ru: TriState = TriState.UNSET
    th: TriState = TriState.UNSET

    def __post_init__(self):
        if all(state is TriState.FALSE for state in self.flags().values()):
            raise UnreasonableStateError(
                "NoAlphabetsAllowed: There should be at least one alphabet allowed."
            )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def flags(self) -> Dict[Alphabet, TriState]:
        """Alphabet -> state, in fixed wire order"""
        return {Alphabet(f.name): getattr(self, f.name) for f in fields(self)}

    def get(self, alphabet: Alphabet) -> TriState:
        return getattr(self, Alphabet(alphabet).value)

    @property
    def is_unset(self) -> bool:
        return not any(state.is_set for state in self.flags().values())

    # ------------------------------------------------------------------
    # Updates (each returns a new AlphabetSet)
    # ------------------------------------------------------------------

    def update(self, tokens: Iterable[str], *, invert: bool = False) -> "AlphabetSet":
        """
        Apply a batch of tokens atomically

        Args:
            tokens: alphabet tokens ("en", "!en", "noen", "all")
            invert: flip the polarity of every token (used by disallow())

        Raises:
            UnknownOptionError: a token is not a known alphabet token
            ConflictError: one alphabet is requested allowed and disallowed
            UnreasonableStateError: every alphabet would end up disallowed
        """
        requested = collect_flags(tokens, parse_alphabet_token, invert=invert)
        if not requested:
            return self
        return replace(
            self,
            **{alphabet.value: TriState.of(allowed) for alphabet, allowed in requested.items()},
        )

    def allow(self, codes: Iterable[str]) -> "AlphabetSet":
        return self.update(codes)

    def disallow(self, codes: Iterable[str]) -> "AlphabetSet":
        return self.update(codes, invert=True)

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "AlphabetSet":
        return cls().update(tokens)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_wire(self) -> Dict[str, Optional[bool]]:
        """Every alphabet key is present; UNSET is emitted as null"""
        return {alphabet.value: state.to_wire() for alphabet, state in self.flags().items()}
