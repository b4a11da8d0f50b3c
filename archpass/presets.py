"""
archpass.presets
The fixed preset table. Built once at import and exposed read-only.
"""

import string
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

SPECIALS = "@#$%&*!?+="
BRACKETS = "[]{}()<>"

# visually confusable characters, removed on request regardless of preset
AMBIGUOUS_CHARS = frozenset("0O1Il")

MIN_LENGTH = 4


@dataclass(frozen=True)
class Preset:
    name: str
    alphabet: str
    default_length: int
    max_length: int

    def working_alphabet(self, exclude_ambiguous: bool = False) -> str:
        if not exclude_ambiguous:
            return self.alphabet
        return "".join(c for c in self.alphabet if c not in AMBIGUOUS_CHARS)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "characters": self.alphabet,
            "defaultLength": self.default_length,
            "maxLength": self.max_length,
        }


def build_presets(presets: Iterable[Preset]) -> Mapping[str, Preset]:
    """Index presets by name into an immutable mapping."""
    return MappingProxyType({p.name: p for p in presets})


_LOWER_DIGITS = string.ascii_lowercase + string.digits
_ALNUM = string.ascii_lowercase + string.ascii_uppercase + string.digits

PRESETS: Mapping[str, Preset] = build_presets([
    Preset("simple", _LOWER_DIGITS, default_length=8, max_length=50),
    Preset("standard", _ALNUM, default_length=12, max_length=100),
    Preset("complex", _ALNUM + SPECIALS, default_length=16, max_length=100),
    Preset("secure", _ALNUM + SPECIALS + BRACKETS, default_length=20, max_length=100),
])

DEFAULT_PRESET = "standard"
