"""
archpass.generator
Preset-based password generator. Randomness comes from the OS CSPRNG unless a
replacement source is passed in.
"""

import logging
from dataclasses import dataclass
from secrets import SystemRandom
from typing import List, Mapping, Optional

from .errors import BatchLimitExceeded, InvalidCount, InvalidLength, InvalidPreset
from .presets import DEFAULT_PRESET, MIN_LENGTH, PRESETS, Preset
from .score import StrengthResult, score_password

logger = logging.getLogger(__name__)

MAX_BATCH = 10

_sysrand = SystemRandom()


@dataclass(frozen=True)
class GeneratedPassword:
    value: str
    length: int
    preset_name: str
    strength: StrengthResult
    excluded_ambiguous: bool

    def to_dict(self) -> dict:
        return {
            "password": self.value,
            "length": self.length,
            "type": self.preset_name,
            "strength": self.strength.to_dict(),
            "excludedAmbiguous": self.excluded_ambiguous,
        }


def resolve_preset(name: str, presets: Mapping[str, Preset] = PRESETS) -> Preset:
    try:
        return presets[name]
    except (KeyError, TypeError):
        raise InvalidPreset(
            f"Invalid password type. Available types: {', '.join(presets)}"
        ) from None


def generate(
    length: int = 12,
    preset_name: str = DEFAULT_PRESET,
    exclude_ambiguous: bool = False,
    presets: Mapping[str, Preset] = PRESETS,
    rng=None,
) -> GeneratedPassword:
    """
    Generate one password from a named preset and score it.

    ``rng`` only needs a ``choice(seq)`` method; it defaults to
    ``secrets.SystemRandom``.
    """
    preset = resolve_preset(preset_name, presets)

    if length < MIN_LENGTH or length > preset.max_length:
        raise InvalidLength(
            f"Password length must be between {MIN_LENGTH} and {preset.max_length} characters"
        )

    alphabet = preset.working_alphabet(exclude_ambiguous)
    if not alphabet:
        raise InvalidPreset(f"Preset '{preset.name}' has no characters left after excluding ambiguous ones")

    rng = rng or _sysrand
    value = "".join(rng.choice(alphabet) for _ in range(length))

    return GeneratedPassword(
        value=value,
        length=len(value),
        preset_name=preset.name,
        strength=score_password(value),
        excluded_ambiguous=exclude_ambiguous,
    )


def check_batch_count(count: int) -> None:
    if count > MAX_BATCH:
        raise BatchLimitExceeded(f"Cannot generate more than {MAX_BATCH} passwords at once")
    if count < 1:
        raise InvalidCount("Count must be at least 1")


def generate_batch(
    count: int = 1,
    length: int = 12,
    preset_name: str = DEFAULT_PRESET,
    exclude_ambiguous: bool = False,
    presets: Mapping[str, Preset] = PRESETS,
    rng=None,
) -> List[GeneratedPassword]:
    """Generate ``count`` passwords with the same settings; the count is checked first."""
    check_batch_count(count)
    logger.debug("Generating %d password(s) with preset %s", count, preset_name)
    return [
        generate(length, preset_name, exclude_ambiguous, presets=presets, rng=rng)
        for _ in range(count)
    ]
