import string
from secrets import SystemRandom

from archpass import generator
from archpass.errors import BatchLimitExceeded, InvalidCount, InvalidLength, InvalidPreset
from archpass.generator import MAX_BATCH, generate, generate_batch
from archpass.presets import AMBIGUOUS_CHARS, PRESETS, Preset, build_presets


class LastChoice:
    """Deterministic stand-in for SystemRandom: always the last character."""

    def __init__(self):
        self.calls = 0

    def choice(self, seq):
        self.calls += 1
        return seq[-1]


def test_length_matches_request():
    for name, preset in PRESETS.items():
        for length in (4, 12, preset.max_length):
            r = generate(length, name)
            assert len(r.value) == length
            assert r.length == length
            assert r.preset_name == name

def test_characters_come_from_preset():
    for name, preset in PRESETS.items():
        for _ in range(20):
            r = generate(40, name)
            assert set(r.value) <= set(preset.alphabet)

def test_simple_preset_is_lowercase_and_digits():
    allowed = set(string.ascii_lowercase + string.digits)
    for _ in range(50):
        r = generate(16, "simple", False)
        assert len(r.value) == 16
        assert set(r.value) <= allowed

def test_exclude_ambiguous():
    for name in PRESETS:
        for _ in range(30):
            r = generate(50, name, exclude_ambiguous=True)
            assert not set(r.value) & AMBIGUOUS_CHARS
            assert r.excluded_ambiguous is True

def test_length_boundaries():
    for name, preset in PRESETS.items():
        assert len(generate(4, name).value) == 4
        assert len(generate(preset.max_length, name).value) == preset.max_length
        for bad in (3, preset.max_length + 1):
            try:
                generate(bad, name)
                raised = False
            except InvalidLength:
                raised = True
            assert raised

def test_invalid_length_message_names_bound():
    try:
        generate(51, "simple")
    except InvalidLength as e:
        assert "50" in str(e)
        assert e.code == "INVALID_LENGTH"
    else:
        assert False, "expected InvalidLength"

def test_unknown_preset():
    try:
        generate(10, "nonexistent", False)
    except InvalidPreset as e:
        for name in PRESETS:
            assert name in str(e)
        assert e.code == "INVALID_PRESET"
    else:
        assert False, "expected InvalidPreset"

def test_injected_random_source():
    rng = LastChoice()
    r = generate(6, "simple", rng=rng)
    assert r.value == "999999"
    assert rng.calls == 6

    # '9' is the last character once 0/O/1/I/l are gone too
    r = generate(5, "standard", exclude_ambiguous=True, rng=LastChoice())
    assert r.value == "99999"

def test_strength_is_attached():
    r = generate(6, "simple", rng=LastChoice())
    # digits only, short, repeated: 10 - 10
    assert r.strength.score == 0
    assert r.strength.level == "very_weak"
    d = r.to_dict()
    assert d["password"] == "999999"
    assert d["type"] == "simple"
    assert d["excludedAmbiguous"] is False
    assert d["strength"]["level"] == "very_weak"

def test_alphabet_emptied_by_exclusion():
    presets = build_presets([Preset("confusing", "0O1Il", default_length=8, max_length=20)])
    assert len(generate(8, "confusing", presets=presets).value) == 8
    try:
        generate(8, "confusing", exclude_ambiguous=True, presets=presets)
        raised = False
    except InvalidPreset:
        raised = True
    assert raised

def test_preset_table_is_read_only():
    try:
        PRESETS["extra"] = Preset("extra", "ab", 4, 10)
        mutated = True
    except TypeError:
        mutated = False
    assert not mutated
    assert list(PRESETS) == ["simple", "standard", "complex", "secure"]

def test_batch():
    results = generate_batch(3, 10, "complex")
    assert len(results) == 3
    assert all(len(r.value) == 10 for r in results)
    assert len(generate_batch(MAX_BATCH)) == MAX_BATCH

def test_batch_limits_checked_before_generating():
    rng = LastChoice()
    for count, err in ((MAX_BATCH + 1, BatchLimitExceeded), (0, InvalidCount)):
        try:
            generate_batch(count, rng=rng)
            raised = False
        except err:
            raised = True
        assert raised
    assert rng.calls == 0

def test_default_random_source_is_csprng():
    assert isinstance(generator._sysrand, SystemRandom)

def test_exclude_ambiguous_stays_in_working_alphabet():
    for name, preset in PRESETS.items():
        allowed = set(preset.working_alphabet(True))
        for _ in range(20):
            r = generate(40, name, exclude_ambiguous=True)
            assert set(r.value) <= allowed
