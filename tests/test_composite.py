import pytest

from sensor_bridge.processing.composite import (
    CompositeIndexSynthesizer, attention_level, meditation_level,
)


def test_attention_level_formula():
    assert attention_level({"focus_index": 0.5, "total_power": 0.2}) == pytest.approx(0.44)


def test_meditation_level_formula():
    assert meditation_level({"relaxation_index": 0.6, "stress_index": 0.4}) == pytest.approx(0.60)


def test_missing_inputs_are_treated_as_zero():
    assert attention_level({"focus_index": 0.5}) == pytest.approx(0.4)
    assert meditation_level({"relaxation_index": 0.6}) == pytest.approx(0.72)
    assert attention_level({"focus_index": float("nan"), "total_power": 0.5}) == pytest.approx(0.1)


def test_synthesize_returns_positive_composites():
    synthesizer = CompositeIndexSynthesizer()
    accepted, dropped = synthesizer.synthesize({
        "focus_index": 0.5, "total_power": 0.2,
        "relaxation_index": 0.6, "stress_index": 0.4,
    })

    assert accepted["attention_level"] == pytest.approx(0.44)
    assert accepted["meditation_level"] == pytest.approx(0.60)
    assert dropped == 0


def test_non_positive_composites_are_dropped():
    synthesizer = CompositeIndexSynthesizer()
    accepted, dropped = synthesizer.synthesize({
        "focus_index": 0.0, "total_power": 0.0,
        "relaxation_index": 0.0, "stress_index": 1.0,
    })

    assert accepted == {}
    assert dropped == 2


def test_composites_without_inputs_in_tick_are_skipped():
    synthesizer = CompositeIndexSynthesizer()
    accepted, dropped = synthesizer.synthesize({"cognitive_load": 0.5})

    assert accepted == {}
    assert dropped == 0


def test_custom_composites():
    synthesizer = CompositeIndexSynthesizer({
        "engagement": (lambda v: v["a"] * 2, ("a",)),
    })
    accepted, _ = synthesizer.synthesize({"a": 0.25})

    assert synthesizer.names == ("engagement",)
    assert accepted == {"engagement": 0.5}
