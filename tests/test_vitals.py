import pytest

from sensor_bridge.core.data_types import DropCounters
from sensor_bridge.detection.vitals import VitalSignsPipeline


def test_zero_dropout_is_replaced_by_previous_value():
    counters = DropCounters()
    pipeline = VitalSignsPipeline(counters=counters)
    for lf in (5.0, 0.0, 6.0):
        pipeline.ingest({"lf_power": lf})

    assert pipeline.history("lf_power").values() == [5.0, 5.0, 6.0]
    assert counters.glitches_substituted == 1


def test_dropout_on_empty_history_stores_fallback():
    counters = DropCounters()
    pipeline = VitalSignsPipeline(counters=counters)
    pipeline.ingest({"heart_rate": None})

    assert pipeline.history("heart_rate").values() == [0.0]
    assert counters.invalid_samples == 1
    assert counters.glitches_substituted == 0


def test_nan_dropout_is_substituted():
    pipeline = VitalSignsPipeline()
    pipeline.ingest({"rmssd": 42.0})
    pipeline.ingest({"rmssd": float("nan")})
    assert pipeline.history("rmssd").values() == [42.0, 42.0]


def test_without_substitution_invalid_values_follow_default_rules():
    counters = DropCounters()
    pipeline = VitalSignsPipeline(dropout_sensitive=(), counters=counters)
    pipeline.ingest({"heart_rate": 70.0})
    pipeline.ingest({"heart_rate": 0.0})
    pipeline.ingest({"heart_rate": None})

    assert pipeline.history("heart_rate").values() == [70.0, 0.0]
    assert counters.missing_fields == 1


def test_range_states_after_warmup():
    pipeline = VitalSignsPipeline()
    for _ in range(10):
        pipeline.ingest({"heart_rate": 120.0, "rmssd": 35.0, "sdnn": 10.0})

    assert pipeline.ready
    assert pipeline.value("heart_rate") == pytest.approx(120.0)
    assert pipeline.states["heart_rate"] == "high"
    assert pipeline.states["rmssd"] == "normal"
    assert pipeline.states["sdnn"] == "low"


def test_heart_rate_is_the_warmup_reference():
    pipeline = VitalSignsPipeline()
    for _ in range(12):
        pipeline.ingest({"rmssd": 35.0})
    assert not pipeline.ready
    assert pipeline.value("rmssd") == 0.0


def test_stabilized_value_averages_window():
    pipeline = VitalSignsPipeline(window=4, min_samples=1)
    for hr in (60.0, 70.0, 80.0, 90.0, 100.0):
        pipeline.ingest({"heart_rate": hr})
    assert pipeline.value("heart_rate") == pytest.approx(85.0)
