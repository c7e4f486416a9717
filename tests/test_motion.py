import math

import pytest

from sensor_bridge.core.data_types import AccSample, MovementStats
from sensor_bridge.detection.classifier import classify_magnitude_activity
from sensor_bridge.processing.motion import (
    adjusted_magnitude, analyze_movement, analyze_posture, buffer_activity,
    estimate_activity, is_valid_acc_sample, lowpass_samples, raw_magnitude,
)


def test_device_at_rest_has_zero_magnitude():
    sample = AccSample(0.0, 0.0, 1.0)
    assert adjusted_magnitude(sample) == 0.0
    assert classify_magnitude_activity(adjusted_magnitude(sample)) == "stationary"


def test_adjusted_magnitude_is_absolute_deviation_from_gravity():
    assert adjusted_magnitude(AccSample(0.0, 0.0, 1.5)) == pytest.approx(0.5)
    assert adjusted_magnitude(AccSample(0.0, 0.0, 0.5)) == pytest.approx(0.5)
    assert adjusted_magnitude(AccSample(0.0, 0.0, 0.0)) == pytest.approx(1.0)


def test_reported_magnitude_does_not_override_axes():
    assert raw_magnitude(AccSample(0.0, 0.0, 1.0, magnitude=9.81)) == pytest.approx(1.0)
    assert raw_magnitude(AccSample(3.0, 4.0, 0.0, magnitude=1.4)) == pytest.approx(5.0)
    assert adjusted_magnitude(AccSample(0.0, 0.0, 1.0, magnitude=9.81)) == 0.0


def test_invalid_axes_make_sample_invalid():
    assert is_valid_acc_sample(AccSample(0.0, 0.0, 1.0))
    assert not is_valid_acc_sample(AccSample(float("nan"), 0.0, 1.0))
    assert not is_valid_acc_sample(AccSample(None, 0.0, 1.0))


def test_movement_statistics():
    samples = [AccSample(0.0, 0.0, 1.1), AccSample(0.0, 0.0, 1.0)]
    stats = analyze_movement(samples)

    assert stats.avg_movement == pytest.approx(5.0)
    assert stats.std_movement == pytest.approx(5.0)
    assert stats.max_movement == pytest.approx(10.0)
    assert stats.total_movement == pytest.approx(10.0)


def test_movement_statistics_skip_invalid_samples():
    samples = [AccSample(0.0, 0.0, 1.2), AccSample(float("nan"), 0.0, 1.0)]
    stats = analyze_movement(samples)
    assert stats.avg_movement == pytest.approx(20.0)
    assert analyze_movement([]) == MovementStats()


def test_estimate_stationary():
    estimate = estimate_activity(MovementStats(avg_movement=2.0, std_movement=1.0, max_movement=5.0))
    assert estimate.state == "stationary"
    assert estimate.confidence == pytest.approx(0.9)
    assert estimate.intensity == 8


def test_estimate_running_caps_intensity():
    estimate = estimate_activity(MovementStats(avg_movement=40.0, std_movement=5.0, max_movement=60.0))
    assert estimate.state == "running"
    assert estimate.confidence == pytest.approx(0.6)
    assert estimate.intensity == 100


def test_estimate_erratic_movement_lowers_confidence():
    estimate = estimate_activity(MovementStats(avg_movement=6.0, std_movement=6.0, max_movement=15.0))
    assert estimate.state == "sitting"
    assert estimate.confidence == pytest.approx(0.64)
    assert estimate.intensity == 24


def test_posture_upright():
    posture = analyze_posture([AccSample(0.0, 0.0, 1.0)] * 5)
    assert posture.tilt_angle == 0.0
    assert posture.stability == 100.0
    assert posture.balance == 100.0


def test_posture_lying_on_side():
    posture = analyze_posture([AccSample(1.0, 0.0, 0.0)] * 5)
    assert posture.tilt_angle == 90.0
    assert posture.balance == 50.0


def test_buffer_activity_recent_and_total():
    samples = [AccSample(0.0, 0.0, 1.0)] * 8 + [AccSample(0.0, 0.0, 1.5)] * 2
    recent, total = buffer_activity(samples, recent=2)
    assert recent == pytest.approx(0.5)
    assert total == pytest.approx(0.1)
    assert buffer_activity([], recent=10) == (0.0, 0.0)


def test_lowpass_first_sample_passes_through():
    samples = [AccSample(0.0, 0.0, 1.0), AccSample(0.0, 0.0, 2.0), AccSample(0.0, 0.0, 2.0)]
    filtered = lowpass_samples(samples, alpha=0.1)

    assert [s.z for s in filtered] == pytest.approx([1.0, 1.1, 1.19])
    assert filtered[1].magnitude == pytest.approx(1.1)


def test_lowpass_keeps_constant_signal():
    samples = [AccSample(0.1, 0.2, 0.9)] * 5
    filtered = lowpass_samples(samples)
    for sample in filtered:
        assert (sample.x, sample.y, sample.z) == pytest.approx((0.1, 0.2, 0.9))


def test_lowpass_skips_short_or_invalid_batches():
    short = [AccSample(0.0, 0.0, 1.0), AccSample(0.0, 0.0, 2.0)]
    assert lowpass_samples(short) == short

    invalid = short + [AccSample(float("nan"), 0.0, 1.0)]
    result = lowpass_samples(invalid)
    assert result[1].z == 2.0
    assert math.isnan(result[2].x)
