import pytest

from sensor_bridge.detection.classifier import (
    RangeClassifier, ThresholdClassifier, classify, classify_level,
    classify_magnitude_activity, classify_movement_activity,
)


@pytest.mark.parametrize("value, expected", [
    (0.0, "low"),
    (0.29, "low"),
    (0.3, "medium"),
    (0.69, "medium"),
    (0.7, "high"),
    (1.0, "high"),
])
def test_level_boundaries(value, expected):
    assert classify_level(value) == expected


@pytest.mark.parametrize("value, expected", [
    (0.0, "stationary"),
    (0.099, "stationary"),
    (0.1, "sitting"),
    (0.29, "sitting"),
    (0.3, "walking"),
    (0.8, "running"),
])
def test_magnitude_activity_boundaries(value, expected):
    assert classify_magnitude_activity(value) == expected


@pytest.mark.parametrize("value, expected", [
    (4.99, "stationary"),
    (5.0, "sitting"),
    (10.0, "walking"),
    (19.9, "walking"),
    (20.0, "running"),
])
def test_movement_activity_boundaries(value, expected):
    assert classify_movement_activity(value) == expected


def test_classification_is_stateless():
    classifier = ThresholdClassifier((0.3, 0.7), ("low", "medium", "high"))
    labels = [classifier(0.5), classifier(0.9), classifier(0.5)]
    assert labels == ["medium", "high", "medium"]


def test_ad_hoc_thresholds():
    assert classify(4.0, (1.0, 5.0)) == "medium"
    assert classify(4.0, (5.0,), labels=("calm", "alert")) == "calm"


def test_label_count_must_match_thresholds():
    with pytest.raises(ValueError):
        ThresholdClassifier((0.3, 0.7), ("low", "high"))


def test_thresholds_must_be_increasing():
    with pytest.raises(ValueError):
        ThresholdClassifier((0.7, 0.3), ("low", "medium", "high"))
    with pytest.raises(ValueError):
        ThresholdClassifier((0.3, 0.3), ("low", "medium", "high"))


@pytest.mark.parametrize("value, expected", [
    (59.9, "low"),
    (60.0, "normal"),
    (100.0, "normal"),
    (100.1, "high"),
])
def test_range_classifier(value, expected):
    assert RangeClassifier((60.0, 100.0)).classify(value) == expected


def test_range_classifier_rejects_inverted_range():
    with pytest.raises(ValueError):
        RangeClassifier((100.0, 60.0))
