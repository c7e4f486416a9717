import math

import pytest

from sensor_bridge.acquisition.sources import FakeTickSource, LSLTickSource
from sensor_bridge.core.config import EEG_FIELDS, PPG_FIELDS


def test_fake_source_emits_one_tick_per_modality():
    source = FakeTickSource(tick_interval=0.5, acc_fs=50, seed=1)
    ticks = source.get_ticks()

    assert [t.modality for t in ticks] == ["eeg", "ppg", "acc"]
    assert set(ticks[0].values) == set(EEG_FIELDS)
    assert set(ticks[1].values) == set(PPG_FIELDS)
    assert len(ticks[2].samples) == 25
    assert source.time == pytest.approx(0.5)


def test_fake_source_is_reproducible_with_seed():
    first = FakeTickSource(seed=7).get_ticks()
    second = FakeTickSource(seed=7).get_ticks()
    assert first[1].values == second[1].values


def test_fake_source_lead_off_episodes():
    source = FakeTickSource(seed=0)
    assert source.contact_status() == (True, {"fp1": False, "fp2": False})

    source.time = 43.5
    assert source.contact_status() == (False, {"fp1": True, "fp2": True})


def test_fake_source_warms_up_pipeline(context):
    source = FakeTickSource(seed=3)
    for _ in range(30):
        for tick in source.get_ticks():
            context.process_tick(tick)

    snapshot = context.snapshot()
    assert snapshot.modalities["eeg"].ready
    assert snapshot.modalities["ppg"].ready
    assert snapshot.modalities["acc"].ready
    assert 40 < snapshot.modalities["ppg"].stabilized["heart_rate"] < 100


def test_row_to_values_maps_nan_to_none():
    values = LSLTickSource.row_to_values([0.5, float("nan"), 0.2], EEG_FIELDS)
    assert values == {"focus_index": 0.5, "relaxation_index": None, "stress_index": 0.2}


class FakeInlet:
    def __init__(self, rows, stamps):
        self.rows = rows
        self.stamps = stamps
        self.closed = False

    def pull_chunk(self, timeout=0.0):
        rows, stamps = self.rows, self.stamps
        self.rows, self.stamps = [], []
        return rows, stamps

    def close_stream(self):
        self.closed = True


def test_lsl_source_builds_ticks_from_inlets():
    source = LSLTickSource()
    eeg_row = [0.5] * len(EEG_FIELDS)
    source.inlets = {
        "eeg": FakeInlet([eeg_row, eeg_row], [1.0, 2.0]),
        "acc": FakeInlet([[0.0, 0.0, 1.0], [0.0, 0.1, 1.0]], [1.0, 1.02]),
    }
    source.is_connected = True

    ticks = source.get_ticks()
    assert [t.modality for t in ticks] == ["eeg", "eeg", "acc"]
    assert ticks[1].timestamp == 2.0
    assert len(ticks[2].samples) == 2
    assert source.get_ticks() == []


def test_lsl_source_disconnect_closes_inlets():
    source = LSLTickSource()
    inlet = FakeInlet([], [])
    source.inlets = {"ppg": inlet}
    source.is_connected = True

    source.disconnect()
    assert inlet.closed
    assert source.inlets == {}
    assert source.get_ticks() == []


def test_lsl_source_reports_no_contact_information():
    assert LSLTickSource().contact_status() is None
