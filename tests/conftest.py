import pytest

from sensor_bridge.pipeline.context import PipelineContext


@pytest.fixture
def context():
    """Connected device with good electrode contact"""
    ctx = PipelineContext("test-device")
    ctx.connect()
    ctx.update_contact(True, {"fp1": False, "fp2": False})
    return ctx


@pytest.fixture
def eeg_tick():
    """Factory for EEG tick values"""
    def make(focus=0.5, relaxation=0.5, stress=0.3, cognitive_load=0.4, total_power=0.2):
        return {
            "focus_index": focus,
            "relaxation_index": relaxation,
            "stress_index": stress,
            "cognitive_load": cognitive_load,
            "total_power": total_power,
        }
    return make


@pytest.fixture
def at_rest():
    """Accelerometer batch of a device lying still (1g on z)"""
    return [(0.0, 0.0, 1.0)] * 10
