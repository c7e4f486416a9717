import pytest

from sensor_bridge.acquisition.sources import FakeTickSource, LSLTickSource
from sensor_bridge.cli.main import create_parser, main, run_realtime_processing
from sensor_bridge.communication.presentation import PresentationRefresher
from sensor_bridge.core.config import EEG_FIELDS
from sensor_bridge.pipeline.context import PipelineContext


def test_parser_defaults():
    args = create_parser().parse_args(["--run", "--fake"])
    assert args.fake
    assert args.min_samples == 10
    assert args.udp_port == 5005
    assert not args.acc_lowpass


def test_parser_requires_run():
    with pytest.raises(SystemExit):
        create_parser().parse_args(["--fake"])


def test_processing_loop_feeds_context():
    context = PipelineContext("loop")
    refresher = PresentationRefresher(context, interval=0.05)
    source = FakeTickSource(tick_interval=0.01, seed=5)

    processed = run_realtime_processing(source, context, refresher, duration=0.2, tick_interval=0.01)

    assert processed > 0
    assert processed % 3 == 0
    assert context.snapshot().connection_state == "disconnected"
    assert not refresher.is_running


def test_main_fake_run(capsys):
    code = main(["--run", "--fake", "--seed", "2", "--duration", "0.2",
                 "--tick-interval", "0.02", "--refresh", "0.05", "--no-udp", "--acc-lowpass"])

    assert code == 0
    assert "Sensor Bridge" in capsys.readouterr().out


class BufferedInlet:
    def __init__(self, rows):
        self.rows = rows

    def pull_chunk(self, timeout=0.0):
        rows, self.rows = self.rows, []
        return rows, [float(i) for i in range(len(rows))]

    def close_stream(self):
        pass


def test_lsl_eeg_ticks_pass_the_contact_gate():
    source = LSLTickSource()
    source.inlets = {"eeg": BufferedInlet([[0.5] * len(EEG_FIELDS)] * 12)}
    source.is_connected = True

    context = PipelineContext("lsl")
    admitted = []
    context.add_listener(lambda modality, ctx: admitted.append(modality))
    refresher = PresentationRefresher(context, interval=0.05)

    processed = run_realtime_processing(source, context, refresher, duration=0.1, tick_interval=0.01)

    assert processed == 12
    assert admitted == ["eeg"] * 12
    assert context.counters.gate_closed == {}
