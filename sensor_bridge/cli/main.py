"""
Main CLI entry point for Sensor Bridge

This module provides the command-line interface and the main processing
loop that feeds analysis ticks into the stabilization pipeline.
"""

import argparse
import logging
import signal
import sys
import time
from threading import Event

from ..core.config import *
from ..acquisition.sources import FakeTickSource, LSLTickSource
from ..pipeline.context import PipelineContext
from ..detection.brain_state import BrainStatePipeline
from ..detection.vitals import VitalSignsPipeline
from ..detection.activity import ActivityPipeline
from ..communication.udp_sender import SnapshotSender
from ..communication.presentation import PresentationRefresher, format_status


def run_realtime_processing(source, context: PipelineContext, refresher: PresentationRefresher,
                            duration: float = 0.0, tick_interval: float = TICK_INTERVAL_SEC) -> int:
    """
    Main real-time processing loop

    Pulls ticks from the source, keeps the contact gate up to date and feeds
    each tick to the device pipeline in arrival order. Presentation runs on
    its own timer thread.

    Returns:
        int: Number of ticks processed
    """
    logging.info("Starting real-time processing...")

    shutdown_event = Event()
    def signal_handler(signum, frame):
        logging.info("Shutdown signal received")
        shutdown_event.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    processed = 0
    start_time = time.time()
    context.connect()
    refresher.start()

    try:
        logging.info("Real-time processing started. Press Ctrl+C to stop.")

        while not shutdown_event.is_set():
            if duration and time.time() - start_time >= duration:
                break

            contact = source.contact_status()
            if contact is None:
                # Source carries no contact information, treat electrodes as attached
                contact = (True, {ch: False for ch in LEAD_OFF_CHANNELS})
            is_contacted, lead_off = contact
            context.update_contact(is_contacted, lead_off)

            ticks = source.get_ticks()
            for tick in ticks:
                context.process_tick(tick)
                processed += 1

            shutdown_event.wait(tick_interval)

    except Exception as e:
        logging.error(f"Processing error: {e}")
    finally:
        refresher.stop()
        context.disconnect()
        logging.info(f"Real-time processing stopped after {processed} ticks")

    return processed


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser"""
    parser = argparse.ArgumentParser(
        description="Sensor Bridge - Real-time biosignal stabilization",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run with synthetic analysis ticks
  python -m sensor_bridge --run --fake

  # Read analysis streams from LSL and publish to a dashboard
  python -m sensor_bridge --run --udp-host 127.0.0.1 --udp-port 5005

  # Ten-second smoke run without UDP output
  python -m sensor_bridge --run --fake --duration 10 --no-udp
        """
    )

    parser.add_argument("--run", action="store_true", required=True,
                       help="Run real-time processing")

    # Data source options
    parser.add_argument("--fake", action="store_true",
                       help="Use synthetic analysis ticks for testing")
    parser.add_argument("--seed", type=int, default=None,
                       help="Random seed for synthetic ticks")
    parser.add_argument("--device", default="device",
                       help="Device identifier reported in snapshots")

    # Processing parameters
    parser.add_argument("--duration", type=float, default=0.0,
                       help="Stop after this many seconds (default: run until Ctrl+C)")
    parser.add_argument("--tick-interval", type=float, default=TICK_INTERVAL_SEC,
                       help=f"Seconds between tick polls (default: {TICK_INTERVAL_SEC})")
    parser.add_argument("--min-samples", type=int, default=MIN_SAMPLES_FOR_STATE,
                       help=f"Samples required before states update (default: {MIN_SAMPLES_FOR_STATE})")
    parser.add_argument("--acc-lowpass", action="store_true",
                       help="Low-pass filter accelerometer batches")

    # Presentation options
    parser.add_argument("--refresh", type=float, default=REFRESH_INTERVAL_SEC,
                       help=f"Presentation refresh interval (default: {REFRESH_INTERVAL_SEC})")
    parser.add_argument("--udp-host", default=UDP_HOST,
                       help=f"Dashboard UDP host (default: {UDP_HOST})")
    parser.add_argument("--udp-port", type=int, default=UDP_PORT,
                       help=f"Dashboard UDP port (default: {UDP_PORT})")
    parser.add_argument("--no-udp", action="store_true",
                       help="Disable UDP output")

    # Logging
    parser.add_argument("--verbose", "-v", action="store_true",
                       help="Enable verbose logging")

    return parser


def main(argv=None):
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Setup logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    print("="*60)
    print("Sensor Bridge - Real-time Biosignal Stabilization")
    print("="*60)

    sender = None
    source = None
    try:
        if args.fake:
            logging.info("Using synthetic analysis ticks")
            source = FakeTickSource(tick_interval=args.tick_interval, seed=args.seed)
        else:
            source = LSLTickSource()
            if not source.connect():
                logging.error("Failed to connect to analysis streams")
                return 1

        context = PipelineContext(
            device_id=args.device,
            eeg=BrainStatePipeline(min_samples=args.min_samples),
            ppg=VitalSignsPipeline(min_samples=args.min_samples),
            acc=ActivityPipeline(min_samples=args.min_samples, lowpass=args.acc_lowpass),
        )

        refresher = PresentationRefresher(context, interval=args.refresh)
        refresher.add_sink(lambda snapshot: print(format_status(snapshot)))
        if not args.no_udp:
            sender = SnapshotSender(args.udp_host, args.udp_port)
            refresher.add_sink(sender.send_snapshot)

        run_realtime_processing(source, context, refresher,
                                duration=args.duration, tick_interval=args.tick_interval)
        return 0

    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        return 0
    except Exception as e:
        logging.error(f"Unexpected error: {e}")
        return 1
    finally:
        if sender is not None:
            sender.close()
        if source is not None:
            source.disconnect()


if __name__ == "__main__":
    sys.exit(main())
