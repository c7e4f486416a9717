"""
Accelerometer preprocessing

Reduces 3-axis samples to a gravity-compensated scalar magnitude and
derives movement and posture statistics from a buffer of recent samples.
"""

import logging
import math
from typing import List, Sequence, Tuple

import numpy as np
from scipy import signal as sp_signal

from ..core.data_types import AccSample, MovementStats, ActivityEstimate, PostureStats
from ..core.config import GRAVITY_G, MOVEMENT_SCALE, ACC_LOWPASS_ALPHA
from .history import is_valid_sample


def raw_magnitude(sample: AccSample) -> float:
    """sqrt(x^2 + y^2 + z^2) from the axes; a device-reported magnitude is ignored"""
    return math.sqrt(sample.x ** 2 + sample.y ** 2 + sample.z ** 2)


def adjusted_magnitude(sample: AccSample, gravity: float = GRAVITY_G) -> float:
    """
    Gravity-compensated magnitude |magnitude - 1g|

    A sample at rest (x=0, y=0, z=1) yields 0.
    """
    return abs(raw_magnitude(sample) - gravity)


def is_valid_acc_sample(sample: AccSample) -> bool:
    return all(is_valid_sample(axis) for axis in (sample.x, sample.y, sample.z))


def movement_values(samples: Sequence[AccSample], scale: float = MOVEMENT_SCALE) -> np.ndarray:
    """Scaled adjusted magnitudes of the valid samples"""
    values = [adjusted_magnitude(s) * scale for s in samples if is_valid_acc_sample(s)]
    return np.asarray(values, dtype=float)


def analyze_movement(samples: Sequence[AccSample], scale: float = MOVEMENT_SCALE) -> MovementStats:
    """
    Compute movement statistics over a sample buffer

    Args:
        samples: Raw accelerometer samples
        scale: Factor applied to the adjusted magnitude

    Returns:
        MovementStats: Mean, population std, max and sum of movement
    """
    values = movement_values(samples, scale)
    if values.size == 0:
        return MovementStats()

    return MovementStats(
        avg_movement=float(np.mean(values)),
        std_movement=float(np.std(values)),
        max_movement=float(np.max(values)),
        total_movement=float(np.sum(values)),
    )


def estimate_activity(stats: MovementStats) -> ActivityEstimate:
    """
    Classify activity from combined average and peak movement

    Confidence drops by 20% when movement is erratic (std above 80% of mean).
    """
    avg = stats.avg_movement
    peak = stats.max_movement

    if avg <= 5:
        intensity = avg * 4
    elif avg <= 15:
        intensity = 20 + (avg - 5) * 4
    else:
        intensity = 60 + min(40.0, (avg - 15) * 2)

    if avg < 3 and peak < 10:
        state, confidence = "stationary", 0.9
    elif avg < 8 and peak < 20:
        state, confidence = "sitting", 0.8
    elif avg < 20 and peak < 40:
        state, confidence = "walking", 0.7
    else:
        state, confidence = "running", 0.6

    if stats.std_movement > avg * 0.8:
        confidence *= 0.8

    return ActivityEstimate(state=state, confidence=confidence, intensity=int(round(intensity)))


def analyze_posture(samples: Sequence[AccSample]) -> PostureStats:
    """
    Estimate tilt, stability and balance from the mean gravity vector

    Args:
        samples: Raw accelerometer samples

    Returns:
        PostureStats: Tilt in degrees, stability and balance on 0-100
    """
    valid = [s for s in samples if is_valid_acc_sample(s)]
    if not valid:
        return PostureStats()

    axes = np.array([[s.x, s.y, s.z] for s in valid], dtype=float)
    mean_x, mean_y, mean_z = axes.mean(axis=0)

    tilt = math.degrees(math.atan2(math.hypot(mean_x, mean_y), abs(mean_z)))
    total_variance = float(np.sum(axes.var(axis=0)))
    stability = max(0.0, 100 - total_variance * 50)
    balance = max(0.0, 100 - (abs(mean_x) + abs(mean_y)) * 50)

    return PostureStats(
        tilt_angle=round(tilt, 1),
        stability=float(round(stability)),
        balance=float(round(balance)),
    )


def buffer_activity(samples: Sequence[AccSample], recent: int) -> Tuple[float, float]:
    """Mean adjusted magnitude over the last ``recent`` samples and over the whole buffer"""
    values = movement_values(samples, scale=1.0)
    if values.size == 0:
        return 0.0, 0.0
    return float(np.mean(values[-recent:])), float(np.mean(values))


def lowpass_samples(samples: Sequence[AccSample], alpha: float = ACC_LOWPASS_ALPHA) -> List[AccSample]:
    """
    First-order low-pass filter applied per axis

    Implements y[n] = y[n-1] + alpha * (x[n] - y[n-1]) with the filter state
    primed on the first sample so it passes through unchanged. Magnitudes are
    recomputed from the filtered axes.
    """
    if len(samples) < 3:
        return list(samples)
    if not all(is_valid_acc_sample(s) for s in samples):
        # NaN would propagate through the filter state
        logging.debug("ACC batch contains invalid samples, skipping low-pass")
        return list(samples)

    try:
        axes = np.array([[s.x, s.y, s.z] for s in samples], dtype=float)
        b, a = [alpha], [1.0, alpha - 1.0]
        zi = sp_signal.lfilter_zi(b, a)
        filtered = np.empty_like(axes)
        for col in range(3):
            filtered[:, col], _ = sp_signal.lfilter(b, a, axes[:, col], zi=zi * axes[0, col])
    except Exception as e:
        logging.error(f"ACC low-pass filtering failed: {e}")
        return list(samples)

    return [
        AccSample(x=fx, y=fy, z=fz, magnitude=math.sqrt(fx ** 2 + fy ** 2 + fz ** 2),
                  timestamp=s.timestamp)
        for s, (fx, fy, fz) in zip(samples, filtered.tolist())
    ]
