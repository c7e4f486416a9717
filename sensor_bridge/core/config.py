"""
Configuration constants for Sensor Bridge

This module contains the parameters of the stabilization pipeline: history
capacities, moving-average windows, classification thresholds and the
transport settings used by the command-line runner.
"""

from typing import Dict, Tuple

# ============================================================================
# MODALITIES AND TICK FIELDS
# ============================================================================

EEG = "eeg"
PPG = "ppg"
ACC = "acc"
MODALITIES = (EEG, PPG, ACC)

# Connection states reported by the device layer
CONNECTED = "connected"
DISCONNECTED = "disconnected"

# Fields delivered by the analysis engine on every EEG tick
EEG_FIELDS = (
    "focus_index",
    "relaxation_index",
    "stress_index",
    "cognitive_load",
    "total_power",
    "hemispheric_balance",
    "emotional_stability",
)

# Fields delivered on every PPG tick
PPG_FIELDS = (
    "heart_rate",
    "rmssd",
    "sdnn",
    "pnn50",
    "lf_power",
    "hf_power",
    "lf_hf_ratio",
    "stress_index",
    "spo2",
    "avnn",
    "pnn20",
    "sdsd",
    "hr_max",
    "hr_min",
)

# PPG metrics whose zero/NaN readings are replaced by the last stored value
DROPOUT_SENSITIVE_PPG = PPG_FIELDS

# Lead-off flags that must all be clear before EEG ticks are accepted
LEAD_OFF_CHANNELS = ("fp1", "fp2")

# ============================================================================
# HISTORY AND MOVING AVERAGE
# ============================================================================

EEG_HISTORY_SIZE = 120            # ~2 minutes of ticks
PPG_HISTORY_SIZE = 120
ACC_HISTORY_SIZE = 120

EEG_AVERAGE_WINDOW = 100          # Most recent valid samples used for the mean
PPG_AVERAGE_WINDOW = 120          # Whole PPG history
ACC_AVERAGE_WINDOW = 100

MIN_SAMPLES_FOR_STATE = 10        # Cold-start threshold before labels update

# ============================================================================
# COMPOSITE INDICES
# ============================================================================

ATTENTION_WEIGHTS: Dict[str, float] = {
    "focus_index": 0.8,
    "total_power": 0.2,
}
MEDITATION_RELAXATION_WEIGHT = 0.7
MEDITATION_CALM_WEIGHT = 0.3      # Applied to (1 - stress_index)

# ============================================================================
# CLASSIFICATION
# ============================================================================

LEVEL_LABELS = ("low", "medium", "high")
BRAIN_STATE_THRESHOLDS: Tuple[float, float] = (0.3, 0.7)

# Brain-state label -> stabilized EEG metric it is read from
BRAIN_STATE_METRICS = {
    "focus": "focus_index",
    "relaxation": "relaxation_index",
    "stress": "stress_index",
    "attention": "attention_level",
    "meditation": "meditation_level",
    "cognitive_load": "cognitive_load",
}

ACTIVITY_LABELS = ("stationary", "sitting", "walking", "running")
MAGNITUDE_THRESHOLDS = (0.1, 0.3, 0.8)      # Gravity-removed magnitude (g)
MOVEMENT_THRESHOLDS = (5.0, 10.0, 20.0)     # Scaled average movement

RANGE_LABELS = ("low", "normal", "high")

# Normal ranges for PPG metrics (below -> low, above -> high)
PPG_NORMAL_RANGES: Dict[str, Tuple[float, float]] = {
    "heart_rate": (60.0, 100.0),
    "rmssd": (20.0, 50.0),
    "sdnn": (30.0, 100.0),
    "pnn50": (10.0, 30.0),
    "pnn20": (20.0, 60.0),
    "sdsd": (15.0, 40.0),
    "hr_max": (80.0, 150.0),
    "hr_min": (50.0, 80.0),
    "lf_power": (2.0, 12.0),
    "hf_power": (0.8, 40.0),
    "lf_hf_ratio": (1.0, 10.0),
}

# ============================================================================
# ACCELEROMETER
# ============================================================================

GRAVITY_G = 1.0                   # Accelerometer units are g
MOVEMENT_SCALE = 100.0            # Adjusted magnitude -> movement units
ACC_FS = 50                       # Accelerometer sampling rate (Hz)
ACC_BUFFER_SIZE = 500             # Raw samples kept for movement/posture stats
ACC_RECENT_SAMPLES = 10           # Samples in the "recent activity" mean
ACC_LOWPASS_ALPHA = 0.1           # First-order low-pass coefficient

# ============================================================================
# PRESENTATION AND TRANSPORT
# ============================================================================

REFRESH_INTERVAL_SEC = 1.0        # Presentation refresh period
TICK_INTERVAL_SEC = 0.5           # Synthetic analysis tick period
UDP_HOST = "127.0.0.1"            # Dashboard UDP host
UDP_PORT = 5005                   # Dashboard UDP port
