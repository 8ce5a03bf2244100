"""Configuration constants for metrics computation."""

# Swimming drag model (Skiba, SwimScore)
# power = (K / efficiency) * speed^3 where K = DRAG_PER_KG * weight + DRAG_OFFSET
DRAG_PER_KG = 0.35
DRAG_OFFSET = 2.0
PROPELLING_EFFICIENCY = 0.6  # Toussaint's propelling efficiency

# Exponentially weighted power (xPower) window
XPOWER_WINDOW_SECONDS = 25.0

# Tolerance when deciding that two samples are separated by a gap (seconds)
GAP_EPSILON = 0.1

# Stop synthesizing decay steps once the weighted power drops below this (watts)
NEGLIGIBLE_POWER = 0.1

# Used when neither the activity nor the athlete profile records a weight
DEFAULT_WEIGHT_KG = 75.0

# Pace display distance (meters) and imperial conversion
PACE_DISTANCE_M = 100.0
METERS_PER_YARD = 0.9144

# Per-activity tag overriding the configured critical velocity (kph)
CV_TAG = "CV"

# TSS estimation factors by discipline (per hour)
# These are used when HR data is unavailable
TSS_DURATION_FACTORS = {
    "run": 65,
    "bike": 55,
}

# TRIMP constants (Bannister's Training Impulse)
# Exponential weighting factor, average of male (1.92) and female (1.67)
TRIMP_FACTOR_DEFAULT = 1.80

DEFAULT_RESTING_HR = 60

# Minimum data requirements
MIN_HR_SAMPLES = 10  # Minimum HR data points for HR-based stress
MIN_ACTIVITY_DURATION_SECONDS = 60  # Minimum duration to compute TSS
