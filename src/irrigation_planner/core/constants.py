"""
Application-wide constants for irrigation network design.

This module defines default values and constants used throughout the application.
Prices are in Thai Baht; lengths in meters; depths in mm/day.
"""

# Area conversion
M2_PER_HECTARE = 10000.0
M2_PER_RAI = 1600.0

# Input defaults (applied when a field is absent or not numeric)
DEFAULT_AREA = 10.0
DEFAULT_KC = 0.9
DEFAULT_KC_INITIAL = 0.3
DEFAULT_KC_DEVELOPMENT = 0.7
DEFAULT_KC_MID = 1.0
DEFAULT_KC_LATE = 0.7
DEFAULT_ET0 = 5.0  # mm/day
DEFAULT_RAINFALL = 0.0  # mm/day
DEFAULT_EFFICIENCY = 0.8
DEFAULT_MAIN_DIAMETER_MM = 110.0
DEFAULT_MAX_LATERAL_M = 100.0
DEFAULT_OPERATING_HOURS = 24.0
DEFAULT_EMITTER_SPACING_M = 12.0
DEFAULT_CROP_TYPE = "Sugarcane"

# FAO-56 growth stage durations (days)
DEFAULT_STAGE_DAYS = {
    "initial": 20,
    "development": 30,
    "mid": 40,
    "late": 30,
}

# Water balance
MIN_EFFICIENCY = 0.01
USDA_SCS_THRESHOLD_MM = 250.0

# Network layout
MIN_LATERAL_SPACING_M = 0.5
MIN_TOTAL_PIPE_LENGTH_M = 20.0
LAYOUT_FACTORS = {
    "heuristic": 1.05,  # routing allowance
    "optimized": 0.90,  # optimizer-assisted routing
}

# Hydraulics (Hazen-Williams, metric)
HAZEN_WILLIAMS_C = 150.0  # smooth PVC
HAZEN_WILLIAMS_K = 10.67
FLOW_EXPONENT = 1.852
DIAMETER_EXPONENT = 4.871
OPERATING_HEAD_M = 30.0
ALLOWABLE_HEAD_LOSS_FRACTION = 0.05
ASSUMED_LATERAL_COUNT = 10
MAX_LATERAL_FLOORS_M = (20.0, 50.0)

# Validation thresholds
BINARY_HEAD_LOSS_LIMIT_PERCENT = 5.0
TIERED_WARNING_PERCENT = 10.0
TIERED_FAILURE_PERCENT = 15.0
LATERAL_SHORTFALL_RATIO = 0.8
HIGH_DEMAND_L_PER_DAY = 100000.0
LARGE_AREA_M2 = 500000.0  # 50 ha
MIN_DIAMETER_FOR_LARGE_AREA_MM = 110.0

# Zoning
MAX_ZONE_CAPACITY_L_PER_DAY = 50000.0

# Pump
PUMP_EFFICIENCY = 0.65
HP_TO_KW = 0.746
HP_DENOMINATOR = 75.0

# Bill of materials (THB)
MAIN_PIPE_PRICES = {
    50: 65.0,
    63: 85.0,
    75: 120.0,
    90: 160.0,
    110: 230.0,
    125: 290.0,
    140: 360.0,
    160: 450.0,
}
DEFAULT_MAIN_PIPE_PRICE = 120.0
LATERAL_PIPE_PRICE = 70.0
LATERAL_MAIN_RATIO = 0.5
FITTING_SPACING_M = 20.0
FITTING_PRICE = 45.0
VALVE_PRICE = 550.0
EMITTER_PRICE = 85.0
PUMP_FLAT_PRICE = 45000.0
PUMP_BASE_PRICE = 15000.0
PUMP_PRICE_PER_KW = 6500.0
FILTER_PRICE = 9500.0
CONTROLLER_PRICE = 6500.0

# Seasonal simulation
DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
# Inclusive month-index ranges per growth stage
DEFAULT_STAGE_CALENDAR = (
    ("initial", 0, 1),
    ("mid", 2, 7),
    ("late", 8, 11),
)
SCENARIO_PRESETS = {
    "normal": {
        "et0": (4.5, 4.6, 4.8, 5.0, 5.2, 5.1, 5.0, 4.9, 4.7, 4.6, 4.5, 4.4),
        "rainfall": (2.5, 2.0, 2.0, 1.8, 1.5, 1.2, 1.0, 1.0, 2.2, 3.0, 3.5, 3.8),
    },
    "dry": {
        "et0": (4.8, 4.9, 5.2, 5.4, 5.6, 5.5, 5.4, 5.3, 5.0, 4.9, 4.8, 4.7),
        "rainfall": (1.5, 1.2, 1.0, 0.8, 0.6, 0.5, 0.5, 0.6, 1.0, 1.5, 1.8, 2.0),
    },
    "wet": {
        "et0": (4.2, 4.3, 4.5, 4.7, 4.9, 4.8, 4.7, 4.6, 4.4, 4.3, 4.2, 4.1),
        "rainfall": (3.5, 3.2, 3.0, 2.8, 2.5, 2.4, 2.3, 2.2, 3.0, 4.0, 4.5, 4.8),
    },
}

# Recommendations
RECOMMENDATION_SMALL_MAIN_MM = 75.0
RECOMMENDATION_SMALL_MAIN_AREA_RAI = 20.0
LARGE_PUMP_DEMAND_L_PER_DAY = 200000.0

# Default field boundary (lat, lng) near Bangkok
DEFAULT_BOUNDARY = (
    (13.7550, 100.5000),
    (13.7575, 100.5000),
    (13.7575, 100.5035),
    (13.7550, 100.5035),
    (13.7550, 100.5000),
)

DEFAULT_TIMEZONE = "Asia/Bangkok"
DEFAULT_SITE_CONTEXT_SEED = 42
