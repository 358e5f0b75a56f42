"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
Limits follow the Network Rail fatigue standard NR/L2/OHS/003.
"""

MAX_SHIFT_HOURS = 12.0
MIN_REST_HOURS = 12.0

ROLLING_WINDOW_DAYS = 7
WEEKLY_LEVEL1_HOURS = 60.0
WEEKLY_APPROACHING_HOURS = 66.0
WEEKLY_LEVEL2_HOURS = 72.0

CONSECUTIVE_DAYS_WINDOW = 14
MAX_CONSECUTIVE_DAYS = 13
CONSECUTIVE_NIGHTS_WARNING = 3

FRI_BREACH = 1.6
FGI_DAY_LEVEL1 = 35.0
FGI_NIGHT_LEVEL1 = 45.0
FGI_DAY_GOOD_PRACTICE = 30.0
FGI_NIGHT_GOOD_PRACTICE = 40.0

# Night window: any work between 23:00 and 06:00.
NIGHT_START_HOUR = 23
NIGHT_END_HOUR = 6

# Tolerance for float sums compared against limits.
LIMIT_EPSILON = 1e-9

DEFAULT_COMMUTE_MINUTES = 60
DEFAULT_WORKLOAD = 3
DEFAULT_ATTENTION = 3
DEFAULT_BREAK_FREQUENCY = 180
DEFAULT_BREAK_LENGTH = 30
DEFAULT_CONTINUOUS_WORK = 180
DEFAULT_BREAK_AFTER_CONTINUOUS = 30

DEFAULT_CACHE_SIZE = 256
