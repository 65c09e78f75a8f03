"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Daily worked-time band (net of breaks).
MIN_NORMAL_SECONDS = 8 * 3600 + 15 * 60  # 8h15m
MAX_NORMAL_SECONDS = 8 * 3600 + 30 * 60  # 8h30m

HALF_DAY_LEAVE_DAYS = 0.5
HALF_DAY_EXTRA_TIME_HOURS = 4.0
# Used when an extra-time leave carries no usable HH:mm window.
EXTRA_TIME_FALLBACK_HOURS_PER_DAY = 8.25

# Bond "remaining" display uses 30-day months; end dates use calendar months.
DISPLAY_MONTH_DAYS = 30

PAID_LEAVE_MARKER = "[Paid Leave]"
EXTRA_TIME_LEAVE_MARKER = "[Extra Time Leave]"

# Consumer cadence (live timer tick, dashboard polling).
LIVE_TIMER_TICK_SECONDS = 1
BACKGROUND_REFRESH_SECONDS = 30

EMPTY_DISPLAY = "-"
