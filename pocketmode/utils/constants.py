# =========================
# DETECTION THRESHOLDS
# =========================
PROXIMITY_THRESHOLD = 1.0   # sensor units, "near" below this
LIGHT_THRESHOLD = 2.0       # lux, "dark" below this
GRAVITY_THRESHOLD = -0.6    # normalised Y component
MIN_INCLINATION = 75        # degrees
MAX_INCLINATION = 100       # degrees

# =========================
# TIMING
# =========================
DISPLAY_OFF_DELAY_MS = 3000
LONG_PRESS_MS = 500
DOUBLE_TAP_TIMEOUT_MS = 300
TOUCH_SLOP_PX = 16.0

# =========================
# SENSOR RATES (microseconds between samples)
# =========================
STANDARD_SENSOR_DELAY_US = 400000
BATTERY_FRIENDLY_SENSOR_DELAY_US = 200000

# =========================
# SETTINGS KEYS
# =========================
POCKET_MODE_ENABLED = "pocket_mode_enabled"
ALWAYS_ON_POCKET_MODE_ENABLED = "always_on_pocket_mode_enabled"
BATTERY_FRIENDLY_POCKET_MODE_ENABLED = "battery_friendly_pocket_mode_enabled"

# =========================
# BROADCAST
# =========================
ACTION_POCKET_STATE_CHANGED = "org.rising.server.action.POCKET_STATE_CHANGED"
EXTRA_IN_POCKET = "in_pocket"
POCKET_STATE_LISTENER = "com.android.systemui"
