"""Engine and store defaults."""

# Confidence passed to the image classifier on every frame
CAT_CONFIDENCE_THRESHOLD = 50.0

DEFAULT_CONFIG_FILE = "catpoint.yaml"
DEFAULT_STORE_FILE = "catpoint_state.yaml"

# Keys used by the file-backed repository
STORE_KEY_ALARM_STATUS = "alarm_status"
STORE_KEY_ARMING_STATUS = "arming_status"
STORE_KEY_SENSORS = "sensors"
