"""Global configuration: constants, thresholds, messages."""

from pathlib import Path

# Default directory for saved scripts
DEFAULT_OUTPUT_DIR = Path(".")

# Saved script naming: <stem><suffix>, stem falls back when the name is empty
SCRIPT_SUFFIX = "-blender-generator.py"
DEFAULT_SCRIPT_STEM = "building"

# Facade thresholds shared by the generated script and the Python layout mirror
BALCONY_MIN_DEPTH = 0.05
LIGHT_SHELF_MAX_LEVEL = 6
MIN_WINDOW_MODULE = 1.0
SOLAR_PANEL_COUNT = 10

# Number of intent summaries kept by a studio session
SUMMARY_HISTORY_LIMIT = 5

# Status messages surfaced to the user
STATUS_APPLIED = "AI design move applied."
STATUS_NO_MOVES = "No actionable design moves detected."
STATUS_RESET = "Configuration reset."
STATUS_COPIED = "Script copied to clipboard."
STATUS_CLIPBOARD_UNAVAILABLE = "Clipboard unavailable."
STATUS_SAVED = "Python file saved to {path}."

# Logging
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
