# config_vault.py
"""
Configuration constants
"""
import string

# ==============================================================
# General settings
# ==============================================================
# Software version
VERSION = "1.0.0"

# Error log written by setup_logging(), relative to the working directory
LOG_FILE = "error.log"


# ==============================================================
# Password generation
# ==============================================================
# Allowed range for generated password length (inclusive)
MIN_LENGTH = 4
MAX_LENGTH = 128

UPPER_CHARS = string.ascii_uppercase
LOWER_CHARS = string.ascii_lowercase
DIGIT_CHARS = string.digits
SYMBOL_CHARS = "!@#$%^&*()_+-=[]{}|;:,.<>?"

# Removed when "exclude similar" is set. Look alike in most fonts.
SIMILAR_CHARS = "il1Lo0O"
# Removed when "exclude ambiguous" is set. Often mangled by shells/forms.
AMBIGUOUS_CHARS = "{}[]\\|;:,.<>?"

GENERATOR_DEFAULTS = {
    "length": 12,
    "include_upper": True,
    "include_lower": True,
    "include_digits": True,
    "include_symbols": True,
    "exclude_similar": False,
    "exclude_ambiguous": False,
}

# Quick settings offered by the generator panel
PRESETS = {
    "default": {
        "length": 8,
        "include_upper": True,
        "include_lower": True,
        "include_digits": True,
        "include_symbols": True,
        "exclude_similar": False,
        "exclude_ambiguous": False,
    },
    "strong": {
        "length": 16,
        "include_upper": True,
        "include_lower": True,
        "include_digits": True,
        "include_symbols": True,
        "exclude_similar": True,
        "exclude_ambiguous": False,
    },
    "extra_long": {
        "length": 32,
        "include_upper": True,
        "include_lower": True,
        "include_digits": True,
        "include_symbols": True,
        "exclude_similar": False,
        "exclude_ambiguous": False,
    },
}


# ==============================================================
# Strength scoring
# ==============================================================
# Index is the clamped score 0-5
STRENGTH_LEVELS = ("Very Weak", "Weak", "Fair", "Good", "Strong", "Very Strong")
MAX_SCORE = len(STRENGTH_LEVELS) - 1
# Points subtracted from the raw total before clamping
BASELINE_POINTS = 1

FEEDBACK = {
    "length": "Use at least 8 characters",
    "lower": "Add lowercase letters",
    "upper": "Add uppercase letters",
    "digits": "Add numbers",
    "symbols": "Add special characters",
}

# zxcvbn only looks at this many characters
ZXCVBN_MAX_LENGTH = 100


# ==============================================================
# Session auto-lock
# ==============================================================
SESSION_DEFAULTS = {
    "timeout_ms": 1 * 60 * 1000,     # Lock after 1 minute without activity
    "tick_interval_ms": 1000,        # Countdown resolution
}
# Environment variable holding a stored timeout preference, in milliseconds
SESSION_TIMEOUT_ENV = "VAULTGUARD_SESSION_TIMEOUT_MS"


# ==============================================================
# Clipboard security
# ==============================================================
CLIPBOARD_TIMEOUT = 30               # Seconds before auto-clear


# ==============================================================
# Display & formatting
# ==============================================================
UTF8 = "utf-8"
DT_FORMAT = "MMM D, YYYY hh:mm:ss A"
CLEAR_SCREEN = True

SEP_LG = "=" * 50
SEP_SM = "-" * 50

# ==============================================================
# Optional: local overrides
# Local configuration file overrides standard config values
# ==============================================================
try:
    from vaultguard.config.config_local import *
except ImportError:
    pass  # No local config - use defaults above
