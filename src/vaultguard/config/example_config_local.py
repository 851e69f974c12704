# Local configuration file overrides standard config values. Never commit this file!
# Used for changing user defaults
from vaultguard.config.config_vault import GENERATOR_DEFAULTS, SESSION_DEFAULTS

CLIPBOARD_TIMEOUT = 20
GENERATOR_DEFAULTS["length"] = 24
GENERATOR_DEFAULTS["exclude_similar"] = True
SESSION_DEFAULTS["timeout_ms"] = 5 * 60 * 1000
CLEAR_SCREEN = False

# Rename this file to config_local.py to enable it
