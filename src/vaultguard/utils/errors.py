class VaultGuardError(Exception):
    """Base class for every error raised by the vault core."""


class ValidationError(VaultGuardError, ValueError):
    """
    Input rejected before any work was done.

    Raised for invalid generator options, a charset emptied by exclusion
    rules, unknown presets and invalid session timeouts.
    """


class StateError(VaultGuardError, RuntimeError):
    """SessionGuard used out of order, e.g. start() while already active."""
