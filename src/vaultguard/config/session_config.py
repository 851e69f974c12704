"""
Where the session timeout comes from.

The vault view takes its idle timeout from, in order of precedence:

1. an explicit value in minutes (the ``--timeout`` option),
2. a stored preference in milliseconds (VAULTGUARD_SESSION_TIMEOUT_MS),
3. SESSION_DEFAULTS.

Whatever the source, the value is validated here so SessionGuard only
ever receives a usable SessionTimerConfig.
"""
import os
import logging
from collections.abc import Mapping

import pendulum

from vaultguard.config.config_vault import SESSION_DEFAULTS, SESSION_TIMEOUT_ENV
from vaultguard.utils.errors import ValidationError
from vaultguard.utils.session_guard import SessionTimerConfig

logger = logging.getLogger(__name__)


def _parse_positive_int(raw, source: str) -> int:
    if isinstance(raw, bool):
        raise ValidationError(f"Invalid session timeout from {source}: {raw!r}")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        if not text.isdigit():
            raise ValidationError(f"Invalid session timeout from {source}: {raw!r}")
        value = int(text)

    if value <= 0:
        raise ValidationError(f"Session timeout from {source} must be greater than 0")
    return value


def resolve_session_timeout(timeout_minutes=None,
                            environ: Mapping[str, str] | None = None) -> SessionTimerConfig:
    """
    Pick the session timeout from the first source that provides one.

    Args:
        timeout_minutes: Explicit timeout in whole minutes, e.g. from the
            command line. None to fall through.
        environ: Environment to read the stored preference from.
            Defaults to os.environ.

    Returns:
        A validated SessionTimerConfig.

    Raises:
        ValidationError: If the chosen source holds a non-numeric or
            non-positive value.
    """
    environ = os.environ if environ is None else environ
    now = pendulum.now().to_iso8601_string()
    tick = SESSION_DEFAULTS["tick_interval_ms"]

    if timeout_minutes is not None:
        minutes = _parse_positive_int(timeout_minutes, "command line")
        logger.info(f"[{now}] Session timeout set from command line: {minutes} minutes")
        return SessionTimerConfig(timeout_ms=minutes * 60 * 1000, tick_interval_ms=tick)

    stored = environ.get(SESSION_TIMEOUT_ENV)
    if stored:
        timeout_ms = _parse_positive_int(stored, SESSION_TIMEOUT_ENV)
        logger.info(f"[{now}] Session timeout set from {SESSION_TIMEOUT_ENV}: "
                    f"{timeout_ms / 1000:g} seconds")
        return SessionTimerConfig(timeout_ms=timeout_ms, tick_interval_ms=tick)

    return SessionTimerConfig(timeout_ms=SESSION_DEFAULTS["timeout_ms"], tick_interval_ms=tick)
