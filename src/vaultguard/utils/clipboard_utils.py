import logging
import threading

import pyperclip

from vaultguard.config.config_vault import CLIPBOARD_TIMEOUT

logger = logging.getLogger(__name__)

# Auto-clear timer for the most recent copy
_clear_timer: threading.Timer | None = None
_last_copied: str | None = None
_timer_lock = threading.Lock()


def copy_to_clipboard(text: str, timeout: int = CLIPBOARD_TIMEOUT) -> bool:
    """
    Copy a generated password to the system clipboard.

    If ``timeout`` is positive the clipboard is cleared after that many
    seconds, unless something else has been copied there in the
    meantime. A new copy replaces any auto-clear still pending.

    Args:
        text: Text to copy.
        timeout: Seconds before auto-clear. 0 or less disables it.

    Returns:
        True if the text was copied, False if there was nothing to copy.

    Raises:
        pyperclip.PyperclipException: If no clipboard mechanism is
            available on this system.
    """
    global _clear_timer, _last_copied

    if not text:
        return False

    pyperclip.copy(text)
    _last_copied = text

    with _timer_lock:
        if _clear_timer is not None:
            _clear_timer.cancel()
            _clear_timer = None

        if timeout > 0:
            _clear_timer = threading.Timer(timeout, _clear_if_unchanged, args=(text,))
            _clear_timer.daemon = True
            _clear_timer.start()

    return True


def cancel_auto_clear() -> None:
    """Forget a pending auto-clear without touching the clipboard."""
    global _clear_timer
    with _timer_lock:
        if _clear_timer is not None:
            _clear_timer.cancel()
            _clear_timer = None


def clear_clipboard() -> None:
    """
    Clear the clipboard now if it still holds what we last copied.

    Does nothing when this process has not copied anything.
    """
    global _last_copied
    cancel_auto_clear()
    if _last_copied is None:
        return
    _clear_if_unchanged(_last_copied)
    _last_copied = None


def _clear_if_unchanged(text: str) -> None:
    global _clear_timer
    try:
        if pyperclip.paste() == text:
            pyperclip.copy("")
    except pyperclip.PyperclipException as e:
        # Runs on a timer thread; nothing to propagate to
        logger.error(f"Could not clear clipboard: {e}")
    with _timer_lock:
        _clear_timer = None
