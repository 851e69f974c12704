import logging
import os
import sys
import traceback
import pendulum

from vaultguard.config.config_vault import LOG_FILE

_log_path = str(LOG_FILE)


def setup_logging(verbose: bool = False, log_file=LOG_FILE) -> None:
    """
    Configure the root logger once.

    Errors go to ``log_file``; with ``verbose`` everything from DEBUG up
    is written there. Also installs log_uncaught_exceptions as the
    interpreter's excepthook.
    """
    global _log_path

    if logging.getLogger().handlers:
        return  # already configured

    _log_path = str(log_file)
    logging.basicConfig(
        filename=_log_path,
        filemode="a",
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s" if verbose else "%(message)s",
    )

    sys.excepthook = log_uncaught_exceptions


def summarize_traceback(tb) -> str:
    """Innermost frame first, file names without their directories."""
    frames = [
        f'  File "{os.path.basename(frame.filename)}", line {frame.lineno}, in {frame.name}'
        for frame in traceback.extract_tb(tb)
    ]
    if not frames:
        return "  <no traceback>"
    return "\n".join(reversed(frames))


def log_uncaught_exceptions(exctype, value, tb):
    if issubclass(exctype, KeyboardInterrupt):
        sys.__excepthook__(exctype, value, tb)
        return

    error_msg = f"{exctype.__name__}: {value}"
    logging.getLogger("vaultguard").error(
        f"[{pendulum.now().to_iso8601_string()}] Uncaught exception: {error_msg}\n"
        f"Traceback (most recent call last):\n"
        f"{summarize_traceback(tb)}\n"
        f"{error_msg}\n"
    )

    print("\nError! Something went wrong.", file=sys.stderr)
    print(f"Details saved to {os.path.basename(_log_path)}\n", file=sys.stderr)
