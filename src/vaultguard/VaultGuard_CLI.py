"""
VaultGuard - password generator with inactivity auto-lock
"""
# ==============================================================
# Standard imports
# ==============================================================
import os
import logging
import threading

# ==============================================================
# Other imports
# ==============================================================
import click
import pendulum
import pyperclip

from vaultguard import VERSION
from vaultguard.config.config_vault import (
    CLEAR_SCREEN, CLIPBOARD_TIMEOUT, DT_FORMAT, GENERATOR_DEFAULTS,
    MIN_LENGTH, MAX_LENGTH, PRESETS, SEP_LG, SEP_SM,
)
from vaultguard.config.logging_config import setup_logging
from vaultguard.config.session_config import resolve_session_timeout
from vaultguard.utils.Draft import Draft
from vaultguard.utils.errors import ValidationError
from vaultguard.utils.password_generator import (
    CredentialGenerator, GeneratorOptions, ShuffleEngine, preset_options,
)
from vaultguard.utils.password_utils import StrengthResult, estimate_crack_time, score_password
from vaultguard.utils.session_guard import (
    Scheduler, SessionGuard, SessionTimerConfig, format_time_remaining,
)
from vaultguard.utils.clipboard_utils import copy_to_clipboard, clear_clipboard
from vaultguard.utils.user_input import get_int, get_yes_no

logger = logging.getLogger(__name__)


# ==============================================================
# Display helpers
# ==============================================================

def strength_lines(result: StrengthResult) -> list[str]:
    bar = "#" * (result.score + 1) + "." * (5 - result.score)
    lines = [f" Strength: [{bar}] {result.level.value} ({result.score}/5)"]
    if result.feedback:
        lines.append(f" Suggestions: {', '.join(result.feedback)}")
    return lines


def describe_options(options: GeneratorOptions) -> str:
    classes = [name for name, on in (
        ("upper", options.include_upper),
        ("lower", options.include_lower),
        ("digits", options.include_digits),
        ("symbols", options.include_symbols),
    ) if on]
    excluded = [name for name, on in (
        ("similar", options.exclude_similar),
        ("ambiguous", options.exclude_ambiguous),
    ) if on]
    text = f"length {options.length}, {'/'.join(classes) or 'no classes'}"
    if excluded:
        text += f", excluding {'/'.join(excluded)}"
    return text


def wipe_terminal(force=False):
    """
    Clears the terminal screen if CLEAR_SCREEN set to True.

    Args:
        force: Clear even when CLEAR_SCREEN is False.
    """
    if CLEAR_SCREEN or force:
        os.system('cls' if os.name == 'nt' else 'clear')


def display_draft(draft: Draft, guard: SessionGuard) -> None:
    print(SEP_LG)
    print(f" Generated: {draft.password or '<none yet>'}")
    print(f" Options:   {describe_options(draft.options)}")
    if draft.password:
        for line in strength_lines(draft.strength()):
            print(line)
        stats = draft.stats()
        print(f" Length {stats.length} | Upper {stats.upper} | Lower {stats.lower}"
              f" | Numbers {stats.digits} | Symbols {stats.symbols}")
        print(f" Shuffled: {draft.shuffle_count} | Last change: "
              f"{pendulum.parse(draft.edited).format(DT_FORMAT)}")
    print(SEP_SM)
    print(f" Auto-lock in {format_time_remaining(guard.get_remaining())}s of inactivity")
    print(SEP_LG)


# ==============================================================
# Interactive menu
# ==============================================================

def edit_options(options: GeneratorOptions, read=input) -> GeneratorOptions | None:
    """
    Walk the user through every generator option.

    Returns:
        The new options, or None if the user quit.
    """
    length = get_int(
        f"\n  Length ({MIN_LENGTH}-{MAX_LENGTH}, Enter keeps {options.length}): ",
        default=options.length, read=read)
    if length is None:
        return None

    return options.with_changes(
        length=length,
        include_upper=get_yes_no("  Uppercase letters", options.include_upper, read=read),
        include_lower=get_yes_no("  Lowercase letters", options.include_lower, read=read),
        include_digits=get_yes_no("  Numbers", options.include_digits, read=read),
        include_symbols=get_yes_no("  Symbols", options.include_symbols, read=read),
        exclude_similar=get_yes_no("  Exclude similar (i l 1 L o 0 O)",
                                   options.exclude_similar, read=read),
        exclude_ambiguous=get_yes_no("  Exclude ambiguous ({ } [ ] \\ | ; : , . < > ?)",
                                     options.exclude_ambiguous, read=read),
    )


def vault_menu(config: SessionTimerConfig, read=input,
               scheduler: Scheduler | None = None,
               generator: CredentialGenerator | None = None,
               shuffler: ShuffleEngine | None = None) -> int:
    """
    Interactive generator guarded by an inactivity lock.

    Every line the user enters counts as activity. When the session
    expires the draft is wiped and the menu exits at the next input.

    Returns:
        0 when the user quits, 1 when the session locked.
    """
    generator = generator or CredentialGenerator()
    shuffler = shuffler or ShuffleEngine()
    draft = Draft()
    locked = threading.Event()

    def lock():
        draft.wipe()
        locked.set()
        wipe_terminal(force=True)
        print("\n\n Session expired due to inactivity. Vault locked.", flush=True)

    guard = SessionGuard(on_expire=lock, scheduler=scheduler)

    def ask(prompt: str) -> str:
        answer = read(prompt)
        if locked.is_set():
            raise _Locked()
        guard.notify_activity()
        return answer

    with guard.session(config):
        try:
            while True:
                if locked.is_set():
                    raise _Locked()
                wipe_terminal()
                display_draft(draft, guard)
                print("\n 1) Generate   2) Shuffle   3) Analyze   4) Options")
                print(" 5) Presets    6) Copy      7) Lock & Quit")
                choice = ask(" > ").strip().lower()

                if choice == "1":
                    try:
                        draft.regenerate(generator)
                    except ValidationError as e:
                        print(f"\n  {e}")

                elif choice == "2":
                    if not draft.password:
                        print("\n  Generate a password first")
                    else:
                        draft.shuffle(shuffler)

                elif choice == "3":
                    pw = ask("\n Password to analyze (Enter for current): ").strip() or draft.password
                    if not pw:
                        continue
                    for line in strength_lines(score_password(pw)):
                        print(line)
                    print(f" Offline crack time: {estimate_crack_time(pw)}")
                    ask("\n Press Enter to continue")

                elif choice == "4":
                    options = edit_options(draft.options, read=ask)
                    if options is None:
                        continue
                    try:
                        options.validate()
                    except ValidationError as e:
                        print(f"\n  {e}  (keeping previous options)")
                        continue
                    draft.options = options

                elif choice == "5":
                    print("\n Presets: " + ", ".join(PRESETS))
                    name = ask(" Preset name: ").strip()
                    try:
                        draft.regenerate(generator, preset_options(name))
                    except ValidationError as e:
                        print(f"\n  {e}")

                elif choice == "6":
                    try:
                        copied = copy_to_clipboard(draft.password)
                    except pyperclip.PyperclipException as e:
                        print(f" Clipboard unavailable: {e}")
                        continue
                    print(f" Copied! (auto-clears in {CLIPBOARD_TIMEOUT}s)" if copied else " Nothing to copy.")

                elif choice in {"7", "q"}:
                    draft.wipe()
                    print("Goodbye!")
                    return 0

                else:
                    print("Invalid Choice")
        except _Locked:
            draft.wipe()
            print(" Re-authenticate to open the vault again.")
            return 1


class _Locked(Exception):
    """Raised inside the menu when input arrives after the session expired."""


# ==============================================================
# Commands
# ==============================================================

@click.group()
@click.version_option(VERSION, prog_name="vaultguard")
@click.option("--verbose", is_flag=True, help="Write debug output to the log file.")
def main(verbose: bool) -> None:
    """Password generator and vault auto-lock."""
    setup_logging(verbose=verbose)


@main.command()
@click.option("--length", "-l", type=int, default=None,
              help=f"Password length ({MIN_LENGTH}-{MAX_LENGTH}).")
@click.option("--upper/--no-upper", default=GENERATOR_DEFAULTS["include_upper"])
@click.option("--lower/--no-lower", default=GENERATOR_DEFAULTS["include_lower"])
@click.option("--digits/--no-digits", default=GENERATOR_DEFAULTS["include_digits"])
@click.option("--symbols/--no-symbols", default=GENERATOR_DEFAULTS["include_symbols"])
@click.option("--exclude-similar", is_flag=True, default=GENERATOR_DEFAULTS["exclude_similar"])
@click.option("--exclude-ambiguous", is_flag=True, default=GENERATOR_DEFAULTS["exclude_ambiguous"])
@click.option("--preset", type=click.Choice(list(PRESETS)), default=None,
              help="Start from a preset; explicit --length still applies.")
@click.option("--shuffle", is_flag=True, help="Shuffle the password once after generating.")
@click.option("--copy", is_flag=True, help="Copy to the clipboard with auto-clear.")
def generate(length, upper, lower, digits, symbols, exclude_similar,
             exclude_ambiguous, preset, shuffle, copy) -> None:
    """Generate one password and show its strength."""
    if preset:
        options = preset_options(preset)
    else:
        options = GeneratorOptions(
            include_upper=upper,
            include_lower=lower,
            include_digits=digits,
            include_symbols=symbols,
            exclude_similar=exclude_similar,
            exclude_ambiguous=exclude_ambiguous,
        )
    if length is not None:
        options = options.with_changes(length=length)

    try:
        password = CredentialGenerator().generate(options)
    except ValidationError as e:
        raise click.ClickException(str(e)) from e

    if shuffle:
        password = ShuffleEngine().shuffle(password)

    click.echo(password)
    for line in strength_lines(score_password(password)):
        click.echo(line)

    if copy:
        try:
            copy_to_clipboard(password)
        except pyperclip.PyperclipException as e:
            raise click.ClickException(f"Clipboard unavailable: {e}") from e
        click.echo(f" Copied! (auto-clears in {CLIPBOARD_TIMEOUT}s)")


@main.command()
@click.option("--password", prompt=True, hide_input=True,
              help="Password to analyze. Prompted for if omitted.")
def score(password: str) -> None:
    """Score a password without storing it."""
    for line in strength_lines(score_password(password)):
        click.echo(line)
    click.echo(f" Offline crack time: {estimate_crack_time(password)}")


@main.command()
@click.option("--timeout", "timeout_minutes", type=int, default=None,
              help="Minutes of inactivity before the vault locks.")
def vault(timeout_minutes) -> None:
    """Interactive generator that locks after inactivity."""
    try:
        config = resolve_session_timeout(timeout_minutes)
    except ValidationError as e:
        raise click.ClickException(str(e)) from e

    try:
        code = vault_menu(config)
    finally:
        clear_clipboard()
    click.get_current_context().exit(code)


if __name__ == "__main__":
    main()
