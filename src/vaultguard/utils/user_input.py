import re


def get_int(prompt: str, default=None, read=input):
    """
    Prompt the user until a valid positive integer is entered.

    Args:
        prompt: Text displayed to the user.
        default: Value returned if the user submits empty input. If None,
            the prompt repeats until a valid integer is entered.
        read: Function used to read a line. Replaced in tests.

    Returns:
        An integer parsed from user input, the default value if accepted,
        or None if the user enters 'q' to quit.
    """
    while True:
        val = read(prompt).strip()

        if not val and default is not None:
            return default
        if re.fullmatch(r"[0-9]+", val):
            return int(val)
        if val == 'q':
            return None

        print("   Invalid - numbers only  (q) to quit")


def get_yes_no(prompt: str, default: bool, read=input) -> bool:
    """
    Ask a y/n question. Enter keeps ``default``.
    """
    suffix = " [Y/n]: " if default else " [y/N]: "
    while True:
        val = read(prompt + suffix).strip().lower()
        if not val:
            return default
        if val in {"y", "yes"}:
            return True
        if val in {"n", "no"}:
            return False
        print("   Please answer y or n")
