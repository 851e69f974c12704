import logging
from dataclasses import dataclass, asdict

from vaultguard.config.config_vault import (
    GENERATOR_DEFAULTS, PRESETS, MIN_LENGTH, MAX_LENGTH,
    UPPER_CHARS, LOWER_CHARS, DIGIT_CHARS, SYMBOL_CHARS,
    SIMILAR_CHARS, AMBIGUOUS_CHARS,
)
from .crypto_utils import RandomSource, system_random
from .errors import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratorOptions:
    """
    User choices for one password generation.

    Mirrors the generator form: a length slider, four character-class
    checkboxes and two exclusion checkboxes.
    """
    length: int = GENERATOR_DEFAULTS["length"]
    include_upper: bool = GENERATOR_DEFAULTS["include_upper"]
    include_lower: bool = GENERATOR_DEFAULTS["include_lower"]
    include_digits: bool = GENERATOR_DEFAULTS["include_digits"]
    include_symbols: bool = GENERATOR_DEFAULTS["include_symbols"]
    exclude_similar: bool = GENERATOR_DEFAULTS["exclude_similar"]
    exclude_ambiguous: bool = GENERATOR_DEFAULTS["exclude_ambiguous"]

    def charset(self) -> str:
        """
        Build the candidate characters for these options.

        Classes are joined in upper, lower, digit, symbol order, then the
        similar and ambiguous sets are removed when requested. May return
        an empty string; :meth:`validate` rejects that case.
        """
        charset = ""
        if self.include_upper:
            charset += UPPER_CHARS
        if self.include_lower:
            charset += LOWER_CHARS
        if self.include_digits:
            charset += DIGIT_CHARS
        if self.include_symbols:
            charset += SYMBOL_CHARS

        if self.exclude_similar:
            charset = "".join(c for c in charset if c not in SIMILAR_CHARS)
        if self.exclude_ambiguous:
            charset = "".join(c for c in charset if c not in AMBIGUOUS_CHARS)

        return charset

    def validate(self) -> str:
        """
        Check every invariant and return the resulting charset.

        Raises:
            ValidationError: If the length is not an int within
                [MIN_LENGTH, MAX_LENGTH], no character class is enabled,
                or the exclusion rules leave no characters to draw from.
        """
        if isinstance(self.length, bool) or not isinstance(self.length, int):
            raise ValidationError(f"Password length must be an integer, got {self.length!r}")

        if not MIN_LENGTH <= self.length <= MAX_LENGTH:
            raise ValidationError(
                f"Password length {self.length} is out of range "
                f"({MIN_LENGTH}-{MAX_LENGTH})"
            )

        if not (self.include_upper or self.include_lower
                or self.include_digits or self.include_symbols):
            raise ValidationError("Please select at least one character type")

        charset = self.charset()
        if not charset:
            raise ValidationError(
                "Exclusion rules removed every character of the selected types"
            )
        return charset

    def with_changes(self, **changes) -> "GeneratorOptions":
        """Return a copy with the given fields replaced."""
        values = asdict(self)
        values.update(changes)
        return GeneratorOptions(**values)


@dataclass(frozen=True)
class PasswordStats:
    """Per-class character counts shown next to a generated password."""
    length: int
    upper: int
    lower: int
    digits: int
    symbols: int


def preset_options(name: str) -> GeneratorOptions:
    """
    Look up one of the quick settings in PRESETS.

    Raises:
        ValidationError: If the preset does not exist.
    """
    try:
        return GeneratorOptions(**PRESETS[name])
    except KeyError:
        raise ValidationError(
            f"Unknown preset '{name}'. Choose one of: {', '.join(PRESETS)}"
        ) from None


def password_stats(password: str) -> PasswordStats:
    """
    Count characters of each class in a password.

    Anything outside ASCII letters and digits counts as a symbol.
    """
    upper = sum(1 for c in password if c in UPPER_CHARS)
    lower = sum(1 for c in password if c in LOWER_CHARS)
    digits = sum(1 for c in password if c in DIGIT_CHARS)
    return PasswordStats(
        length=len(password),
        upper=upper,
        lower=lower,
        digits=digits,
        symbols=len(password) - upper - lower - digits,
    )


class CredentialGenerator:
    """
    Samples passwords from an options-derived charset.

    Randomness comes from the injected RandomSource, which defaults to
    the OS CSPRNG.
    """

    def __init__(self, rng: RandomSource | None = None):
        self.rng = rng if rng is not None else system_random()

    def generate(self, options: GeneratorOptions | None = None) -> str:
        """
        Generate one password.

        Every character is drawn independently and uniformly, with
        replacement, from the charset built by ``options``.

        Args:
            options: Generation settings. Defaults to GENERATOR_DEFAULTS.

        Returns:
            A password of exactly ``options.length`` characters.

        Raises:
            ValidationError: If the options are invalid. No password is
                produced in that case.
        """
        options = options if options is not None else GeneratorOptions()
        try:
            charset = options.validate()
        except ValidationError as e:
            logger.debug(f"Rejected generator options {options}: {e}")
            raise

        return "".join(self.rng.choice(charset) for _ in range(options.length))


class ShuffleEngine:
    """Reorders the characters of an existing password."""

    def __init__(self, rng: RandomSource | None = None):
        self.rng = rng if rng is not None else system_random()

    def shuffle(self, password: str) -> str:
        """
        Return a uniformly random permutation of ``password``.

        Fisher-Yates over a copy of the characters. Nothing is added,
        removed or changed, so the strength score stays the same.
        """
        chars = list(password)
        for i in range(len(chars) - 1, 0, -1):
            j = self.rng.randrange(i + 1)
            chars[i], chars[j] = chars[j], chars[i]
        return "".join(chars)


_generator = CredentialGenerator()
_shuffler = ShuffleEngine()


def generate_password(options: GeneratorOptions | None = None) -> str:
    """Generate a password with the shared system-random generator."""
    return _generator.generate(options)


def shuffle_password(password: str) -> str:
    """Shuffle a password with the shared system-random shuffler."""
    return _shuffler.shuffle(password)
