from dataclasses import dataclass, field
import pendulum

from .password_generator import (
    GeneratorOptions, CredentialGenerator, ShuffleEngine, PasswordStats, password_stats,
)
from .password_utils import StrengthResult, score_password


@dataclass
class Draft:
    """
    Working state of the password generator panel.

    Holds the current candidate password and the options that produced
    it, and counts how many times it has been reshuffled. Nothing here is
    persisted; saving a password into a vault entry is the host's job.
    """
    options: GeneratorOptions = field(default_factory=GeneratorOptions)
    password: str = ''
    shuffle_count: int = 0

    created: str = field(default_factory=lambda: pendulum.now().to_iso8601_string())
    edited: str = field(default_factory=lambda: pendulum.now().to_iso8601_string())

    def __repr__(self):
        return (
            f"Draft(length={len(self.password)}, "
            f"pw=<hidden>, "
            f"shuffle_count={self.shuffle_count}, "
            f"created={self.created}, "
            f"edited={self.edited})"
        )

    def regenerate(self, generator: CredentialGenerator,
                   options: GeneratorOptions | None = None) -> str:
        """
        Replace the password with a freshly generated one.

        On a ValidationError the previous password and options are kept.
        """
        options = options if options is not None else self.options
        password = generator.generate(options)

        self.options = options
        self.password = password
        self.shuffle_count = 0
        self._touch()
        return password

    def shuffle(self, shuffler: ShuffleEngine) -> str:
        """Reorder the current password. Does nothing if there is none."""
        if not self.password:
            return self.password
        self.password = shuffler.shuffle(self.password)
        self.shuffle_count += 1
        self._touch()
        return self.password

    def strength(self) -> StrengthResult:
        return score_password(self.password)

    def stats(self) -> PasswordStats:
        return password_stats(self.password)

    def wipe(self):
        """
        Drop the current password.

        Python strings are immutable so the old value cannot be
        overwritten in place; this only removes our reference to it.
        """
        self.password = ''
        self.shuffle_count = 0
        self._touch()

    def _touch(self):
        self.edited = pendulum.now().to_iso8601_string()
