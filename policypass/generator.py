"""
policypass.generator
Policy-compliant password generator.

Every configured character group contributes at least one character (as long
as the password is long enough), an optional group controls the first
character, and the remaining positions are filled from all groups combined.
Characters are placed under random 32-bit slot keys and emitted in key order,
which randomizes their positions without a separate shuffle.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .errors import InvalidConfiguration
from .random_source import SecureRandomSource

logger = logging.getLogger(__name__)

# Confusable characters (l, I, O, D, 0, 1) are left out.
DEFAULT_GROUPS: Tuple[str, ...] = (
    "abcdefghijkmnopqrstuvwxyz",
    "ABCEFGHJKLMNPQRSTUVWXYZ",
    "23456789",
    '!"#%&',
)
DEFAULT_MIN_LENGTH = 8
DEFAULT_MAX_LENGTH = 12
DEFAULT_LENGTH = 8
DEFAULT_COUNT = 1

FIRST_CHAR_SLOT = 0


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class LengthSpec:
    """Inclusive length bounds; a fixed length has minimum == maximum."""

    minimum: int
    maximum: int

    @classmethod
    def fixed(cls, length: int) -> "LengthSpec":
        return cls(length, length)

    @classmethod
    def range(cls, minimum: int, maximum: int) -> "LengthSpec":
        return cls(minimum, maximum)

    @property
    def is_fixed(self) -> bool:
        return self.minimum == self.maximum

    def validate(self) -> None:
        if not (_is_int(self.minimum) and _is_int(self.maximum)):
            raise InvalidConfiguration("password length must be an integer")
        if self.minimum <= 0:
            raise InvalidConfiguration("password length must be > 0")
        if self.maximum < self.minimum:
            raise InvalidConfiguration(
                f"maximum length {self.maximum} is smaller than minimum length {self.minimum}"
            )


@dataclass(frozen=True)
class PasswordConfig:
    """
    Immutable generation parameters.

    ``groups`` order decides which groups are guaranteed a character when the
    length is smaller than the number of groups; it never affects where the
    characters end up. The config validates itself on construction.
    """

    length: LengthSpec = field(
        default_factory=lambda: LengthSpec.range(DEFAULT_MIN_LENGTH, DEFAULT_MAX_LENGTH)
    )
    groups: Tuple[str, ...] = DEFAULT_GROUPS
    first_char_group: Optional[str] = None
    count: int = DEFAULT_COUNT

    def __post_init__(self):
        if isinstance(self.groups, (list, tuple)):
            object.__setattr__(self, "groups", tuple(self.groups))
        self.validate()

    def validate(self) -> None:
        if not isinstance(self.length, LengthSpec):
            raise InvalidConfiguration("length must be a LengthSpec")
        self.length.validate()
        if not isinstance(self.groups, tuple) or not self.groups:
            raise InvalidConfiguration("at least one character group is required")
        for i, group in enumerate(self.groups):
            if not isinstance(group, str) or not group:
                raise InvalidConfiguration(f"character group #{i + 1} is empty")
        if self.first_char_group is not None:
            if not isinstance(self.first_char_group, str) or not self.first_char_group:
                raise InvalidConfiguration("first character group is empty")
        if not _is_int(self.count) or self.count < 1:
            raise InvalidConfiguration("count must be >= 1")

    @property
    def alphabet(self) -> str:
        """All composition groups joined; used for the unconstrained positions."""
        return "".join(self.groups)


class PasswordBuilder:
    """
    Builds one password per :meth:`build` call.

    ``source`` is anything with a ``next_uint32()`` method. It defaults to the
    OS-backed :class:`SecureRandomSource`; other sources are for tests only.
    """

    def __init__(self, source=None):
        self.source = source if source is not None else SecureRandomSource()

    def resolve_length(self, spec: LengthSpec) -> int:
        if spec.is_fixed:
            return spec.minimum
        span = spec.maximum - spec.minimum + 1
        return spec.minimum + self.source.next_uint32() % span

    def _pick(self, chars: str) -> str:
        return chars[self.source.next_uint32() % len(chars)]

    def _free_slot(self, slots: Dict[int, str]) -> int:
        key = self.source.next_uint32()
        while key in slots:
            key = self.source.next_uint32()
        return key

    def build(self, config: PasswordConfig) -> str:
        target = self.resolve_length(config.length)
        logger.debug("building password of length %d", target)

        slots: Dict[int, str] = {}
        if config.first_char_group is not None:
            # every drawn key is unique, so key 0 always sorts first
            slots[FIRST_CHAR_SLOT] = self._pick(config.first_char_group)

        for i, group in enumerate(config.groups):
            if len(slots) >= target:
                logger.debug(
                    "length %d filled before group %d, skipping %d group(s)",
                    target, i + 1, len(config.groups) - i,
                )
                break
            key = self._free_slot(slots)
            slots[key] = self._pick(group)

        alphabet = config.alphabet
        while len(slots) < target:
            key = self._free_slot(slots)
            slots[key] = self._pick(alphabet)

        return "".join(char for _, char in sorted(slots.items()))


def generate_password(config: Optional[PasswordConfig] = None, source=None) -> str:
    """Generate a single password; ``config.count`` is ignored."""
    return PasswordBuilder(source).build(config or PasswordConfig())


def generate_passwords(config: Optional[PasswordConfig] = None, source=None) -> List[str]:
    """
    Generate ``config.count`` independent passwords.

    Any failure of the random source propagates immediately and no passwords
    are returned.
    """
    config = config or PasswordConfig()
    builder = PasswordBuilder(source)
    return [builder.build(config) for _ in range(config.count)]


def make_config(
    length: Optional[int] = None,
    min_length: int = DEFAULT_MIN_LENGTH,
    max_length: int = DEFAULT_MAX_LENGTH,
    groups: Optional[Sequence[str]] = None,
    first_char_group: Optional[str] = None,
    count: int = DEFAULT_COUNT,
) -> PasswordConfig:
    """
    Build a PasswordConfig from flat keyword arguments.

    A fixed ``length`` takes precedence over the ``min_length``/``max_length`` range.
    """
    if length is not None:
        spec = LengthSpec.fixed(length)
    else:
        spec = LengthSpec.range(min_length, max_length)
    if groups is None:
        groups = DEFAULT_GROUPS
    elif isinstance(groups, str) or not isinstance(groups, (list, tuple)):
        raise InvalidConfiguration("groups must be a list of strings")
    return PasswordConfig(
        length=spec,
        groups=tuple(groups),
        first_char_group=first_char_group,
        count=count,
    )
