"""policypass: random passwords that satisfy character-group composition policies."""

from .errors import EntropySourceError, InvalidConfiguration, PolicyPassError
from .generator import (
    DEFAULT_GROUPS,
    LengthSpec,
    PasswordBuilder,
    PasswordConfig,
    generate_password,
    generate_passwords,
    make_config,
)
from .random_source import SecureRandomSource

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_GROUPS",
    "EntropySourceError",
    "InvalidConfiguration",
    "LengthSpec",
    "PasswordBuilder",
    "PasswordConfig",
    "PolicyPassError",
    "SecureRandomSource",
    "generate_password",
    "generate_passwords",
    "make_config",
]
