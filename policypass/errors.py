"""
policypass.errors
Exception types raised by the generator and its front ends.
"""


class PolicyPassError(Exception):
    """Base class for policypass failures."""


class InvalidConfiguration(PolicyPassError, ValueError):
    """Raised before any random draw when generation parameters are unusable."""


class EntropySourceError(PolicyPassError, RuntimeError):
    """The operating system's secure random source could not be read."""
