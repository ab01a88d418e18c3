"""Host-side size limits."""

from .policy import TEXT_ARGUMENTS, EngineLimits, InputLimitError, enforce_input_limits

__all__ = ["EngineLimits", "InputLimitError", "TEXT_ARGUMENTS", "enforce_input_limits"]
