"""Exceptions raised by testsmith."""

from __future__ import annotations


class TestsmithError(Exception):
    """Base class for all testsmith errors."""


class ConfigLoadingError(TestsmithError):
    """Raised when testsmith.yaml is missing or cannot be parsed."""


class InitError(TestsmithError):
    """Raised when a component can not be initialized (missing API key, unknown provider, ...)."""


class GenerationError(TestsmithError):
    """Raised when the model returned a response we can not turn into a script."""


class EmptyScriptError(GenerationError):
    """Raised when the model response contains no code at all."""
