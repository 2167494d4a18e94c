"""Exceptions raised by :mod:`nlljax` before any numerical work starts."""


class ShapeMismatchError(ValueError):
    """Data and parameter records are inconsistent with each other or the model."""


class UnknownModeError(ValueError):
    """Requested evaluation mode is neither ``score`` nor ``simulate``."""
