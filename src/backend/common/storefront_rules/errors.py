from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a rule, operator or rule set is configured incorrectly."""
