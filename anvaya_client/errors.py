"""
Errors - Exceptions raised by the client layer.

Expected runtime failures (network, server, storage) never raise; they are
folded into ApiResult or resolved to "logged out". Only misconfiguration
detected at construction time raises.
"""


class ConfigurationError(ValueError):
    """Raised when the client is constructed with invalid settings."""
