"""
Exceptions raised by stocklink.

Verification failures are NOT exceptions: LinkSigner.verify() returns a
VerifyResult and callers branch on its status. Connector failures are not
exceptions either; connectors return ActionResult(success=False).
"""


class ConfigurationError(RuntimeError):
    """Required configuration is missing or malformed. Fatal at startup."""


class UsageError(ValueError):
    """The caller supplied missing or malformed issuing parameters."""
