"""stocklink: signed links that nudge an inventory counter by one unit."""

from stocklink.models import Claims, VerifyResult, ActionResult
from stocklink.token import LinkSigner, build_message

__all__ = [
    "Claims",
    "VerifyResult",
    "ActionResult",
    "LinkSigner",
    "build_message",
]
