"""
stocklink data models.

Data flow through one issue/redeem cycle:

    Claims        - typed payload of a link (target, direction, expiry); built at
                    the HTTP boundary, never from raw query strings inside the core
    VerifyResult  - outcome of LinkSigner.verify(); carries Claims only when VALID
    ActionResult  - what a connector returns after talking to the inventory API

All models are frozen. Claims in particular must not change between signing
and rendering the link, or the token in the link no longer matches.
"""
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Claims(BaseModel):
    """
    The unsigned, caller-visible fields of a link.

    Fields:
        target_id  - opaque id of the counter to adjust (Shopify inventory_item_id)
        direction  - signed unit delta, exactly 1 or -1
        expiry     - absolute Unix timestamp (seconds); the link is honoured up to
                     and including this second
    """
    model_config = ConfigDict(frozen=True, strict=True)

    target_id: str = Field(min_length=1)
    direction: Literal[1, -1]
    expiry: int = Field(ge=0)


class VerifyResult(BaseModel):
    """
    Outcome of a single verification.

    status:
        VALID          - token matches and the link has not expired
        INVALID        - missing fields, malformed expiry, or wrong token
        EXPIRED        - expiry is in the past
        INVALID_DELTA  - direction is anything but "1" or "-1"

    Responses to users should only distinguish "invalid or expired" from "bad delta".
    Which of INVALID/EXPIRED fired is kept for logging.
    """
    model_config = ConfigDict(frozen=True)

    status: Literal["VALID", "INVALID", "EXPIRED", "INVALID_DELTA"]
    # Only set when status == "VALID".
    claims: Claims | None = None

    @property
    def ok(self) -> bool:
        return self.status == "VALID"


class ActionResult(BaseModel):
    """
    Outcome of a single call to the inventory API.

    Connectors never raise for API or network failures. They return
    success=False with output={"error": ...}, where the error is the decoded
    JSON body of the API response when there is one, else the exception text.

    Fields:
        action   - operation name (e.g. "adjust_inventory", "get_shop")
        system   - connector that handled it (e.g. "shopify")
        success  - whether the call completed without error
        output   - raw API response, or {"error": ...}
    """
    model_config = ConfigDict(frozen=True)

    action: str
    system: str
    success: bool
    output: dict = Field(default_factory=dict)
