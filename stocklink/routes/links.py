"""
Link endpoints.

GET /gen?vi=ID&d=1|-1[&ttl=SECONDS]          - issue a signed link (HTML)
GET /adjust?vi=ID&d=1|-1&exp=TS&sig=TOKEN    - redeem it: verify, then adjust

Query names are short because they end up in the links people click.
vi = target (inventory item) id, d = direction, exp = expiry, sig = token.

Redeeming is not single-use. The same link applies its delta every time it
is opened until it expires.
"""
import html
import json
import logging
import re

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse

from stocklink.dependencies import get_connector, get_signer
from stocklink.errors import UsageError
from stocklink.token import DEFAULT_TTL_SECONDS, DIRECTIONS, LinkSigner

router = APIRouter()

USAGE = "Usage: /gen?vi=<inventory_item_id>&d=1|-1&ttl=seconds"

# Positive whole seconds, at most ten digits so now + ttl stays a valid expiry.
_TTL_PATTERN = re.compile(r"[1-9][0-9]{0,9}")

_LINK_PAGE = '<p><a href="{link}">{link}</a></p>'

_DONE_PAGE = "<h2>Inventory adjusted by {delta}</h2><pre>{detail}</pre>"

_FAILED_PAGE = "<h3>Inventory update failed</h3><pre>{detail}</pre>"


def parse_issue_query(vi: str | None, d: str | None, ttl: str | None) -> tuple[str, int, int]:
    """
    Turn /gen query strings into (target_id, direction, ttl_seconds).

    Raises UsageError when vi is missing, d is not exactly "1" or "-1", or ttl
    is given but is not a positive whole number of seconds (at most ten digits).
    """
    if not vi or d not in DIRECTIONS:
        raise UsageError(USAGE)
    if ttl is None:
        return vi, DIRECTIONS[d], DEFAULT_TTL_SECONDS
    if not _TTL_PATTERN.fullmatch(ttl):
        raise UsageError(USAGE)
    return vi, DIRECTIONS[d], int(ttl)


def _pretty(data) -> str:
    return html.escape(json.dumps(data, indent=2, ensure_ascii=False, default=str))


@router.get("/gen", response_class=HTMLResponse)
def issue_link(
    request: Request,
    vi: str | None = None,
    d: str | None = None,
    ttl: str | None = None,
    signer: LinkSigner = Depends(get_signer),
):
    target_id, direction, ttl_seconds = parse_issue_query(vi, d, ttl)
    claims, token = signer.issue(target_id, direction, ttl_seconds)

    link = str(request.url_for("redeem_link").include_query_params(
        vi=claims.target_id,
        d=str(claims.direction),
        exp=str(claims.expiry),
        sig=token,
    ))
    logging.info(f"Issued link for vi={claims.target_id} d={claims.direction} exp={claims.expiry}")
    return _LINK_PAGE.format(link=html.escape(link))


@router.get("/adjust", response_class=HTMLResponse)
def redeem_link(
    vi: str | None = None,
    d: str | None = None,
    exp: str | None = None,
    sig: str | None = None,
    signer: LinkSigner = Depends(get_signer),
    connector=Depends(get_connector),
):
    result = signer.verify(vi, d, exp, sig)
    if result.status == "INVALID_DELTA":
        return PlainTextResponse("Delta must be 1 or -1.", status_code=400)
    if not result.ok:
        # The response never says which check failed; the log does.
        logging.warning(f"Rejected link for vi={vi!r}: {result.status}")
        return PlainTextResponse("Invalid or expired link", status_code=403)

    claims = result.claims
    action = connector.adjust_inventory(claims.target_id, claims.direction)
    if not action.success:
        logging.warning(f"Inventory adjustment failed for vi={claims.target_id}: {action.output}")
        return HTMLResponse(
            _FAILED_PAGE.format(detail=_pretty(action.output.get("error"))),
            status_code=500,
        )

    delta = "+1" if claims.direction > 0 else "-1"
    logging.info(f"Adjusted vi={claims.target_id} by {delta}")
    return _DONE_PAGE.format(delta=delta, detail=_pretty(action.output))
