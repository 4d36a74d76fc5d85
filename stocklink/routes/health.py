"""
GET /health  - process is up; touches nothing else
GET /ping    - the Shopify API is reachable with the configured credentials
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from stocklink.dependencies import get_connector

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/ping")
def ping(connector=Depends(get_connector)):
    result = connector.get_shop()
    if not result.success:
        return JSONResponse({"ok": False, "err": result.output.get("error")}, status_code=500)
    shop = result.output.get("shop")
    name = shop.get("name") if isinstance(shop, dict) else None
    return {"ok": True, "shop": name or "ok"}
