"""
FastAPI dependencies for the objects built once at startup.

The lifespan in stocklink.main puts the LinkSigner and the inventory connector
on app.state. Route handlers receive them through these functions, never by
reading the environment, so tests can inject fakes via create_app().
"""
from fastapi import Request

from stocklink.token import LinkSigner


def get_signer(request: Request) -> LinkSigner:
    return request.app.state.signer


def get_connector(request: Request):
    """The inventory connector; anything with get_shop() and adjust_inventory()."""
    return request.app.state.connector
