"""
stocklink: FastAPI app.

Run locally:
    LINK_SECRET=changeme SHOPIFY_STORE=... SHOPIFY_TOKEN=... LOCATION_ID=... \
        uvicorn stocklink.main:app --port 3000
or:
    python -m stocklink

Endpoints:
    GET /gen?vi=ID&d=1|-1&ttl=SECONDS
    GET /adjust?vi=ID&d=1|-1&exp=TS&sig=TOKEN
    GET /ping
    GET /health
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from stocklink.config import Settings, load_settings
from stocklink.connectors.shopify import ShopifyConnector
from stocklink.errors import UsageError
from stocklink.routes.health import router as health_router
from stocklink.routes.links import router as links_router
from stocklink.token import LinkSigner


def create_app(settings: Settings | None = None, connector=None) -> FastAPI:
    """
    Build the app. With no settings, the lifespan loads them from the
    environment and a ConfigurationError stops startup before any request
    is served. With no connector, a ShopifyConnector is built from settings.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        cfg = settings or load_settings()
        app.state.settings = cfg
        app.state.signer = LinkSigner(cfg.link_secret)
        app.state.connector = connector or ShopifyConnector(
            store=cfg.shopify_store,
            token=cfg.shopify_token,
            location_id=cfg.location_id,
            api_version=cfg.shopify_api_version,
        )
        yield

    app = FastAPI(title="stocklink", version="0.1.0", lifespan=lifespan)
    app.include_router(links_router)
    app.include_router(health_router)
    app.add_exception_handler(UsageError, _usage_error)
    return app


async def _usage_error(request: Request, exc: UsageError):
    return PlainTextResponse(str(exc), status_code=400)


app = create_app()
