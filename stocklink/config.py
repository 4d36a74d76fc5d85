"""
Process configuration, read once at startup.

Required env vars (a .env file in the working directory is loaded first):

    SHOPIFY_STORE=my-shop.myshopify.com
    SHOPIFY_TOKEN=shpat_xxx
    LOCATION_ID=12345678
    LINK_SECRET=$(openssl rand -hex 32)

Optional:

    SHOPIFY_API_VERSION=2024-10
    PORT=3000

load_settings() raises ConfigurationError naming every missing or malformed
variable, so a bad deploy fails once with the full list instead of one
variable at a time.
"""
import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from stocklink.errors import ConfigurationError

DEFAULT_API_VERSION = "2024-10"
DEFAULT_PORT = 3000

_REQUIRED = ("SHOPIFY_STORE", "SHOPIFY_TOKEN", "LOCATION_ID", "LINK_SECRET")


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    shopify_store: str
    shopify_token: str
    location_id: int
    link_secret: str
    shopify_api_version: str = DEFAULT_API_VERSION
    port: int = DEFAULT_PORT


def load_settings(env: dict | None = None) -> Settings:
    """
    Build Settings from env (defaults to os.environ, after loading .env).

    Pass an explicit dict in tests to keep the real environment out of it.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    problems = [name for name in _REQUIRED if not env.get(name)]

    location_id = env.get("LOCATION_ID", "")
    if location_id and not _is_int(location_id):
        problems.append(f"LOCATION_ID must be an integer (got {location_id!r})")

    port = env.get("PORT") or str(DEFAULT_PORT)
    if not _is_int(port):
        problems.append(f"PORT must be an integer (got {port!r})")

    if problems:
        raise ConfigurationError(
            "Missing or invalid env vars: " + ", ".join(problems) + ". Check .env"
        )

    return Settings(
        shopify_store=env["SHOPIFY_STORE"],
        shopify_token=env["SHOPIFY_TOKEN"],
        location_id=int(location_id),
        link_secret=env["LINK_SECRET"],
        shopify_api_version=env.get("SHOPIFY_API_VERSION") or DEFAULT_API_VERSION,
        port=int(port),
    )


def _is_int(value: str) -> bool:
    return value.isascii() and value.isdigit()
