"""
Shopify connector: the inventory API that redeemed links act on.

Wraps two Admin REST endpoints:

    GET  /shop.json                      - reachability check (/ping)
    POST /inventory_levels/adjust.json   - apply +1/-1 to one inventory level

Error handling pattern
-----------------------
Every public method returns an ActionResult and never raises for API or
network failures:
  - urllib.error.HTTPError -> output={"error": <decoded JSON body>}, falling
    back to the raw body text, then to the HTTP reason
  - anything else (URLError, socket timeout, bad JSON) -> output={"error": str(e)}

There is no retry. A failed adjustment is reported to the caller as-is, and
retrying a timed-out POST could apply the delta twice.

Usage:
    shopify = ShopifyConnector(
        store="my-shop.myshopify.com",
        token=os.environ["SHOPIFY_TOKEN"],
        location_id=12345678,
    )
    result = shopify.adjust_inventory(inventory_item_id="4455", delta=-1)
"""
import json
import urllib.error
import urllib.request

from stocklink.config import DEFAULT_API_VERSION
from stocklink.models import ActionResult

# Seconds. Applies to connect and read.
DEFAULT_TIMEOUT = 10


class ShopifyConnector:
    """
    Thin Shopify Admin API client bound to one store and one location.

    Instantiate once at startup; the instance holds no per-request state.
    """

    def __init__(
        self,
        store: str,
        token: str,
        location_id: int,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._token = token
        self._location_id = location_id
        self._base_url = f"https://{store}/admin/api/{api_version}"
        self._timeout = timeout

    def _headers(self) -> dict:
        return {
            "X-Shopify-Access-Token": self._token,
            "Content-Type": "application/json",
        }

    def _request(self, method: str, path: str, body: dict | None = None) -> dict:
        data = json.dumps(body).encode() if body is not None else None
        req = urllib.request.Request(
            f"{self._base_url}{path}",
            data=data,
            headers=self._headers(),
            method=method,
        )
        with urllib.request.urlopen(req, timeout=self._timeout) as resp:
            return json.loads(resp.read() or b"{}")

    def _call(self, action: str, method: str, path: str, body: dict | None = None) -> ActionResult:
        try:
            data = self._request(method, path, body)
            return ActionResult(action=action, system="shopify", success=True, output=data)
        except urllib.error.HTTPError as e:
            return ActionResult(
                action=action,
                system="shopify",
                success=False,
                output={"error": _http_error_detail(e)},
            )
        except Exception as e:
            return ActionResult(
                action=action,
                system="shopify",
                success=False,
                output={"error": str(e)},
            )

    def get_shop(self) -> ActionResult:
        """Fetch the shop record. Used as a reachability and credential check."""
        return self._call("get_shop", "GET", "/shop.json")

    def adjust_inventory(self, inventory_item_id: str, delta: int) -> ActionResult:
        """
        Add delta to the available quantity of one item at the configured location.

        Args:
            inventory_item_id - Shopify inventory item id. Sent as a JSON number
                                when it is all digits, otherwise as-is.
            delta             - signed adjustment; the link layer only passes 1 or -1

        Returns:
            ActionResult - success=True with Shopify's {"inventory_level": {...}}
                           success=False with {"error": ...} on API or network failure

        Not idempotent: two calls apply the delta twice.
        """
        numeric = inventory_item_id.isascii() and inventory_item_id.isdigit()
        item_id = int(inventory_item_id) if numeric else inventory_item_id
        return self._call("adjust_inventory", "POST", "/inventory_levels/adjust.json", {
            "location_id": self._location_id,
            "inventory_item_id": item_id,
            "available_adjustment": delta,
        })


def _http_error_detail(e: urllib.error.HTTPError):
    """Best-effort decode of an HTTP error body: JSON, then text, then reason."""
    try:
        raw = e.read()
    except Exception:
        raw = b""
    if raw:
        try:
            return json.loads(raw)
        except ValueError:
            return raw.decode("utf-8", errors="replace")
    return f"HTTP {e.code}: {e.reason}"
