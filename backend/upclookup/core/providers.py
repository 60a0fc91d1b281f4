"""
Product-data providers, in the order they are queried.

Each provider knows how to build its request and how to map its own JSON
shape onto ProductRecord. For every canonical field a provider lists the
source keys to consult; the first one that is present wins.

  1. Go-UPC          paid, needs GO_UPC_API_KEY (skipped without it)
  2. UPCItemDB       trial mode without a key, /prod/v1 with one
  3. Open Food Facts free, food products only, always last
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple
from urllib.parse import quote

from upclookup.core.context import LookupContext
from upclookup.schemas.product import ProductRecord

# Path prefixes on the dev forwarding proxy
GO_UPC_PROXY_PREFIX = "/api/goupc"
UPCITEMDB_PROXY_PREFIX = "/api/upcitemdb"


@dataclass(frozen=True)
class ProviderRequest:
    url: str
    params: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    mode: Optional[str] = None


@dataclass(frozen=True)
class Provider:
    name: str
    priority: int
    requires_credential: bool
    # returns None when the provider must be skipped (no request made)
    build_request: Callable[[str, LookupContext], Optional[ProviderRequest]]
    # pulls the product object out of the response body, None = no product
    extract: Callable[[Any], Optional[Dict[str, Any]]]
    normalize: Callable[[str, Dict[str, Any]], ProductRecord]


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def _as_text(value: Any) -> Optional[str]:
    """
    Examine a raw provider value before it enters the record.
    Strings pass through, numbers become strings, anything else is "not present".
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


def first_present(source: Dict[str, Any], *keys: str, default: Optional[str] = None) -> Optional[str]:
    for key in keys:
        value = _as_text(source.get(key))
        if value is not None:
            return value
    return default


def first_image(source: Dict[str, Any], list_key: str, *keys: str, default: Optional[str] = "") -> Optional[str]:
    """First element of an image array when there is one, else the single-image keys."""
    images = source.get(list_key)
    if isinstance(images, list) and images:
        first = _as_text(images[0])
        if first is not None:
            return first
    return first_present(source, *keys, default=default)


def _base_headers(ctx: LookupContext) -> Dict[str, str]:
    return {"Accept": "application/json", "User-Agent": ctx.user_agent}


def _product_object(data: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(data, dict):
        return None
    product = data.get("product")
    return product if isinstance(product, dict) else None


# ---------------------------------------------------------------------------
# Go-UPC
# ---------------------------------------------------------------------------

def _go_upc_request(upc: str, ctx: LookupContext) -> Optional[ProviderRequest]:
    if not ctx.go_upc_key:
        return None
    base = ctx.base_url(ctx.go_upc_base_url, GO_UPC_PROXY_PREFIX)
    return ProviderRequest(
        url=f"{base}/api/v1/code/{quote(upc, safe='')}",
        params={"key": ctx.go_upc_key},
        headers=_base_headers(ctx),
    )


def normalize_go_upc(upc: str, product: Dict[str, Any]) -> ProductRecord:
    return ProductRecord(
        upc=upc,
        title=first_present(product, "title", "name", "product_name"),
        brand=first_present(product, "brand", "manufacturer", "company"),
        model=first_present(product, "model", "mpn", "asin", "part_number", default=""),
        description=first_present(product, "description", "overview", "long_description"),
        image_url=first_image(product, "images", "image"),
        category=first_present(product, "category", "category_name", default=""),
    )


# ---------------------------------------------------------------------------
# UPCItemDB
# ---------------------------------------------------------------------------

def _upcitemdb_request(upc: str, ctx: LookupContext) -> ProviderRequest:
    headers = _base_headers(ctx)
    if ctx.upcitemdb_key:
        mode = "prod/v1"
        headers["user_key"] = ctx.upcitemdb_key
    else:
        mode = "prod/trial"

    base = ctx.base_url(ctx.upcitemdb_base_url, UPCITEMDB_PROXY_PREFIX)
    return ProviderRequest(
        url=f"{base}/{mode}/lookup",
        params={"upc": upc},
        headers=headers,
        mode="authenticated" if ctx.upcitemdb_key else "trial",
    )


def _upcitemdb_item(data: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(data, dict):
        return None
    items = data.get("items")
    if not isinstance(items, list) or not items:
        return None
    return items[0] if isinstance(items[0], dict) else None


def normalize_upcitemdb(upc: str, item: Dict[str, Any]) -> ProductRecord:
    return ProductRecord(
        upc=upc,
        title=first_present(item, "title", "brand"),
        brand=first_present(item, "brand", "manufacturer"),
        model=first_present(item, "model", "asin", default=""),
        description=first_present(item, "description", "title", default=""),
        image_url=first_image(item, "images"),
        category=first_present(item, "category", "categoryName", default=""),
    )


# ---------------------------------------------------------------------------
# Open Food Facts
# ---------------------------------------------------------------------------

def _openfoodfacts_request(upc: str, ctx: LookupContext) -> ProviderRequest:
    # no proxy prefix: OFF serves CORS headers, always called directly
    base = ctx.base_url(ctx.openfoodfacts_base_url)
    return ProviderRequest(
        url=f"{base}/api/v2/product/{quote(upc, safe='')}.json",
        headers=_base_headers(ctx),
    )


def normalize_openfoodfacts(upc: str, product: Dict[str, Any]) -> ProductRecord:
    return ProductRecord(
        upc=upc,
        title=first_present(product, "product_name_en", "product_name", default=""),
        brand=first_present(product, "brands", "brand_owner", default=""),
        model=first_present(product, "code", default=""),
        description=first_present(
            product, "generic_name_en", "generic_name", "ingredients_text", default=""
        ),
        image_url=first_present(product, "image_url", default=""),
        category=first_present(product, "categories", default=""),
    )


# ---------------------------------------------------------------------------
# Chain
# ---------------------------------------------------------------------------

GO_UPC = Provider(
    name="Go-UPC",
    priority=1,
    requires_credential=True,
    build_request=_go_upc_request,
    extract=_product_object,
    normalize=normalize_go_upc,
)

UPCITEMDB = Provider(
    name="UPCItemDB",
    priority=2,
    requires_credential=False,
    build_request=_upcitemdb_request,
    extract=_upcitemdb_item,
    normalize=normalize_upcitemdb,
)

OPEN_FOOD_FACTS = Provider(
    name="OpenFoodFacts",
    priority=3,
    requires_credential=False,
    build_request=_openfoodfacts_request,
    extract=_product_object,
    normalize=normalize_openfoodfacts,
)

# Fixed order, never reshuffled at runtime
PROVIDERS: Tuple[Provider, ...] = tuple(
    sorted((GO_UPC, UPCITEMDB, OPEN_FOOD_FACTS), key=lambda p: p.priority)
)
