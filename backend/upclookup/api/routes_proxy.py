"""
Dev-only forwarding proxy for direct-context lookups.

    /api/goupc/<path>      -> GO_UPC_BASE_URL/<path>
    /api/upcitemdb/<path>  -> UPCITEMDB_BASE_URL/<path>

Only mounted when DEV_PROXY_ENABLED is true.
"""
import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Request, Response

from upclookup.api.deps import get_upstream_transport
from upclookup.core.config import settings
from upclookup.core.lookup import redact_key
from upclookup.core.providers import GO_UPC_PROXY_PREFIX, UPCITEMDB_PROXY_PREFIX

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dev-proxy"])

# Only what the providers need crosses the proxy
_FORWARDED_HEADERS = ("accept", "user_key", "user-agent")


async def _forward(
    base_url: str,
    path: str,
    request: Request,
    transport: Optional[httpx.AsyncBaseTransport],
) -> Response:
    url = f"{base_url.rstrip('/')}/{path}"
    headers = {k: v for k, v in request.headers.items() if k.lower() in _FORWARDED_HEADERS}

    try:
        async with httpx.AsyncClient(timeout=settings.PROVIDER_TIMEOUT_SECONDS, transport=transport) as client:
            r = await client.get(url, params=request.query_params.multi_items(), headers=headers)
    except httpx.HTTPError as e:
        logger.error("Dev proxy request to %s failed: %s", redact_key(url), redact_key(str(e)))
        raise HTTPException(
            status_code=502,
            detail={"error": "bad-gateway", "message": f"Upstream request failed: {type(e).__name__}"},
        )

    return Response(
        content=r.content,
        status_code=r.status_code,
        media_type=r.headers.get("content-type"),
    )


@router.get(GO_UPC_PROXY_PREFIX + "/{path:path}")
async def forward_go_upc(
    path: str,
    request: Request,
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
):
    return await _forward(settings.GO_UPC_BASE_URL, path, request, transport)


@router.get(UPCITEMDB_PROXY_PREFIX + "/{path:path}")
async def forward_upcitemdb(
    path: str,
    request: Request,
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
):
    return await _forward(settings.UPCITEMDB_BASE_URL, path, request, transport)
