"""
UPC lookup: sanitize -> walk the provider chain -> first normalized match wins.

Providers are queried one at a time in fixed priority order. Anything a
provider does wrong (timeout, network error, 401/403, other non-2xx, a body
without a product) is logged and the chain moves on; only bad input, auth
failures and "nothing matched" ever reach the caller.
"""
from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional, Union

import httpx

from upclookup.core.context import Caller, LookupContext
from upclookup.core.errors import (
    PermissionDeniedError,
    ProductNotFoundError,
    UnauthenticatedError,
)
from upclookup.core.providers import PROVIDERS, Provider, ProviderRequest
from upclookup.core.upc import validate_upc
from upclookup.schemas.product import ProductRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Matched:
    record: ProductRecord


@dataclass(frozen=True)
class NoMatch:
    reason: str


@dataclass(frozen=True)
class ProviderError:
    reason: str
    status_code: Optional[int] = None


ProviderOutcome = Union[Matched, NoMatch, ProviderError]


def redact_key(s: str) -> str:
    """
    Redact 'key=...' in URLs or text so we never leak API keys in logs.
    """
    if not s:
        return s
    return re.sub(r"(key=)([^&\s]+)", r"\1REDACTED", s)


async def query_provider(
    client: httpx.AsyncClient,
    provider: Provider,
    request: ProviderRequest,
    upc: str,
    *,
    timeout: float,
) -> ProviderOutcome:
    """
    One GET against one provider, folded into a typed outcome.
    Never raises for provider-side problems.
    """
    try:
        resp = await asyncio.wait_for(
            client.get(request.url, params=request.params, headers=request.headers),
            timeout=timeout,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException):
        logger.error("%s lookup timed out after %ss (upc=%s)", provider.name, timeout, upc)
        return ProviderError("timeout")
    except httpx.HTTPError as e:
        logger.error(
            "%s lookup failed (upc=%s): %s", provider.name, upc, redact_key(f"{type(e).__name__}: {e}")
        )
        return ProviderError("network")

    if resp.status_code in (401, 403):
        logger.warning(
            "%s unauthorized - check API key (upc=%s, status=%s)", provider.name, upc, resp.status_code
        )
        return ProviderError("unauthorized", resp.status_code)

    if not resp.is_success:
        logger.info("%s returned HTTP %s (upc=%s)", provider.name, resp.status_code, upc)
        return ProviderError("http_status", resp.status_code)

    try:
        data: Any = resp.json()
    except ValueError:
        logger.info("%s returned a non-JSON body (upc=%s)", provider.name, upc)
        return NoMatch("invalid_json")

    payload = provider.extract(data)
    if payload is None:
        logger.info("%s has no product for upc=%s", provider.name, upc)
        return NoMatch("no_product")

    return Matched(provider.normalize(upc, payload))


async def resolve_upc(
    upc: str,
    context: LookupContext,
    *,
    uid: Optional[str] = None,
) -> Optional[ProductRecord]:
    """
    Walk the chain for an already-sanitized UPC.
    Returns the first match, or None once every provider has been tried.
    """
    async with httpx.AsyncClient(timeout=context.timeout, transport=context.transport) as client:
        for provider in PROVIDERS:
            request = provider.build_request(upc, context)
            if request is None:
                logger.debug("%s skipped - no API key configured", provider.name)
                continue

            outcome = await query_provider(client, provider, request, upc, timeout=context.timeout)
            if isinstance(outcome, Matched):
                logger.info(
                    "%s lookup successful (upc=%s, uid=%s, mode=%s)",
                    provider.name, upc, uid, request.mode or "default",
                )
                return outcome.record

    logger.info("UPC lookup failed - no results (upc=%s, uid=%s)", upc, uid)
    return None


async def lookup_upc(raw: Any, context: Optional[LookupContext] = None) -> Optional[ProductRecord]:
    """
    Direct-context lookup.

    The context may carry caller-held keys and a proxy_base_url. That is only
    acceptable for development: whoever runs this can see the keys.

    Returns None when no provider matched; raises InvalidArgumentError for
    bad input before any request is made.
    """
    upc = validate_upc(raw)
    return await resolve_upc(upc, context or LookupContext.from_settings())


async def lookup_upc_trusted(
    data: Any,
    caller: Optional[Caller],
    context: Optional[LookupContext] = None,
) -> ProductRecord:
    """
    Trusted-context lookup. Keys come from server settings only.

    Raises, in order of checking:
      UnauthenticatedError   no caller
      PermissionDeniedError  caller's email not verified
      InvalidArgumentError   missing / non-string / malformed UPC
      ProductNotFoundError   chain exhausted
    """
    if caller is None:
        raise UnauthenticatedError("Must be authenticated to lookup UPC codes")

    if not caller.email_verified:
        raise PermissionDeniedError("Email must be verified to use this service")

    raw = data.get("upc") if isinstance(data, dict) else None
    upc = validate_upc(raw)

    record = await resolve_upc(upc, context or LookupContext.from_settings(), uid=caller.uid)
    if record is None:
        raise ProductNotFoundError("No product found for that UPC code")
    return record
