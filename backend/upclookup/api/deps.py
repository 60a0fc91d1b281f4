"""
Shared FastAPI dependencies.

Caller identity is asserted by the authenticating gateway in front of this
service (X-Caller-Uid / X-Caller-Email-Verified). Those headers are only
believed when X-Gateway-Token matches GATEWAY_TOKEN; with no token configured
every caller is anonymous.
"""
import hmac
from typing import Optional

import httpx
from fastapi import Depends, Header

from upclookup.core.config import settings
from upclookup.core.context import Caller, LookupContext

_TRUTHY = {"1", "true", "yes"}


def get_upstream_transport() -> Optional[httpx.AsyncBaseTransport]:
    # None = real network. Tests override this with httpx.MockTransport.
    return None


def get_lookup_context(
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
) -> LookupContext:
    return LookupContext.from_settings(settings, transport=transport)


def get_caller(
    x_caller_uid: Optional[str] = Header(None),
    x_caller_email_verified: Optional[str] = Header(None),
    x_gateway_token: Optional[str] = Header(None),
) -> Optional[Caller]:
    expected = settings.GATEWAY_TOKEN
    if not expected or not x_gateway_token:
        return None
    if not hmac.compare_digest(x_gateway_token.encode(), expected.encode()):
        return None

    uid = (x_caller_uid or "").strip()
    if not uid:
        return None

    verified = (x_caller_email_verified or "").strip().lower() in _TRUTHY
    return Caller(uid=uid, email_verified=verified)
