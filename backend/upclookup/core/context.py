from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

import httpx

from upclookup.core.config import Settings, settings


@dataclass(frozen=True)
class Caller:
    """Identity of a trusted-context caller, as asserted by the auth gateway."""
    uid: str
    email_verified: bool = False


@dataclass(frozen=True)
class LookupContext:
    """
    Where credentials live and how requests are routed for one lookup.

    Trusted context: built from server settings, no proxy.
    Direct context: keys may be held by the caller and Go-UPC / UPCItemDB
    requests can be sent through `proxy_base_url` (the dev forwarding proxy).
    """
    go_upc_key: str = ""
    upcitemdb_key: str = ""

    go_upc_base_url: str = "https://go-upc.com"
    upcitemdb_base_url: str = "https://api.upcitemdb.com"
    openfoodfacts_base_url: str = "https://world.openfoodfacts.org"

    timeout: float = 10.0
    user_agent: str = "UPCLookup/1.0"

    proxy_base_url: Optional[str] = None

    # Tests swap in httpx.MockTransport here
    transport: Optional[httpx.AsyncBaseTransport] = field(default=None, compare=False, repr=False)

    @classmethod
    def from_settings(cls, s: Optional[Settings] = None, **overrides) -> "LookupContext":
        s = s or settings
        ctx = cls(
            go_upc_key=(s.GO_UPC_API_KEY or "").strip(),
            upcitemdb_key=(s.UPCITEMDB_API_KEY or "").strip(),
            go_upc_base_url=s.GO_UPC_BASE_URL,
            upcitemdb_base_url=s.UPCITEMDB_BASE_URL,
            openfoodfacts_base_url=s.OPENFOODFACTS_BASE_URL,
            timeout=s.PROVIDER_TIMEOUT_SECONDS,
            user_agent=s.USER_AGENT,
        )
        return replace(ctx, **overrides) if overrides else ctx

    def base_url(self, host: str, proxy_prefix: Optional[str] = None) -> str:
        """
        Resolve the base URL for a provider:
          direct:  https://go-upc.com
          proxied: http://localhost:8000/api/goupc
        """
        if self.proxy_base_url and proxy_prefix:
            return self.proxy_base_url.rstrip("/") + proxy_prefix
        return host.rstrip("/")
