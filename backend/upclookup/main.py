"""
UPC Lookup API - FastAPI Main Entry

LOCAL:
    cd backend
    python -m uvicorn upclookup.main:app --reload --host 0.0.0.0 --port 8000

    curl -i http://127.0.0.1:8000/health
    curl -i -X POST http://127.0.0.1:8000/v1/lookup-upc \
        -H 'Content-Type: application/json' \
        -H "X-Gateway-Token: $GATEWAY_TOKEN" \
        -H 'X-Caller-Uid: dev' -H 'X-Caller-Email-Verified: true' \
        -d '{"upc": "012345678905"}'

DEV PROXY (direct-context lookups from a browser / CLI):
    DEV_PROXY_ENABLED=true python -m uvicorn upclookup.main:app --port 8000
    python -m upclookup 012345678905 --proxy http://127.0.0.1:8000 --go-upc-key <key>

PRODUCTION:
    python -m uvicorn upclookup.main:app --host 0.0.0.0 --port $PORT
    Set GO_UPC_API_KEY / UPCITEMDB_API_KEY / GATEWAY_TOKEN in the environment.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from upclookup.api.routes_lookup import router as lookup_router
from upclookup.api.routes_meta import router as meta_router
from upclookup.api.routes_proxy import router as proxy_router
from upclookup.core.config import settings


def create_app() -> FastAPI:
    logger = logging.getLogger(__name__)

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="UPC Lookup API",
        version=settings.APP_VERSION,
        description="Barcode to product resolution across Go-UPC, UPCItemDB and Open Food Facts",
    )

    # The inventory SPA calls this from the browser
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def root():
        return {
            "name": "UPC Lookup API",
            "status": "ok",
            "docs": "/docs",
            "health": "/health",
            "version": "/version",
        }

    app.include_router(meta_router)
    app.include_router(lookup_router)

    if not settings.GATEWAY_TOKEN:
        logger.warning("GATEWAY_TOKEN not set - every /v1/lookup-upc caller will be rejected as unauthenticated")

    if settings.DEV_PROXY_ENABLED:
        logger.warning("Dev forwarding proxy enabled - do not run this in production")
        app.include_router(proxy_router)

    return app


app = create_app()
