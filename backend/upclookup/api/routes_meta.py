import os
from datetime import datetime, timezone

from fastapi import APIRouter

from upclookup.core.config import settings

router = APIRouter(tags=["meta"])


@router.get("/health")
def health():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.APP_VERSION,
    }


@router.get("/version")
def version():
    return {
        "version": settings.APP_VERSION,
        "build": settings.BUILD_ID,
        "git_commit": os.environ.get("GIT_COMMIT"),
    }
