from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException

from upclookup.api.deps import get_caller, get_lookup_context
from upclookup.core.context import Caller, LookupContext
from upclookup.core.errors import UPCLookupError
from upclookup.core.lookup import lookup_upc_trusted
from upclookup.schemas.product import ProductRecord

router = APIRouter(prefix="/v1", tags=["lookup"])


@router.post("/lookup-upc", response_model=ProductRecord, response_model_exclude_none=True)
async def lookup_upc(
    data: Any = Body(None),
    caller: Optional[Caller] = Depends(get_caller),
    context: LookupContext = Depends(get_lookup_context),
):
    """
    Resolve {"upc": "..."} to a product using server-side provider keys.

    401 unauthenticated / 403 permission-denied / 400 invalid-argument / 404 not-found
    """
    try:
        return await lookup_upc_trusted(data, caller, context)
    except UPCLookupError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
