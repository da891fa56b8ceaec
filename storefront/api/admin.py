"""
Admin token verification endpoint
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from storefront.dependencies import get_admin_verifier
from storefront.errors import UpstreamError
from storefront.schemas.admin import AdminTokenRequest
from storefront.services.admin_auth import AdminVerifier

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["admin"])

DENIED = {"isValid": False}


@router.post("/verify-admin", summary="Verify admin identity token")
def verify_admin(
    payload: Optional[AdminTokenRequest] = None,
    verifier: AdminVerifier = Depends(get_admin_verifier)
):
    """
    Authoritative admin check

    - 401 when no token is supplied
    - 403 when the token is invalid, expired or not on the allow-list
    - 500 when the identity provider is unavailable
    """
    token = payload.token if payload else None
    if not token:
        return JSONResponse(status_code=401, content=DENIED)

    try:
        result = verifier.verify(token)
    except UpstreamError as e:
        logger.error(f"Admin verification error: {e}")
        return JSONResponse(status_code=500, content=DENIED)

    if not result.is_valid:
        return JSONResponse(status_code=403, content=DENIED)
    return result.model_dump(by_alias=True, exclude_none=True)
