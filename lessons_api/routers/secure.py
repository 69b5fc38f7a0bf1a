"""
Routes that only exist to show the bearer token dependency.
"""

from typing import Any, Dict
from fastapi import APIRouter, Depends

from lessons_api.dependencies import verify_token
from lessons_api.models.items import ErrorResponse
from lessons_api.services.auth_service import AuthService

router = APIRouter(
    prefix="/secure",
    tags=["Authentication"],
    responses={401: {"model": ErrorResponse, "description": "Unauthorized"}}
)


@router.get("/me", summary="Check Token")
async def whoami(token: str = Depends(verify_token)) -> Dict[str, Any]:
    """Confirm the caller presented the API token."""
    return {"authenticated": True, "token_hint": AuthService.token_hint(token)}
