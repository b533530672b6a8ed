from fastapi import APIRouter, Body, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from typing import Any, Dict, List, Optional

from .models import EntrypointInfo, HealthResponse, InvokeResponse
from ..core.entrypoint import AgentContext
from ..core.registry import EntrypointRegistry

router = APIRouter()


def get_context(request: Request) -> AgentContext:
    return request.app.state.context


@router.get("/", response_model=HealthResponse)
async def health_check(request: Request):
    settings = get_context(request).settings
    return HealthResponse(
        name=settings.app_name,
        version=settings.app_version,
        entrypoints_available=len(EntrypointRegistry.list_entrypoints()),
    )


@router.get("/entrypoints", response_model=List[EntrypointInfo])
async def list_entrypoints():
    return [EntrypointInfo(**EntrypointRegistry.describe(key)) for key in EntrypointRegistry.list_entrypoints()]


@router.post("/entrypoints/{key}/invoke", response_model=InvokeResponse)
async def invoke_entrypoint(key: str, request: Request, payload: Optional[Dict[str, Any]] = Body(default=None)):
    try:
        entrypoint = EntrypointRegistry.create_entrypoint(key, get_context(request))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

    try:
        output = await entrypoint.invoke(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors())

    return InvokeResponse(key=key, price=entrypoint.price, output=output)
