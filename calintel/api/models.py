from typing import Optional, Dict, Any
from pydantic import BaseModel


class EntrypointInfo(BaseModel):
    key: str
    description: Optional[str] = None
    price: int = 0
    input_schema: Dict[str, Any]


class InvokeResponse(BaseModel):
    key: str
    price: int
    output: Dict[str, Any]


class ErrorResponse(BaseModel):
    error: str
    detail: str


class HealthResponse(BaseModel):
    status: str = "healthy"
    name: str = "calendar-intel"
    version: str = "1.0.0"
    entrypoints_available: int = 0
