"""System schemas."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    service: str = "storeit"
    storage_backend: str
