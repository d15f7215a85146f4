from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Error category")
    message: str = Field(..., description="Human readable detail")


class HealthResponse(BaseModel):
    status: str = "ok"
    message: str
    api: str
    freeSearches: str
