# src/propeval/api/schemas.py
from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict


class HealthResponse(BaseModel):
    status: str
    message: str
    timestamp: str
    version: str


class AnalyzeResponse(BaseModel):
    """
    Envelope for /api/analyze.

    `data` is AnalysisResult.to_dict(); keep it a plain dict so the camelCase
    shape reaches the client untouched.
    """
    model_config = ConfigDict(extra="forbid")

    success: bool = True
    data: dict[str, Any]


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    fields: list[str] | None = None

    def to_content(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
