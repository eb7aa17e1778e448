"""
Pydantic models for the BigO Lens API.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AnalyzeRequest(BaseModel):
    """Request payload for code analysis."""
    code: str = Field(..., description="Source code to analyze")
    language: str = Field(..., description="Language tag, e.g. python or java")

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str) -> str:
        if not v:
            raise ValueError("Code is required")
        return v

    @field_validator("language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        if not v:
            raise ValueError("Language is required")
        return v


class AnalysisResult(BaseModel):
    """What the analyze endpoint returns."""
    linesOfCode: int = Field(..., ge=0)
    timeComplexity: str
    spaceComplexity: str
    explanation: Optional[str] = None


class NewAnalysis(BaseModel):
    """An analysis that has not been stored yet."""
    code: str
    language: str
    linesOfCode: int = Field(..., ge=0)
    timeComplexity: str
    spaceComplexity: str
    explanation: Optional[str] = None


class AnalysisRecord(NewAnalysis):
    """
    A stored analysis.

    Records are frozen: once the store hands one out it never changes.
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1)
    createdAt: datetime

    def to_result(self) -> AnalysisResult:
        return AnalysisResult(
            linesOfCode=self.linesOfCode,
            timeComplexity=self.timeComplexity,
            spaceComplexity=self.spaceComplexity,
            explanation=self.explanation,
        )


class ConnectionResponse(BaseModel):
    """Result of the provider connection test."""
    message: str
    connected: bool


class ErrorResponse(BaseModel):
    """Error response."""
    message: str = Field(..., description="Error message")
