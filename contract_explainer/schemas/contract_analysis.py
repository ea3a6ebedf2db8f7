"""
Contract Analysis schemas for requests, responses and structured model output
"""

from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class UploadedDocument(BaseModel):
    """A file received for analysis, stored at a temporary path for one request"""
    model_config = ConfigDict(frozen=True)

    temporary_path: Path
    declared_media_type: str = ""
    size_bytes: int = 0
    original_name: Optional[str] = None


class ClauseSummary(BaseModel):
    """A single clause with a short plain-language summary"""
    title: str = Field(..., alias="titulo", min_length=1, description="Clause title")
    summary: str = Field(..., alias="resumo", min_length=1, description="Short summary of the clause")

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class ClassifiedSummary(BaseModel):
    """Clauses split into safe and risky groups"""
    safe_clauses: List[ClauseSummary] = Field(default_factory=list, alias="seguras")
    risky_clauses: List[ClauseSummary] = Field(default_factory=list, alias="riscos")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("safe_clauses", "risky_clauses", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return [] if v is None else v


class AnalyzeContractResponse(BaseModel):
    """Response of the contract analysis endpoint"""
    clausulas: str = Field(..., description="Plain-language risk analysis of the contract")


class SummarizeClausesRequest(BaseModel):
    """Request body of the clause classification endpoint"""
    clausulas: Optional[str] = Field(None, description="Clause text produced by a previous analysis")


class CheckoutSessionResponse(BaseModel):
    """Hosted checkout session redirect"""
    url: str


class ErrorResponse(BaseModel):
    """Error payload returned by every endpoint"""
    error: str = Field(..., description="Plain-language description of the failure")
    resposta: Optional[str] = Field(None, description="Raw model output, when interpretation failed")
