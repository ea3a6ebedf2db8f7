"""
OpenAI-related Pydantic schemas and types
"""

from typing import Dict, List
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator


class OpenAIErrorType(str, Enum):
    """Types of OpenAI API errors"""
    RATE_LIMIT = "rate_limit"
    TOKEN_LIMIT = "token_limit"
    INVALID_REQUEST = "invalid_request"
    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    SERVER_ERROR = "server_error"
    NETWORK = "network"
    EMPTY_RESPONSE = "empty_response"
    UNKNOWN = "unknown"


class ChatMessage(BaseModel):
    """Chat message for completion"""
    role: str = Field(..., pattern="^(system|user|assistant)$")
    content: str = Field(..., min_length=1)

    @field_validator('role')
    @classmethod
    def validate_role(cls, v):
        allowed = {"system", "user", "assistant"}
        if v not in allowed:
            raise ValueError(f"Role must be one of {allowed}")
        return v


class InstructionPair(BaseModel):
    """Role-separated prompt: a fixed system instruction and a user instruction"""
    model_config = ConfigDict(frozen=True)

    system: str = Field(..., min_length=1, description="System instruction (persona and guard rules)")
    user: str = Field(..., min_length=1, description="User instruction embedding the document content")


class AnalysisRequest(BaseModel):
    """Immutable request sent to the generative-text service"""
    model_config = ConfigDict(frozen=True)

    system_instruction: str
    user_instruction: str
    max_output_tokens: int = Field(..., gt=0)
    temperature: float = Field(..., ge=0.0, le=2.0)

    def to_messages(self) -> List[Dict[str, str]]:
        """Render as chat messages in the order the API expects"""
        return [
            ChatMessage(role="system", content=self.system_instruction).model_dump(),
            ChatMessage(role="user", content=self.user_instruction).model_dump(),
        ]
