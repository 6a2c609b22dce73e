from pydantic import BaseModel, Field
from typing import Any, Dict, Optional


class AnalyzeRequest(BaseModel):
    image: Optional[str] = Field(None, description="Base64 image, optionally a data URI")


class ChatRequest(BaseModel):
    question: Optional[str] = None
    context: Dict[str, Any] = Field(default_factory=dict, description="Finalized analysis record")


class ChatReply(BaseModel):
    reply: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
