from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from analysis.errors import UpstreamFailure
from api.models import ChatReply, ChatRequest, ErrorResponse
from core.chat import CHAT_FALLBACK_MESSAGE, ChatAssistant

router = APIRouter(tags=["chat"])


def get_chat_assistant() -> ChatAssistant:
    return ChatAssistant()


@router.post("/api/chat", response_model=ChatReply, responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
def chat(data: ChatRequest, assistant: ChatAssistant = Depends(get_chat_assistant)):
    """Answer a follow-up question about an analyzed product."""
    if not data.question or not data.question.strip():
        return JSONResponse(status_code=400, content={"error": CHAT_FALLBACK_MESSAGE})
    try:
        reply = assistant.reply(data.question, data.context)
    except UpstreamFailure:
        return JSONResponse(status_code=500, content={"error": CHAT_FALLBACK_MESSAGE})
    return ChatReply(reply=reply)
