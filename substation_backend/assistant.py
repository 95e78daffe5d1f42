# substation_backend/assistant.py
from fastapi import APIRouter, Depends, HTTPException

from substation_backend.dependencies import DashboardSession, get_session
from substation_backend.models import ChatRequest

router = APIRouter()


@router.get("")
def get_transcript(session: DashboardSession = Depends(get_session)):
    return {"messages": [message.model_dump() for message in session.chat.messages]}


# Failures come back as assistant messages, never as HTTP errors
@router.post("")
def send_message(data: ChatRequest, session: DashboardSession = Depends(get_session)):
    if not data.message.strip():
        raise HTTPException(status_code=400, detail="Message cannot be empty")

    appended = session.chat.send(data.message)
    return {"messages": [message.model_dump() for message in appended]}
