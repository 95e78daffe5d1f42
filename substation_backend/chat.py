# substation_backend/chat.py
from datetime import datetime
from typing import Callable, List

from substation_backend import llm_engine
from substation_backend.config import chat_mode
from substation_backend.models import ChatMessage

GREETING = (
    "Hello! I'm your maintenance assistant. Please tell me about any issues you encounter, "
    "and I'll provide guidance based on equipment data and historical cases."
)
MISSING_KEY_REPLY = "Error: DeepSeek API key is not configured."
FAILURE_REPLY = "Error: Failed to connect to AI service."


class ChatAssistant:
    """Append-only transcript between the technician and the assistant."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._clock = clock
        self.messages: List[ChatMessage] = [self._message("assistant", GREETING)]

    def _message(self, role: str, text: str) -> ChatMessage:
        return ChatMessage(role=role, message=text, timestamp=self._clock().strftime("%H:%M"))

    def send(self, message: str) -> List[ChatMessage]:
        """
        Record the technician message, then the assistant reply or an inline
        error. Returns the messages appended by this call.
        """
        if not message.strip():
            return []

        question = self._message("technician", message)
        self.messages.append(question)

        try:
            if chat_mode() == "scripted":
                reply = llm_engine.generate_scripted_reply(message)
            else:
                reply = llm_engine.generate_chat_reply(message)
        except llm_engine.MissingApiKeyError:
            print("DeepSeek API key is not set.")
            reply = MISSING_KEY_REPLY
        except Exception as e:
            print(f"Error calling chat API: {str(e)}")
            reply = f"{FAILURE_REPLY} {str(e)}".strip()

        answer = self._message("assistant", reply)
        self.messages.append(answer)
        return [question, answer]
