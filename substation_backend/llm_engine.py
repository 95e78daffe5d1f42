# substation_backend/llm_engine.py - chat completions for the maintenance assistant
import requests

from substation_backend.config import chat_api_key, chat_base_url, chat_model, chat_timeout

SYSTEM_PROMPT = "You are a helpful maintenance assistant."
EMPTY_REPLY = "No response from AI."


class MissingApiKeyError(Exception):
    pass


class ChatServiceError(Exception):
    pass


def generate_chat_reply(message: str) -> str:
    """
    Send one technician question to the chat completions endpoint and return
    the first choice's text.
    """
    api_key = chat_api_key()
    if not api_key:
        raise MissingApiKeyError("DeepSeek API key is not configured.")

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json"
    }

    payload = {
        "model": chat_model(),
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": message}
        ],
        "temperature": 0.7,
        "max_tokens": 500,
        "stream": False
    }

    try:
        response = requests.post(
            f"{chat_base_url()}/chat/completions",
            headers=headers,
            json=payload,
            timeout=chat_timeout()
        )
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise ChatServiceError(f"Chat API error: {str(e)}") from e

    try:
        result = response.json()
    except ValueError as e:
        raise ChatServiceError(f"Chat API returned non-JSON response: {str(e)}") from e

    try:
        reply = result["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        reply = None

    return reply if reply else EMPTY_REPLY


def generate_scripted_reply(message: str) -> str:
    """Canned keyword replies used when CHAT_MODE=scripted"""
    text = message.lower()
    if "broken" in text or "fault" in text:
        return (
            "Based on sensor data, the equipment shows abnormal current readings. I recommend checking "
            "connection lines and fuses. Historical records indicate similar faults are usually caused by poor contact."
        )
    if "check" in text or "inspect" in text:
        return (
            "Yes, I recommend inspecting that component. Based on equipment runtime and maintenance records, "
            "the component may show signs of wear. Please use a multimeter to measure resistance values."
        )
    if "replace" in text:
        return (
            "Equipment C has been operating for 8 years, exceeding the recommended service life (6 years). "
            "Replacement is recommended. Spare parts are in stock, model XYZ-2024."
        )
    return (
        "I understand your question. Please provide more detailed information, such as specific fault symptoms, "
        "equipment model, or error codes, so I can give more accurate advice."
    )
