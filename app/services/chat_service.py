# app/services/chat_service.py

import logging
from typing import List, Dict, Optional
from app.core.config import settings
from app.database.crud import create_message, delete_message, get_messages_by_chat
from app.integrations import llm_client

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are Buz AI, a professional business strategist and marketing assistant. "
    "You help entrepreneurs plan, analyze, and build ideas clearly. "
    "If the user uploaded a file, use its content for context. Be precise, insightful, and strategic."
)

EMPTY_REPLY = "No response generated."


def build_messages(history: List[dict], prompt: str, file_content: Optional[str] = None) -> List[Dict[str, str]]:
    """
    Model input for one turn: system prompt, prior chat messages, then the new prompt.
    When the chat has an uploaded file its leading characters ride along with the prompt.
    """
    messages = [{"role": "system", "content": SYSTEM_PROMPT}]
    for message in history:
        messages.append({"role": message["role"], "content": message.get("text") or ""})

    if file_content:
        user_prompt = (
            f'User prompt: "{prompt}"\n\n'
            f"📄 File content:\n{file_content[:settings.FILE_CONTEXT_CHAR_LIMIT]}"
        )
    else:
        user_prompt = prompt
    messages.append({"role": "user", "content": user_prompt})
    return messages


async def generate_reply(db, chat: dict, prompt: str) -> str:
    """
    Stores the prompt, asks the model for a reply with the chat's history and
    stores the reply. If the model call fails the stored prompt is removed again
    and the error propagates.
    """
    chat_id = str(chat["_id"])
    history = await get_messages_by_chat(db, chat_id)
    if chat.get("file_content"):
        logger.info(f"Using uploaded file {chat.get('file_name') or 'unknown file'} for chat {chat_id}")

    user_message = await create_message(db, chat_id, "user", prompt)
    messages = build_messages(history, prompt, chat.get("file_content"))

    try:
        result = await llm_client.generate_chat_completion(messages)
    except Exception:
        await delete_message(db, user_message["_id"])
        raise

    result = result or EMPTY_REPLY
    await create_message(db, chat_id, "assistant", result)
    return result
