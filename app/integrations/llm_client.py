# app/integrations/llm_client.py

import logging
from typing import List, Dict
import google.generativeai as genai
from google.generativeai import GenerativeModel
from openai import AsyncOpenAI
from app.core.config import settings

logger = logging.getLogger(__name__)

openai_client: AsyncOpenAI = None
google_gemini_model: GenerativeModel = None

def initialize_llm_clients():
    """Creates the client for the provider that LLM_MODEL_NAME points at."""
    global openai_client, google_gemini_model
    if settings.LLM_MODEL_NAME.startswith("gemini"):
        if settings.GOOGLE_API_KEY:
            genai.configure(api_key=settings.GOOGLE_API_KEY)
            google_gemini_model = genai.GenerativeModel(settings.LLM_MODEL_NAME)
            logger.info("Google Gemini client initialized.")
        else:
            logger.warning("Google API key not found. Gemini client not initialized.")
    elif settings.OPENAI_API_KEY:
        openai_client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
        logger.info("OpenAI client initialized.")
    else:
        logger.warning("OpenAI API key not found. OpenAI client not initialized.")


def _as_transcript(messages: List[Dict[str, str]]) -> str:
    lines = []
    for message in messages:
        lines.append(f"{message['role'].capitalize()}: {message['content']}")
    lines.append("Assistant:")
    return "\n\n".join(lines)


async def generate_chat_completion(messages: List[Dict[str, str]]) -> str:
    """
    Sends role/content messages to the configured model and returns the reply text.

    Raises:
        RuntimeError: the provider call failed or no client is configured
    """
    if settings.LLM_MODEL_NAME.startswith("gemini"):
        if not google_gemini_model:
            raise RuntimeError("Google Gemini client not initialized. Check your API key.")
        try:
            response = await google_gemini_model.generate_content_async(
                _as_transcript(messages),
                generation_config={
                    "temperature": settings.LLM_TEMPERATURE,
                    "max_output_tokens": settings.LLM_MAX_TOKENS,
                },
            )
            return (response.text or "").strip()
        except Exception as e:
            logger.error(f"Error calling Google Gemini: {e}")
            raise RuntimeError(f"Failed to generate completion: {e}")

    if not openai_client:
        raise RuntimeError("OpenAI client not initialized. Check your API key.")
    try:
        completion = await openai_client.chat.completions.create(
            model=settings.LLM_MODEL_NAME,
            messages=messages,
            temperature=settings.LLM_TEMPERATURE,
            max_tokens=settings.LLM_MAX_TOKENS,
        )
    except Exception as e:
        logger.error(f"Error calling OpenAI: {e}")
        raise RuntimeError(f"Failed to generate completion: {e}")

    if not completion.choices:
        return ""
    return (completion.choices[0].message.content or "").strip()
