"""
OpenAI API client construction.
"""
from typing import Optional
from openai import AsyncOpenAI
from core.config import OPENAI_API_KEY


def build_openai_client(api_key: Optional[str] = OPENAI_API_KEY) -> Optional[AsyncOpenAI]:
    """
    Create the speech-to-text client, or None when no credential is configured.

    Callers receive the client explicitly; there is no process-wide instance.
    """
    if not api_key:
        return None
    return AsyncOpenAI(api_key=api_key)
