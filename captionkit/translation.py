"""
Transcript translation for CaptionKit.

Translates a full ``start::end::text`` transcript into another language with
a chat completion request, keeping every timestamp as-is so the result is
valid caption index input.
"""

import logging
import os
from typing import Dict, List, Optional

import requests

from .errors import TranslationError

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.openai.com/v1"
DEFAULT_TRANSLATION_MODEL = "gpt-4o-mini"

SYSTEM_PROMPT = "You are a translation assistant."


def build_translation_messages(language: str, transcript: str) -> List[Dict[str, str]]:
    """Build the chat messages asking for a timestamp-preserving translation."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": (
                f"Translate the following timestamped transcript into {language}. "
                f"Return nothing else except the translated transcript, preserving all timestamps:\n\n"
                f"{transcript}"
            ),
        },
    ]


class TranslationClient:
    """
    Client for translating transcripts through the OpenAI chat completions API.

    Args:
        api_key: OpenAI API key (default: OPENAI_API_KEY environment variable)
        model: Chat model name
        api_base: API base URL
        timeout: Request timeout in seconds
        session: Optional requests session to reuse
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_TRANSLATION_MODEL,
        api_base: str = DEFAULT_API_BASE,
        timeout: int = 300,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def translate(self, language: str, transcript: str) -> str:
        """
        Translate a timestamped transcript.

        Args:
            language: Target language name (e.g. "Spanish")
            transcript: Transcript content, one ``start::end::text`` per line

        Returns:
            Translated transcript content

        Raises:
            TranslationError: If no API key is configured, the request fails,
                or the response has no message content
        """
        if not self.api_key:
            raise TranslationError("No OpenAI API key configured")

        payload = {
            "model": self.model,
            "messages": build_translation_messages(language, transcript),
            "temperature": 0,
        }

        logger.info(f"Requesting {language} translation ({self.model})")
        try:
            response = self.session.post(
                f"{self.api_base}/chat/completions",
                headers={"Authorization": f"Bearer {self.api_key}"},
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.error(f"Translation to {language} failed: {str(e)}")
            raise TranslationError(f"Translation to {language} failed: {str(e)}") from e
        except ValueError as e:
            raise TranslationError(f"Translation response is not JSON: {str(e)}") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise TranslationError(f"Unexpected translation response: {data!r}") from e

        if not content or not content.strip():
            raise TranslationError(f"Empty translation returned for {language}")

        if not content.endswith("\n"):
            content += "\n"
        return content
