"""Follow-up questions about an already analyzed product. Pure pass-through."""

import logging
from typing import Any, Dict

import config
from analysis.errors import UpstreamFailure
from core.llm_client import build_client, classify_error
from core.prompt import build_chat_prompt

logger = logging.getLogger(__name__)

CHAT_FALLBACK_MESSAGE = "Maaf, saya sedang pusing. Coba tanya lagi."


class ChatAssistant:
    def __init__(self, client=None, model: str = None):
        self.model = model or config.CHAT_MODEL
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = build_client()
        return self._client

    def reply(self, question: str, context: Dict[str, Any]) -> str:
        """
        Answer a question using the finalized analysis record as context.
        The reply is returned unmodified.

        Raises:
            UpstreamFailure: the chat model call did not complete
        """
        prompt = build_chat_prompt(question, context)
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as e:
            failure = classify_error(e)
            logger.error("Chat call failed (%s): %s", failure.kind, e)
            raise failure from e

        text = response.choices[0].message.content if response.choices else None
        if text is None:
            raise UpstreamFailure("Chat model returned no content")
        return text
