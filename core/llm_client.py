"""
OpenAI client construction and error classification shared by the vision
analyzer and the chat assistant.
"""

import openai
from openai import OpenAI

import config
from analysis.errors import CONFIGURATION, GENERIC, UpstreamFailure

# Errors an operator fixes in settings, not by resubmitting
_CONFIGURATION_ERRORS = (
    openai.AuthenticationError,
    openai.PermissionDeniedError,
    openai.NotFoundError,
)


def build_client(api_key: str = None, timeout: float = None) -> OpenAI:
    """
    Create an OpenAI client with the upstream time budget and no retries.

    Raises:
        UpstreamFailure: (configuration) if no API key is configured
    """
    api_key = api_key or config.OPENAI_API_KEY
    if not api_key:
        raise UpstreamFailure("OPENAI_API_KEY is not set", kind=CONFIGURATION)
    return OpenAI(
        api_key=api_key,
        timeout=timeout or config.UPSTREAM_TIMEOUT_SECONDS,
        max_retries=0,
    )


def classify_error(error: Exception) -> UpstreamFailure:
    """Map an SDK exception onto UpstreamFailure(configuration|generic)."""
    if isinstance(error, UpstreamFailure):
        return error
    if isinstance(error, _CONFIGURATION_ERRORS):
        return UpstreamFailure(f"Model unavailable: {error}", kind=CONFIGURATION)
    return UpstreamFailure(f"Upstream call failed: {error}", kind=GENERIC)
