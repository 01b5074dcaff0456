from openai import AsyncOpenAI

from lendingwise.config.settings import settings
from lendingwise.errors import ConfigurationError


def get_openai_client() -> AsyncOpenAI:
    api_key = settings.api_key
    if not api_key:
        raise ConfigurationError("API_KEY is missing. Please ensure it is configured in the environment.")
    # One attempt, no client-side deadline.
    return AsyncOpenAI(
        api_key=api_key,
        base_url=settings.PROVIDER_BASE_URL,
        max_retries=0,
        timeout=None,
    )
