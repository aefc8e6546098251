"""
Core utilities for talking to Gemini: logging, client management and request configuration.
"""

import os
import logging
from typing import Optional, Dict, Any, Iterator
from google import genai
from google.genai import types
from ratelimit import limits, sleep_and_retry

from . import config

LOG_FORMAT = "[%(asctime)s] %(levelname)s:%(name)s:%(message)s"
API_KEY_VARIABLES = ("GEMINI_API_KEY", "GOOGLE_API_KEY")


def setup_logging(level: int = logging.INFO, filename: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger.

    Streamlit re-executes the app script on every interaction, so a handler is
    only attached the first time.
    """
    package_logger = logging.getLogger("scribe_table")
    package_logger.setLevel(level)
    if not package_logger.handlers:
        handler = logging.FileHandler(filename) if filename else logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    return package_logger

logger = setup_logging()


def get_api_key() -> str:
    """Return the first Gemini API key found in the environment."""
    for name in API_KEY_VARIABLES:
        api_key = os.getenv(name)
        if api_key:
            return api_key
    raise ValueError(f"One of {', '.join(API_KEY_VARIABLES)} environment variables is required")


class GeminiClient:
    """Lazily connected Gemini client with a rate-limited streaming call."""

    def __init__(self, api_key: Optional[str] = None):
        self.api_key = api_key or get_api_key()
        self._client: Optional[genai.Client] = None

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    @sleep_and_retry
    @limits(calls=15, period=60)
    def stream_content(self, model_name: str, contents, generation_config: dict) -> Iterator[types.GenerateContentResponse]:
        """
        Start a streamed generation. Blocks instead of failing when the rate limit is hit.

        The returned iterator is lazy: chunks arrive as the caller consumes it.
        """
        return self.client.models.generate_content_stream(
            model=model_name,
            contents=contents,
            config=generation_config
        )


def prepare_image_for_gemini(data: bytes, mime_type: str) -> types.Part:
    """Wrap raw image bytes in a types.Part for the Gemini API."""
    return types.Part.from_bytes(data=data, mime_type=mime_type)


def log_token_usage(response, logger):
    """Log token usage from Gemini response if available."""
    usage = getattr(response, 'usage_metadata', None)
    if usage:
        prompt_tokens = getattr(usage, 'prompt_token_count', None)
        thoughts_tokens = getattr(usage, 'thoughts_token_count', None)
        candidates_tokens = getattr(usage, 'candidates_token_count', None)
        total_tokens = getattr(usage, 'total_token_count', None)

        logger.info(f"Token usage - prompt: {prompt_tokens}, thoughts: {thoughts_tokens}, output: {candidates_tokens}, total: {total_tokens}")

def build_generation_config(
    system_instruction: Optional[str] = None,
    response_schema: Optional[types.Schema] = None,
    temperature: Optional[float] = None,
    max_output_tokens: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Builds a generation configuration dictionary for the Gemini API.

    Args:
        system_instruction: Fixed instruction describing the expected output.
        response_schema: The schema for the response.
        temperature: The temperature.
        max_output_tokens: The maximum number of output tokens.

    Returns:
        A dictionary representing the generation configuration.
    """
    gen_config = {
        "temperature": temperature if temperature is not None else config.MODEL_CONFIG["generation_config"]["temperature"],
        "max_output_tokens": max_output_tokens if max_output_tokens is not None else config.MODEL_CONFIG["generation_config"]["max_output_tokens"],
    }

    if system_instruction:
        gen_config["system_instruction"] = system_instruction

    if response_schema:
        gen_config["response_mime_type"] = "application/json"
        gen_config["response_schema"] = response_schema.to_json_dict()

    return gen_config
