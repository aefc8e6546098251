"""
Table extraction through a streaming multimodal model.
"""

from abc import ABC, abstractmethod
from typing import Callable, Iterable, Iterator, Optional

from . import config as app_config
from .core import GeminiClient, build_generation_config, log_token_usage, logger, prepare_image_for_gemini
from .errors import ExtractionError
from .image import EncodedPayload
from .parser import parse_table
from .schemas import TableData

ProgressCallback = Callable[[str], None]


class InferenceBackend(ABC):
    """
    Capability interface for the remote model.

    Implementations submit an image with instructions and yield the response
    as text fragments in arrival order.
    """

    @abstractmethod
    def stream_table(
        self,
        payload: EncodedPayload,
        instructions: str,
        system_instruction: str,
    ) -> Iterable[str]:
        ...


class GeminiBackend(InferenceBackend):
    """InferenceBackend backed by the Google Gemini streaming API."""

    def __init__(
        self,
        model_name: str = app_config.MODEL_CONFIG["default_model"],
        client: Optional[GeminiClient] = None,
        api_key: Optional[str] = None,
        temperature: Optional[float] = None,
    ):
        self.model_name = model_name
        self.client = client or GeminiClient(api_key=api_key)
        self.temperature = temperature

    def stream_table(
        self,
        payload: EncodedPayload,
        instructions: str,
        system_instruction: str,
    ) -> Iterator[str]:
        generation_config = build_generation_config(
            system_instruction=system_instruction,
            response_schema=app_config.TableRows,
            temperature=self.temperature,
        )
        image_part = prepare_image_for_gemini(payload.to_bytes(), payload.mime_type)
        logger.info(f"Sending image to Gemini model '{self.model_name}' ({payload.encoded_length} chars, {payload.mime_type})...")
        stream = self.client.stream_content(
            model_name=self.model_name,
            contents=[image_part, instructions],
            generation_config=generation_config,
        )
        last = None
        for chunk in stream:
            last = chunk
            yield chunk.text or ""
        logger.info("Gemini stream finished.")
        if last is not None:
            log_token_usage(last, logger)


def extract_table(
    payload: EncodedPayload,
    instructions: Optional[str] = None,
    on_progress: Optional[ProgressCallback] = None,
    backend: Optional[InferenceBackend] = None,
    system_instruction: str = app_config.PROMPT_TEMPLATES["system_instruction"],
    chunk_interval: int = app_config.PROGRESS_CONFIG["chunk_interval"],
) -> TableData:
    """
    Extract a table from an encoded image.

    Args:
        payload: Image payload produced by fit_payload.
        instructions: Task prompt; defaults to the "extract_table" template.
        on_progress: Optional callback(message) invoked synchronously in stream order.
        backend: Model backend; a GeminiBackend is created if omitted.
        system_instruction: Fixed instruction describing the output schema.
        chunk_interval: Report progress after every chunk_interval-th fragment.

    Returns:
        The parsed table, row 0 being the headers.

    Raises:
        ExtractionError: the model returned nothing or unparseable output.
    """
    def report(message: str) -> None:
        if on_progress:
            on_progress(message)

    if instructions is None:
        instructions = app_config.PROMPT_TEMPLATES["extract_table"]
    if backend is None:
        backend = GeminiBackend()

    report("Initializing AI model...")

    parts = []
    chunk_count = 0
    for fragment in backend.stream_table(payload, instructions, system_instruction):
        chunk_count += 1
        if fragment:
            parts.append(fragment)
            if chunk_count % chunk_interval == 0:
                report(f"Receiving data stream (chunk {chunk_count})...")

    report("Finalizing structure...")

    full_text = "".join(parts)
    if not full_text:
        raise ExtractionError("No data returned from the model.")

    logger.info(f"Received {len(full_text)} chars in {chunk_count} chunks.")
    try:
        return parse_table(full_text)
    except ExtractionError:
        logger.error(f"Could not parse model output: {full_text[:200]}")
        raise
