"""
Top-level orchestration of one upload: validate, fit, extract, hold.
"""
from typing import Callable, Optional

from . import config
from .core import logger
from .errors import NoDataDetectedError
from .extraction import InferenceBackend, extract_table
from .grid import GridModel
from .image import fit_payload, load_upload
from .session import (
    Event,
    ExtractionFailed,
    ExtractionSucceeded,
    ProgressReported,
    SessionState,
    UploadStarted,
    transition,
)

StateCallback = Callable[[SessionState], None]

GENERIC_ERROR_MESSAGE = "An unexpected error occurred processing the image."


def process_upload(
    data: bytes,
    mime_type: str,
    file_name: Optional[str] = None,
    backend: Optional[InferenceBackend] = None,
    on_state: Optional[StateCallback] = None,
    state: Optional[SessionState] = None,
    budget_bytes: int = config.UPLOAD_CONFIG["payload_limit_bytes"],
) -> SessionState:
    """
    Run an uploaded image through the whole pipeline.

    Every failure is caught here and turned into an ERROR state; nothing
    is retried.

    Args:
        data: Raw file content.
        mime_type: Declared media type of the file.
        file_name: Original file name, for logging only.
        backend: Model backend passed to extract_table.
        on_state: Optional callback(state) invoked after each transition.
        state: Current session state; defaults to idle.
        budget_bytes: Maximum base64 payload length.

    Returns:
        The final SUCCESS or ERROR state.
    """
    current = state or SessionState.idle()

    def dispatch(event: Event) -> None:
        nonlocal current
        current = transition(current, event)
        if on_state:
            on_state(current)

    dispatch(UploadStarted())

    try:
        image = load_upload(data, mime_type, file_name)
        logger.info(f"Processing upload {file_name or '<unnamed>'} ({image.size} bytes, {image.mime_type})")
        payload = fit_payload(image, budget_bytes)
        if not payload.fits(budget_bytes):
            logger.warning(f"Sending payload over budget ({payload.encoded_length} > {budget_bytes} chars)")

        rows = extract_table(
            payload,
            on_progress=lambda message: dispatch(ProgressReported(message)),
            backend=backend,
        )
        if not rows:
            raise NoDataDetectedError("The AI could not detect any tabular data.")
        grid = GridModel.from_rows(rows)
    except Exception as e:
        logger.exception(f"Failed to process upload {file_name or '<unnamed>'}: {e}")
        dispatch(ExtractionFailed(str(e) or GENERIC_ERROR_MESSAGE))
        return current

    logger.info(f"Extracted {len(grid)} rows ({grid.width} columns max)")
    dispatch(ExtractionSucceeded(grid))
    return current
