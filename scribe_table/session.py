"""
Session state machine for a single upload: idle -> processing -> success/error.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from . import config
from .grid import GridModel


class ProcessingStatus(str, Enum):
    IDLE = "IDLE"
    PROCESSING = "PROCESSING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


class InvalidTransitionError(ValueError):
    """An event was dispatched in a state that does not accept it."""


@dataclass(frozen=True)
class SessionState:
    """
    Snapshot of the UI session.

    Only SUCCESS carries a grid (never empty), only ERROR carries an error
    message. Use the factory classmethods rather than the constructor.
    """
    status: ProcessingStatus
    progress: str = config.PROGRESS_CONFIG["initial_message"]
    grid: Optional[GridModel] = None
    error: Optional[str] = None

    def __post_init__(self):
        if self.status is ProcessingStatus.SUCCESS:
            if self.grid is None or self.grid.is_empty:
                raise ValueError("SUCCESS state requires a non-empty grid")
        elif self.grid is not None:
            raise ValueError(f"{self.status.value} state cannot hold a grid")
        if self.status is ProcessingStatus.ERROR:
            if not self.error:
                raise ValueError("ERROR state requires an error message")
        elif self.error is not None:
            raise ValueError(f"{self.status.value} state cannot hold an error")

    @classmethod
    def idle(cls) -> "SessionState":
        return cls(status=ProcessingStatus.IDLE)

    @classmethod
    def processing(cls, progress: str) -> "SessionState":
        return cls(status=ProcessingStatus.PROCESSING, progress=progress)

    @classmethod
    def success(cls, grid: GridModel) -> "SessionState":
        return cls(status=ProcessingStatus.SUCCESS, grid=grid)

    @classmethod
    def failed(cls, error: str) -> "SessionState":
        return cls(status=ProcessingStatus.ERROR, error=error)


# ===== Events ================================================================

@dataclass(frozen=True)
class UploadStarted:
    progress: str = "Optimizing image..."


@dataclass(frozen=True)
class ProgressReported:
    message: str


@dataclass(frozen=True)
class ExtractionSucceeded:
    grid: GridModel


@dataclass(frozen=True)
class ExtractionFailed:
    message: str


@dataclass(frozen=True)
class CellEdited:
    row: int
    col: int
    value: str


@dataclass(frozen=True)
class Reset:
    pass


Event = Union[UploadStarted, ProgressReported, ExtractionSucceeded, ExtractionFailed, CellEdited, Reset]


def transition(state: SessionState, event: Event) -> SessionState:
    """
    Apply an event to a state and return the next state.

    Raises:
        InvalidTransitionError: the event is not accepted in the current state.
        IndexError: a CellEdited event addresses a cell outside the grid.
    """
    status = state.status

    if isinstance(event, Reset):
        return SessionState.idle()

    if isinstance(event, UploadStarted):
        if status is ProcessingStatus.PROCESSING:
            raise InvalidTransitionError("An extraction is already in progress")
        return SessionState.processing(event.progress)

    if isinstance(event, ProgressReported):
        _require(state, event, ProcessingStatus.PROCESSING)
        return SessionState.processing(event.message)

    if isinstance(event, ExtractionSucceeded):
        _require(state, event, ProcessingStatus.PROCESSING)
        return SessionState.success(event.grid)

    if isinstance(event, ExtractionFailed):
        _require(state, event, ProcessingStatus.PROCESSING)
        return SessionState.failed(event.message)

    if isinstance(event, CellEdited):
        _require(state, event, ProcessingStatus.SUCCESS)
        return SessionState.success(state.grid.set_cell(event.row, event.col, event.value))

    raise InvalidTransitionError(f"Unknown event {event!r}")


def _require(state: SessionState, event: Event, expected: ProcessingStatus) -> None:
    if state.status is not expected:
        raise InvalidTransitionError(
            f"{type(event).__name__} is only valid in {expected.value}, not {state.status.value}"
        )
