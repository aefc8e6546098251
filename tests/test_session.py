import pytest

from scribe_table.grid import GridModel
from scribe_table.session import (
    CellEdited,
    ExtractionFailed,
    ExtractionSucceeded,
    InvalidTransitionError,
    ProcessingStatus,
    ProgressReported,
    Reset,
    SessionState,
    UploadStarted,
    transition,
)

GRID = GridModel.from_rows([["H1", "H2"], ["a", "b"]])


def test_initial_state_is_idle():
    state = SessionState.idle()
    assert state.status is ProcessingStatus.IDLE
    assert state.grid is None
    assert state.error is None
    assert state.progress == "Initializing..."


def test_happy_path():
    state = transition(SessionState.idle(), UploadStarted())
    assert state.status is ProcessingStatus.PROCESSING
    assert state.progress == "Optimizing image..."

    state = transition(state, ProgressReported("Receiving data stream (chunk 3)..."))
    assert state.progress == "Receiving data stream (chunk 3)..."

    state = transition(state, ExtractionSucceeded(GRID))
    assert state.status is ProcessingStatus.SUCCESS
    assert state.grid is GRID


def test_failure_then_reset():
    state = transition(SessionState.idle(), UploadStarted())
    state = transition(state, ExtractionFailed("No data returned from the model."))
    assert state.status is ProcessingStatus.ERROR
    assert state.error == "No data returned from the model."

    assert transition(state, Reset()) == SessionState.idle()


def test_new_upload_allowed_after_error():
    state = SessionState.failed("boom")
    assert transition(state, UploadStarted()).status is ProcessingStatus.PROCESSING


def test_concurrent_upload_is_rejected():
    state = SessionState.processing("Optimizing image...")
    with pytest.raises(InvalidTransitionError):
        transition(state, UploadStarted())


def test_cell_edit_updates_grid():
    state = SessionState.success(GRID)
    edited = transition(state, CellEdited(1, 0, "z"))

    assert edited.grid.cell(1, 0) == "z"
    assert state.grid.cell(1, 0) == "a"


def test_cell_edit_out_of_bounds():
    with pytest.raises(IndexError):
        transition(SessionState.success(GRID), CellEdited(5, 0, "z"))


@pytest.mark.parametrize(
    "state, event",
    [
        (SessionState.idle(), ProgressReported("x")),
        (SessionState.idle(), ExtractionSucceeded(GRID)),
        (SessionState.idle(), CellEdited(0, 0, "x")),
        (SessionState.failed("boom"), CellEdited(0, 0, "x")),
        (SessionState.success(GRID), ExtractionFailed("late")),
        (SessionState.processing("working"), CellEdited(0, 0, "x")),
    ],
)
def test_illegal_transitions(state, event):
    with pytest.raises(InvalidTransitionError):
        transition(state, event)


def test_reset_from_any_state():
    for state in (SessionState.idle(), SessionState.processing("x"), SessionState.success(GRID), SessionState.failed("e")):
        assert transition(state, Reset()).status is ProcessingStatus.IDLE


def test_illegal_states_are_unrepresentable():
    with pytest.raises(ValueError):
        SessionState.success(GridModel())
    with pytest.raises(ValueError):
        SessionState(status=ProcessingStatus.SUCCESS)
    with pytest.raises(ValueError):
        SessionState.failed("")
    with pytest.raises(ValueError):
        SessionState(status=ProcessingStatus.IDLE, grid=GRID)
    with pytest.raises(ValueError):
        SessionState(status=ProcessingStatus.PROCESSING, error="boom")
