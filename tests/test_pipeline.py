from scribe_table.pipeline import GENERIC_ERROR_MESSAGE, process_upload
from scribe_table.session import ProcessingStatus, SessionState


def test_successful_upload(png_bytes, scripted_backend):
    backend = scripted_backend(['[["Item", "Qty"],', '["Pens", "4"]]'])
    states = []

    final = process_upload(png_bytes, "image/png", "table.png", backend=backend, on_state=states.append)

    assert final.status is ProcessingStatus.SUCCESS
    assert final.grid.to_list() == [["Item", "Qty"], ["Pens", "4"]]
    assert [s.progress for s in states[:2]] == ["Optimizing image...", "Initializing AI model..."]
    assert states[-2].progress == "Finalizing structure..."
    assert states[-1] is final

    payload = backend.calls[0][0]
    assert payload.mime_type == "image/png"
    assert payload.to_bytes() == png_bytes


def test_oversized_payload_is_compressed_before_extraction(png_bytes, scripted_backend):
    backend = scripted_backend(['[["x"]]'])
    final = process_upload(png_bytes, "image/png", backend=backend, budget_bytes=1)

    assert final.status is ProcessingStatus.SUCCESS
    assert backend.calls[0][0].mime_type == "image/jpeg"


def test_unsupported_format_fails_before_extraction(png_bytes, scripted_backend):
    backend = scripted_backend(['[["x"]]'])
    final = process_upload(png_bytes, "image/gif", backend=backend)

    assert final.status is ProcessingStatus.ERROR
    assert "Unsupported file type" in final.error
    assert backend.calls == []


def test_empty_table_is_reported_as_no_data(png_bytes, scripted_backend):
    final = process_upload(png_bytes, "image/png", backend=scripted_backend(["[]"]))

    assert final.status is ProcessingStatus.ERROR
    assert final.error == "The AI could not detect any tabular data."


def test_empty_stream_is_reported(png_bytes, scripted_backend):
    final = process_upload(png_bytes, "image/png", backend=scripted_backend([]))
    assert final.error == "No data returned from the model."


def test_backend_failure_becomes_error_state(png_bytes, scripted_backend):
    final = process_upload(png_bytes, "image/png", backend=scripted_backend(error=RuntimeError("quota exceeded")))
    assert final.status is ProcessingStatus.ERROR
    assert final.error == "quota exceeded"


def test_error_without_message_uses_generic_text(png_bytes, scripted_backend):
    final = process_upload(png_bytes, "image/png", backend=scripted_backend(error=RuntimeError()))
    assert final.error == GENERIC_ERROR_MESSAGE


def test_retry_from_error_state(png_bytes, scripted_backend):
    final = process_upload(
        png_bytes,
        "image/png",
        backend=scripted_backend(['[["x"]]']),
        state=SessionState.failed("previous failure"),
    )
    assert final.status is ProcessingStatus.SUCCESS
