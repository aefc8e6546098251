"""
ScribeTable - Digitize handwritten tables using the Gemini API

Core library for image fitting, extraction, editing and export. For the UI application, see the ui/ directory.
"""
__version__ = "0.1.0"

# Export core API functions for programmatic use
from scribe_table.image import load_upload, fit_payload
from scribe_table.extraction import extract_table, GeminiBackend, InferenceBackend
from scribe_table.grid import GridModel
from scribe_table.export import to_csv, to_spreadsheet
from scribe_table.pipeline import process_upload

__all__ = [
    "load_upload",
    "fit_payload",
    "extract_table",
    "GeminiBackend",
    "InferenceBackend",
    "GridModel",
    "to_csv",
    "to_spreadsheet",
    "process_upload",
]
