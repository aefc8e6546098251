"""
Turning raw model output into TableData.
"""
import json
import re

from pydantic import ValidationError

from .errors import ExtractionError
from .schemas import TableData, TableDataAdapter

_LEADING_FENCE = re.compile(r"^\s*```[A-Za-z0-9_-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```\s*$")


def strip_json_codeblock(text: str) -> str:
    """
    Remove markdown code fences around a JSON body.

    Handles full fencing (```json ... ```), bare fences and partial fencing
    where only the opening or the closing fence is present.
    """
    text = _LEADING_FENCE.sub("", text, count=1)
    text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def parse_table(text: str) -> TableData:
    """
    Parse model output into a list of rows of cell strings.

    No rectangularity check is made; jagged rows are returned as-is.

    Raises:
        ExtractionError: the text is not valid JSON or not an array of arrays of strings.
    """
    cleaned = strip_json_codeblock(text)
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ExtractionError(f"Failed to parse model output as JSON: {e}") from e
    try:
        return TableDataAdapter.validate_python(parsed)
    except ValidationError as e:
        raise ExtractionError(f"Model output is not an array of arrays of strings: {e}") from e
