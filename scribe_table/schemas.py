"""
Pydantic type definitions for extracted table data.

TableData is an ordered list of rows, each an ordered list of cell strings.
Row 0 holds the headers. Rows are not required to have equal length.
"""
from typing import List

from pydantic import ConfigDict, TypeAdapter

TableData = List[List[str]]

# Models occasionally emit bare numbers for numeric cells; accept them as text.
TableDataAdapter = TypeAdapter(TableData, config=ConfigDict(coerce_numbers_to_str=True))
