"""
JSON-lines reader for raw dictionary records.

Each non-blank line holds one record object in the schema listed in
``zhdict.entries.RECORD_FIELDS``. Records are passed through unchanged; field
validation happens when the entry store is built.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Union

from zhdict.entries import LoadError


def iter_records(path: Union[str, Path]) -> Iterator[Dict[str, Any]]:
    """Yield raw records from a UTF-8 JSON-lines file, skipping blank lines."""
    with Path(path).open(encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as e:
                raise LoadError(f"invalid JSON: {e.msg}", line=line_number) from e
            if not isinstance(record, dict):
                raise LoadError(f"expected a JSON object, got {type(record).__name__}", line=line_number)
            yield record


def read_records(path: Union[str, Path]) -> List[Dict[str, Any]]:
    return list(iter_records(path))
