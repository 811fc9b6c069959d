"""
Layout documents: JSON descriptions of a fixed-width file.

A layout lists the fields either as bare ``widths`` (with optional ``names``)
or as ``fields`` objects carrying a ``name`` and either a ``length`` or a
1-based inclusive ``start``/``end`` pair::

    {
      "fields": [
        {"name": "id", "length": 5},
        {"name": "name", "start": 7, "end": 26}
      ],
      "separatorLength": 1,
      "flexibleWidth": false,
      "hasHeader": true,
      "encoding": "utf-8"
    }

Documents are checked with a JSON Schema first, then field positions are
resolved into widths.
"""
from __future__ import annotations
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from jsonschema import Draft202012Validator, ValidationError
from jsonschema.exceptions import best_match

from ..config import ReaderConfig

__all__ = ["LAYOUT_SCHEMA", "Layout", "LayoutError", "LayoutValidator", "layout_from_dict", "load_layout"]

_FIELD_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["name"],
    "properties": {
        "name": {"type": "string"},
        "length": {"type": "integer", "minimum": 1},
        "start": {"type": "integer", "minimum": 1},
        "end": {"type": "integer", "minimum": 1},
    },
    "additionalProperties": True,
}

LAYOUT_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "widths": {"type": "array", "items": {"type": "integer", "minimum": 1}},
        "names": {"type": "array", "items": {"type": "string"}},
        "fields": {"type": "array", "items": _FIELD_SCHEMA},
        "separatorLength": {"type": "integer", "minimum": 0},
        "flexibleWidth": {"type": "boolean"},
        "hasHeader": {"type": "boolean"},
        "encoding": {
            "oneOf": [
                {"type": "string"},
                {"type": "array", "items": {"type": "string"}, "minItems": 1},
            ]
        },
    },
    "oneOf": [
        {"required": ["widths"], "not": {"required": ["fields"]}},
        {"required": ["fields"], "not": {"anyOf": [{"required": ["widths"]}, {"required": ["names"]}]}},
    ],
}


class LayoutError(ValueError):
    """Raised when a layout document is malformed or its positions are inconsistent."""


@dataclass(frozen=True)
class Layout:
    config: ReaderConfig
    encodings: Optional[List[str]] = None


class LayoutValidator:
    def __init__(self, schema: Optional[Dict[str, Any]] = None):
        self._validator = Draft202012Validator(schema or LAYOUT_SCHEMA)

    def validate(self, doc: Any) -> Optional[ValidationError]:
        return best_match(self._validator.iter_errors(doc))


def field_length(field: Dict[str, Any]) -> int:
    """
    Resolve the width of one ``fields`` entry.

    :raises LayoutError: If both ``length`` and ``end`` are given, neither is,
        or ``end`` lies before ``start``.
    """
    length = field.get("length")
    end = field.get("end")
    if length is not None and end is not None:
        raise LayoutError(f"Field '{field['name']}' cannot have both 'length' and 'end'.")
    if length is not None:
        return length
    if end is None:
        raise LayoutError(f"Field '{field['name']}' must have either 'length' or 'end'.")
    if "start" not in field:
        raise LayoutError(f"Field '{field['name']}' has 'end' but no 'start'.")
    width = end - field["start"] + 1
    if width < 1:
        raise LayoutError(f"Field '{field['name']}' has invalid 'end' < 'start'.")
    return width


def _resolve_fields(fields: List[Dict[str, Any]], separator_length: int) -> List[int]:
    widths: List[int] = []
    expected_start = 1
    for field in fields:
        width = field_length(field)
        start = field.get("start")
        if start is not None and start != expected_start:
            raise LayoutError(
                f"Field '{field['name']}' starts at {start}, expected {expected_start} "
                f"with separator length {separator_length}."
            )
        widths.append(width)
        expected_start += width + separator_length
    return widths


def layout_from_dict(doc: Dict[str, Any]) -> Layout:
    """
    Build a :class:`Layout` from a parsed layout document.

    :raises LayoutError: If the document fails schema validation or its field
        positions do not line up with the separator length.
    """
    err = LayoutValidator().validate(doc)
    if err is not None:
        where = "/".join(str(p) for p in err.absolute_path) or "<root>"
        raise LayoutError(f"Invalid layout at {where}: {err.message}")

    separator_length = doc.get("separatorLength", 1)
    if "fields" in doc:
        widths = _resolve_fields(doc["fields"], separator_length)
        names = [f["name"] for f in doc["fields"]]
    else:
        widths = list(doc["widths"])
        names = doc.get("names")

    encoding = doc.get("encoding")
    encodings = [encoding] if isinstance(encoding, str) else encoding
    try:
        config = ReaderConfig(
            widths=tuple(widths),
            separator_length=separator_length,
            flexible_width=doc.get("flexibleWidth", True),
            has_header=doc.get("hasHeader", True),
            names=tuple(names) if names is not None else None,
        )
    except ValueError as exc:
        raise LayoutError(str(exc)) from exc
    return Layout(config=config, encodings=encodings)


def load_layout(path: str) -> Layout:
    """
    Read and resolve the layout document at ``path``.

    :raises FileNotFoundError: If the file does not exist.
    :raises json.JSONDecodeError: If the file is not valid JSON.
    :raises LayoutError: If the document is not a valid layout.
    """
    with open(path, "r", encoding="utf-8") as f:
        doc = json.load(f)
    return layout_from_dict(doc)
