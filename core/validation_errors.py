from __future__ import annotations

from typing import Any, Sequence

_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def _split_location(loc: Any) -> tuple[str, str]:
    if not isinstance(loc, (list, tuple)):
        loc = [] if loc is None else [loc]
    parts = [str(part) for part in loc]

    if parts and parts[0] in _REQUEST_LOCATIONS:
        location, path_parts = parts[0], parts[1:]
    else:
        location, path_parts = "body", parts
    return location, ".".join(path_parts) or "(root)"


def format_validation_error_details(errors: Sequence[dict[str, Any]]) -> dict[str, Any]:
    field_errors: list[dict[str, str]] = []
    missing_fields: list[str] = []

    for error in errors:
        location, path = _split_location(error.get("loc"))
        error_type = str(error.get("type", "validation_error"))
        field_errors.append(
            {
                "path": path,
                "location": location,
                "message": str(error.get("msg", "Invalid value")),
                "errorType": error_type,
            }
        )
        if error_type == "missing" and path not in missing_fields:
            missing_fields.append(path)

    if missing_fields:
        summary = f"Validation failed: missing required field(s): {', '.join(missing_fields)}."
    else:
        summary = f"Validation failed for {len(field_errors)} field(s)."

    return {
        "summary": summary,
        "missingFields": missing_fields,
        "fieldErrors": field_errors,
    }
