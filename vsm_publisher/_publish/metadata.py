"""Composition of the free-form metadata payload sent to VSM."""

import json
from typing import Optional

from vsm_publisher.exceptions import MetadataError

VERSION_KEY = "version"


def compose_metadata(raw_metadata_json: Optional[str], version: str) -> str:
    """
    Merge user-supplied metadata with the project version.

    The ``version`` key is always overwritten; all other keys are preserved.

    Args:
        raw_metadata_json: JSON object text, e.g. '{"team": "payments"}'.
            None or empty is treated as an empty object.
        version: Project version

    Returns:
        Serialized JSON object

    Raises:
        MetadataError: If the input is not valid JSON or not a JSON object
    """
    text = raw_metadata_json if raw_metadata_json and raw_metadata_json.strip() else "{}"

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MetadataError(f"Problem parsing the data object {text!r}: {e}") from e

    if not isinstance(data, dict):
        raise MetadataError(f"Metadata must be a JSON object, got {type(data).__name__}: {text!r}")

    data[VERSION_KEY] = version
    return json.dumps(data)
