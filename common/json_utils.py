import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict


class JsonFileType(str, Enum):
    """Enumeration for the different states of a JSON file check."""

    VALID_JSON = "VALID_JSON"
    MALFORMED_JSON = "MALFORMED_JSON"
    NOT_JSON = "NOT_JSON"


def check_json_file(file_path: Path) -> JsonFileType:
    """
    Checks if a file is a valid JSON, malformed JSON, or not a JSON file.

    The distinction between MALFORMED_JSON and NOT_JSON is made based on the
    file extension. A file with a .json extension that fails to parse is
    considered malformed. Any other file that fails to parse is considered
    not JSON.

    Args:
        file_path: The path to the file to check.

    Returns:
        The type of the file as a JsonFileType enum member.
    """
    if not file_path.is_file():
        return JsonFileType.NOT_JSON

    try:
        content = file_path.read_text(encoding="utf-8")
    except (IOError, UnicodeDecodeError):
        return JsonFileType.NOT_JSON

    try:
        json.loads(content)
        return JsonFileType.VALID_JSON
    except json.JSONDecodeError:
        if file_path.suffix.lower() == ".json":
            return JsonFileType.MALFORMED_JSON
        else:
            return JsonFileType.NOT_JSON


def _merge_into(target: Dict[str, Any], data: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in data.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _merge_into(target[key], value)
        else:
            target[key] = value
    return target


def inject_json_to_file(file_path: Path, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep-merges ``data`` into the JSON object stored in ``file_path``.

    The file is created when it does not exist. Nested objects are merged key
    by key; any other value in ``data`` replaces the stored one.

    Args:
        file_path: The JSON file to update.
        data: The values to merge in.

    Returns:
        The merged document that was written.

    Raises:
        ValueError: If the existing file is not a JSON object.
    """
    document: Dict[str, Any] = {}
    if file_path.is_file():
        if check_json_file(file_path) != JsonFileType.VALID_JSON:
            raise ValueError(f"{file_path} does not contain valid JSON")
        loaded = json.loads(file_path.read_text(encoding="utf-8"))
        if not isinstance(loaded, dict):
            raise ValueError(f"{file_path} does not contain a JSON object")
        document = loaded

    _merge_into(document, data)
    file_path.write_text(
        json.dumps(document, indent=4, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    return document
