"""Convert a single YAML document to JSON."""

from __future__ import annotations

import base64
import datetime
import json
from typing import Any

from ruamel.yaml import YAML


def _json_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    if isinstance(key, (datetime.date, datetime.datetime)):
        return key.isoformat()
    return str(key)


def _jsonify(value: Any) -> Any:
    """Reduce a loaded YAML value to types the json module can encode."""
    if isinstance(value, dict):
        return {_json_key(k): _jsonify(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonify(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return [_jsonify(v) for v in value]
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("ascii")
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def yaml_to_json(data: bytes) -> bytes:
    """Parse one YAML document and return the equivalent JSON bytes.

    Mapping keys are converted to strings (booleans become ``true`` /
    ``false``); timestamps become ISO-8601 strings. A blank document, or
    one holding only comments, converts to ``null``.

    Raises:
        ruamel.yaml.error.YAMLError: If ``data`` is not a valid YAML document
        ValueError: If the document holds ``.nan`` or ``.inf``, which JSON
            cannot represent
    """
    yaml = YAML(typ="safe", pure=True)
    loaded = yaml.load(data)
    text = json.dumps(_jsonify(loaded), ensure_ascii=False, allow_nan=False)
    return text.encode("utf-8")
