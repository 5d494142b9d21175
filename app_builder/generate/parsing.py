import json
import re
from typing import Any, Dict, Optional

_FENCE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)
_KEY_VALUE = re.compile(r"^\s*[-*]?\s*\"?([A-Za-z][\w\- ]{0,40}?)\"?\s*:\s*(.+?)\s*,?\s*$")


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """First top-level balanced {...} in `text` that decodes to a JSON object.

    Only braces at depth 0 open a candidate, so objects nested inside a
    broken or cut-off answer are never returned on their own. Braces inside
    string literals are skipped so code snippets embedded in values do not
    break the match.
    """
    depth = 0
    start = -1
    in_str = False
    escaped = False
    for i, ch in enumerate(text):
        if depth == 0:
            if ch == "{":
                depth, start = 1, i
            continue
        if in_str:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_str = False
            continue
        if ch == '"':
            in_str = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                try:
                    obj = json.loads(text[start : i + 1])
                except json.JSONDecodeError:
                    continue
                if isinstance(obj, dict):
                    return obj
    # an unclosed candidate runs to the end of the text
    return None


def parse_key_values(text: str) -> Dict[str, str]:
    fields: Dict[str, str] = {}
    for line in text.splitlines():
        m = _KEY_VALUE.match(line)
        if not m:
            continue
        key = m.group(1).strip()
        value = m.group(2).strip().strip('"')
        if key and value and key not in fields:
            fields[key] = value
    return fields


def parse_agent_response(text: str) -> Optional[Dict[str, Any]]:
    """Decode a model answer into a JSON object, or None.

    Tries the whole text, then fenced code blocks, then the first balanced
    object anywhere in the text.
    """
    raw = (text or "").strip()
    if not raw:
        return None
    try:
        obj = json.loads(raw)
        if isinstance(obj, dict):
            return obj
    except json.JSONDecodeError:
        pass

    for block in _FENCE.findall(raw):
        obj = extract_json_object(block)
        if obj is not None:
            return obj

    return extract_json_object(raw)
