"""Helpers for the JSON snapshots kept in the record store."""
from typing import Any


def sanitize_for_store(value: Any) -> Any:
    """Deep-copy a snapshot into plain dicts/lists so JSON columns are always reassigned."""
    if isinstance(value, dict):
        return {k: sanitize_for_store(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [sanitize_for_store(v) for v in value]
    return value


def get_path(data: Any, path: str) -> Any:
    """Resolve a dotted path ('section_c.0.signature_url') or return None."""
    current = data
    for part in path.split("."):
        if isinstance(current, dict):
            current = current.get(part)
        elif isinstance(current, list) and part.isdigit():
            index = int(part)
            current = current[index] if index < len(current) else None
        else:
            return None
        if current is None:
            return None
    return current


def set_path(data: dict, path: str, value: Any) -> dict:
    """Return a copy of data with the dotted path set; missing list slots are padded with {}."""
    result = sanitize_for_store(data)
    parts = path.split(".")
    current: Any = result
    for i, part in enumerate(parts):
        last = i == len(parts) - 1
        if isinstance(current, list):
            index = int(part)
            while len(current) <= index:
                current.append({})
            if last:
                current[index] = value
            else:
                if not isinstance(current[index], (dict, list)):
                    current[index] = {}
                current = current[index]
        else:
            if last:
                current[part] = value
            else:
                nxt = current.get(part)
                if not isinstance(nxt, (dict, list)):
                    nxt = [] if parts[i + 1].isdigit() else {}
                    current[part] = nxt
                current = nxt
    return result


def is_blank(value: Any) -> bool:
    """Required-field emptiness: missing, null, '' or False."""
    return value is None or value is False or value == ""
