"""
Key-case conversion between stored records (snake_case) and API payloads (camelCase).
Uses Pydantic's alias_generators so it agrees with CamelModel aliases.
"""
from typing import Any

from pydantic.alias_generators import to_camel


def dict_keys_to_camel(obj: Any) -> Any:
    """Recursively convert dict keys from snake_case to camelCase for API responses."""
    if isinstance(obj, dict):
        return {to_camel(k) if isinstance(k, str) else k: dict_keys_to_camel(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [dict_keys_to_camel(x) for x in obj]
    return obj


def camel_path(path: str) -> str:
    """'section_a.company_name' -> 'sectionA.companyName'; list indexes pass through."""
    return ".".join(p if p.isdigit() else to_camel(p) for p in path.split("."))
