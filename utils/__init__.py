"""Shared utilities for the backend."""
from utils.case import camel_path, dict_keys_to_camel
from utils.payload import get_path, is_blank, sanitize_for_store, set_path

__all__ = [
    "camel_path",
    "dict_keys_to_camel",
    "get_path",
    "is_blank",
    "sanitize_for_store",
    "set_path",
]
