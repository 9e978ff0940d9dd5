"""
Blob storage for uploaded documents, signatures and stamps.

Objects live at deterministic paths under clients/{client_id}/ on any fsspec
filesystem; the URL handed back to the forms points at the /files route.
"""
from __future__ import annotations

import logging
import posixpath
from functools import lru_cache

import fsspec
from fastapi.concurrency import run_in_threadpool

from config import settings
from services.errors import BadRequest, NotFound

logger = logging.getLogger(__name__)


def client_prefix(client_id: str) -> str:
    return f"clients/{client_id}/"


def client_object_path(client_id: str, suffix: str) -> str:
    return f"{client_prefix(client_id)}{suffix}"


class BlobStore:
    def __init__(self, protocol: str, root: str, base_url: str):
        self._fs = fsspec.filesystem(protocol)
        self._root = root.rstrip("/")
        self._base_url = base_url.rstrip("/")

    def _full(self, path: str) -> str:
        normalized = posixpath.normpath(path.lstrip("/"))
        if normalized.startswith("..") or normalized == ".":
            raise BadRequest("Invalid storage path")
        return f"{self._root}/{normalized}"

    def url_for(self, path: str) -> str:
        return f"{self._base_url}/{path}"

    def _write(self, full: str, data: bytes) -> None:
        parent = posixpath.dirname(full)
        if parent:
            self._fs.makedirs(parent, exist_ok=True)
        self._fs.pipe_file(full, data)

    async def put(self, path: str, data: bytes) -> str:
        """Store bytes at path (overwriting) and return the retrievable URL."""
        full = self._full(path)
        await run_in_threadpool(self._write, full, data)
        logger.info("Stored %d bytes at %s", len(data), path)
        return self.url_for(path)

    async def read(self, path: str) -> bytes:
        full = self._full(path)
        try:
            return await run_in_threadpool(self._fs.cat_file, full)
        except FileNotFoundError as e:
            raise NotFound("File not found") from e

    async def delete_prefix(self, prefix: str) -> None:
        """Remove every object under prefix; a missing prefix is not an error."""
        full = self._full(prefix)
        if not await run_in_threadpool(self._fs.exists, full):
            return
        await run_in_threadpool(self._fs.rm, full, True)
        logger.info("Deleted blobs under %s", prefix)


@lru_cache
def get_blob_store() -> BlobStore:
    return BlobStore(settings.storage_protocol, settings.storage_root, settings.files_base_url)
