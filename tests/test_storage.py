"""
Tests for the fsspec-backed blob store (memory filesystem).
Run from the project root: python -m pytest tests/test_storage.py -v
"""
import unittest
import uuid

from services.errors import BadRequest, NotFound
from services.storage import BlobStore, client_object_path, client_prefix


class TestBlobStore(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        # Memory filesystem is process-wide; isolate each test under its own root
        self.store = BlobStore("memory", f"/storage-test-{uuid.uuid4().hex[:8]}", "/files")

    async def test_put_returns_file_url_and_overwrites(self):
        path = client_object_path("cl-1", "docs/tradeLicense")
        url = await self.store.put(path, b"first")
        self.assertEqual(url, "/files/clients/cl-1/docs/tradeLicense")
        await self.store.put(path, b"second")
        self.assertEqual(await self.store.read(path), b"second")

    async def test_read_missing(self):
        with self.assertRaises(NotFound):
            await self.store.read("clients/cl-1/docs/nothing")

    async def test_delete_prefix_only_touches_one_client(self):
        await self.store.put(client_object_path("cl-1", "docs/tradeLicense"), b"a")
        await self.store.put(client_object_path("cl-1", "signatures/lpo-1"), b"b")
        await self.store.put(client_object_path("cl-2", "docs/tradeLicense"), b"c")

        await self.store.delete_prefix(client_prefix("cl-1"))

        with self.assertRaises(NotFound):
            await self.store.read("clients/cl-1/docs/tradeLicense")
        with self.assertRaises(NotFound):
            await self.store.read("clients/cl-1/signatures/lpo-1")
        self.assertEqual(await self.store.read("clients/cl-2/docs/tradeLicense"), b"c")

    async def test_delete_missing_prefix_is_not_an_error(self):
        await self.store.delete_prefix(client_prefix("cl-none"))

    async def test_path_traversal_rejected(self):
        with self.assertRaises(BadRequest):
            await self.store.read("../outside")


if __name__ == "__main__":
    unittest.main()
