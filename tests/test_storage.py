import unittest

import httpx

from services.errors import StorageError
from services.storage import SupabaseStorage


class TestSupabaseStorage(unittest.IsolatedAsyncioTestCase):
    async def test_upload_returns_public_url(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"Key": "bucket/object"})

        storage = SupabaseStorage(
            "https://proj.supabase.co/", "service-key", "licenses", transport=httpx.MockTransport(handler)
        )
        url = await storage.upload(b"%PDF-1.4", "License.PDF")

        self.assertEqual(len(seen), 1)
        request = seen[0]
        self.assertEqual(request.method, "POST")
        self.assertTrue(str(request.url).startswith("https://proj.supabase.co/storage/v1/object/licenses/"))
        self.assertTrue(str(request.url).endswith(".pdf"))
        self.assertEqual(request.headers["Authorization"], "Bearer service-key")
        self.assertEqual(request.headers["x-upsert"], "true")
        self.assertEqual(request.content, b"%PDF-1.4")
        object_name = str(request.url).rsplit("/", 1)[1]
        self.assertEqual(url, f"https://proj.supabase.co/storage/v1/object/public/licenses/{object_name}")

    async def test_rejected_upload(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(403, text="denied"))
        storage = SupabaseStorage("https://proj.supabase.co", "key", "licenses", transport=transport)
        with self.assertRaises(StorageError) as ctx:
            await storage.upload(b"data", "license.png")
        self.assertIn("403", ctx.exception.message)
        self.assertEqual(ctx.exception.status_code, 500)

    async def test_network_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        storage = SupabaseStorage("https://proj.supabase.co", "key", "licenses", transport=httpx.MockTransport(handler))
        with self.assertRaises(StorageError):
            await storage.upload(b"data", "license.png")

    async def test_missing_configuration(self):
        with self.assertRaises(StorageError):
            await SupabaseStorage("", "key", "licenses").upload(b"data", "license.png")
        with self.assertRaises(StorageError):
            await SupabaseStorage("https://proj.supabase.co", "", "licenses").upload(b"data", "license.png")


if __name__ == "__main__":
    unittest.main()
