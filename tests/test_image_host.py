"""Unit tests for the image host client (retry, validation, batch order)."""

import httpx
import pytest

from foodblog.services.image_host import ImageHostClient, UploadedImage
from foodblog.utils.exceptions import BadRequestError, UpstreamServiceError

UPLOAD_URL = "https://imgbb.example.com/1/upload"


def make_client(handler, **kwargs) -> ImageHostClient:
    options = dict(
        api_key="key-123",
        upload_url=UPLOAD_URL,
        timeout=5,
        retries=3,
        retry_delay=0,
        transport=httpx.MockTransport(handler),
    )
    options.update(kwargs)
    return ImageHostClient(**options)


def success(url: str) -> httpx.Response:
    return httpx.Response(200, json={"success": True, "data": {"url": url}})


IMAGE = UploadedImage(filename="taco.jpg", content_type="image/jpeg", data=b"\xff\xd8taco")


class TestUpload:
    async def test_successful_upload_sends_key_and_file(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return success("https://i.ibb.co/abc/taco.jpg")

        url = await make_client(handler).upload(IMAGE)

        assert url == "https://i.ibb.co/abc/taco.jpg"
        assert len(seen) == 1
        body = seen[0].content
        assert b'name="key"' in body and b"key-123" in body
        assert b'filename="taco.jpg"' in body
        assert seen[0].headers["user-agent"] == ImageHostClient.USER_AGENT

    async def test_retries_transport_errors_then_succeeds(self):
        calls = {"n": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["n"] += 1
            if calls["n"] < 3:
                raise httpx.ConnectTimeout("timed out", request=request)
            return success("https://i.ibb.co/ok.jpg")

        assert await make_client(handler).upload(IMAGE) == "https://i.ibb.co/ok.jpg"
        assert calls["n"] == 3

    async def test_gives_up_after_three_attempts(self):
        calls = {"n": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["n"] += 1
            return httpx.Response(
                400, json={"success": False, "error": {"message": "Invalid API key"}}
            )

        with pytest.raises(UpstreamServiceError) as exc:
            await make_client(handler).upload(IMAGE)
        assert str(exc.value) == "Image upload failed: Invalid API key"
        assert calls["n"] == 3

    @pytest.mark.parametrize(
        "body",
        [
            ["oops"],
            "just a string",
            {"success": True},
            {"success": True, "data": {}},
            {"success": True, "data": ["not", "a", "dict"]},
            {"success": False, "error": "flat error text"},
        ],
        ids=["list", "string", "no-data", "no-url", "data-list", "flat-error"],
    )
    async def test_malformed_body_is_retried_then_wrapped(self, body):
        calls = {"n": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["n"] += 1
            return httpx.Response(200, json=body)

        with pytest.raises(UpstreamServiceError) as exc:
            await make_client(handler).upload(IMAGE)
        assert str(exc.value).startswith("Image upload failed:")
        assert calls["n"] == 3

    async def test_malformed_body_then_success(self):
        calls = {"n": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["n"] += 1
            if calls["n"] == 1:
                return httpx.Response(200, json=["oops"])
            return success("https://i.ibb.co/ok.jpg")

        assert await make_client(handler).upload(IMAGE) == "https://i.ibb.co/ok.jpg"
        assert calls["n"] == 2

    async def test_transport_failure_is_wrapped(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(UpstreamServiceError) as exc:
            await make_client(handler, retries=2).upload(IMAGE)
        assert str(exc.value).startswith("Image upload failed:")

    async def test_rejects_oversized_file_without_calling_host(self):
        calls = {"n": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["n"] += 1
            return success("unused")

        big = UploadedImage(filename="big.jpg", content_type="image/jpeg", data=b"x" * 11)
        with pytest.raises(BadRequestError):
            await make_client(handler, max_bytes=10).upload(big)
        assert calls["n"] == 0

    async def test_rejects_incomplete_file(self):
        client = make_client(lambda request: success("unused"))
        with pytest.raises(BadRequestError):
            await client.upload(UploadedImage(filename="", content_type="image/png", data=b"x"))
        with pytest.raises(BadRequestError):
            await client.upload(UploadedImage(filename="a.png", content_type="image/png", data=b""))

    async def test_missing_api_key(self):
        client = make_client(lambda request: success("unused"), api_key=None)
        with pytest.raises(UpstreamServiceError):
            await client.upload(IMAGE)


class TestUploadMany:
    async def test_preserves_input_order(self):
        def handler(request: httpx.Request) -> httpx.Response:
            name = b"first" if b'filename="1.jpg"' in request.content else b"second"
            return success(f"https://i.ibb.co/{name.decode()}.jpg")

        images = [
            UploadedImage(filename="1.jpg", content_type="image/jpeg", data=b"1"),
            UploadedImage(filename="2.jpg", content_type="image/jpeg", data=b"2"),
        ]
        urls = await make_client(handler).upload_many(images)
        assert urls == ["https://i.ibb.co/first.jpg", "https://i.ibb.co/second.jpg"]

    async def test_empty_batch(self):
        assert await make_client(lambda request: success("unused")).upload_many([]) == []
