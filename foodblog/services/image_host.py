import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import httpx

from foodblog.utils.exceptions import BadRequestError, UpstreamServiceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedImage:
    """
    업로드 요청으로 받은 이미지 파일 (프레임워크 독립 표현)
    """
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


class ImageHostClient:
    """
    ImgBB 이미지 업로드 클라이언트

    - 이미지를 그대로 외부 호스트로 전달하고 반환된 URL만 저장
    - 시도마다 timeout(기본 60초) 적용
    - 실패 시 고정 횟수(기본 3회)까지 고정 지연(기본 1초)으로 재시도, 백오프 없음
    """
    USER_AGENT = "FoodBlogApp/1.0"

    def __init__(
        self,
        api_key: Optional[str],
        upload_url: str,
        timeout: float = 60.0,
        retries: int = 3,
        retry_delay: float = 1.0,
        max_bytes: int = 32 * 1024 * 1024,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.upload_url = upload_url
        self.timeout = timeout
        self.retries = max(1, retries)
        self.retry_delay = retry_delay
        self.max_bytes = max_bytes
        self._transport = transport

    def _validate(self, image: UploadedImage) -> None:
        if not image.data or not image.filename or not image.content_type:
            raise BadRequestError("Invalid file data: missing data, name, or mimetype")
        if image.size > self.max_bytes:
            raise BadRequestError("Image exceeds 32MB (ImgBB limit)")

    async def _post_once(self, image: UploadedImage) -> str:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            r = await client.post(
                self.upload_url,
                data={"key": self.api_key or ""},
                files={"image": (image.filename, image.data, image.content_type)},
                headers={"User-Agent": self.USER_AGENT},
            )
        try:
            body = r.json()
        except ValueError:
            raise UpstreamServiceError(f"Image upload failed: unexpected response (status={r.status_code})")

        if not isinstance(body, dict):
            raise UpstreamServiceError(f"Image upload failed: unexpected response (status={r.status_code})")
        if not body.get("success"):
            error = body.get("error")
            detail = error.get("message", "Unknown error") if isinstance(error, dict) else "Unknown error"
            raise UpstreamServiceError(f"Image upload failed: {detail}")

        data = body.get("data")
        url = data.get("url") if isinstance(data, dict) else None
        if not url:
            raise UpstreamServiceError("Image upload failed: response is missing the image URL")
        return url

    async def upload(self, image: UploadedImage) -> str:
        """
        단일 이미지 업로드 후 URL 반환
        1) 파일 검증 (재시도 대상 아님)
        2) 업로드 시도, 실패 시 retry_delay 후 재시도
        3) 마지막 시도까지 실패하면 UpstreamServiceError
        """
        self._validate(image)
        if not self.api_key:
            raise UpstreamServiceError("Image upload failed: image host is not configured")

        last_error: Optional[Exception] = None
        for attempt in range(1, self.retries + 1):
            try:
                return await self._post_once(image)
            except (httpx.HTTPError, UpstreamServiceError) as e:
                last_error = e
                if attempt == self.retries:
                    break
                logger.warning(
                    "Retry %d/%d after %.1fs: %s", attempt, self.retries, self.retry_delay, e
                )
                await asyncio.sleep(self.retry_delay)

        logger.error("이미지 업로드 최종 실패 (%s): %s", image.filename, last_error)
        if isinstance(last_error, UpstreamServiceError):
            raise last_error
        raise UpstreamServiceError(f"Image upload failed: {last_error}")

    async def upload_many(self, images: Sequence[UploadedImage]) -> List[str]:
        """
        여러 이미지를 동시에 업로드하고 입력 순서대로 URL 반환
        """
        if not images:
            return []
        return list(await asyncio.gather(*(self.upload(image) for image in images)))
