"""원격 Avatar 처리 서버 호출 레이어입니다. 프록시 라우터는 이 모듈을 통해서만 외부와 통신합니다."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from avatar_processor.config import settings

logger = logging.getLogger(__name__)

HEALTH_PATH = "/api/health/"
INFO_PATH = "/api/info/"
PROCESS_AVATAR_PATH = "/api/process-avatar/"


class AvatarAPIError(RuntimeError):
    """원격 서버 호출이 전송 단계에서 실패했거나 JSON이 아닌 응답을 받은 경우."""


@dataclass
class UpstreamResponse:
    status_code: int
    payload: Any


class AvatarAPIClient:
    """원격 Avatar 처리 서버 클라이언트 (요청 1건당 외부 호출 1건)"""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or settings.AVATAR_API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.AVATAR_API_TIMEOUT_SECONDS

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _relay(self, response: httpx.Response) -> UpstreamResponse:
        try:
            payload = response.json()
        except ValueError as exc:
            raise AvatarAPIError(
                f"JSON이 아닌 응답(status={response.status_code}): {exc}"
            ) from exc
        return UpstreamResponse(status_code=response.status_code, payload=payload)

    def get_health(self) -> UpstreamResponse:
        return self._get(HEALTH_PATH)

    def get_info(self) -> UpstreamResponse:
        return self._get(INFO_PATH)

    def _get(self, path: str) -> UpstreamResponse:
        url = self._url(path)
        try:
            response = httpx.get(url, timeout=self.timeout)
        except httpx.HTTPError as exc:
            raise AvatarAPIError(f"원격 서버 호출 실패(GET {url}): {exc}") from exc
        return self._relay(response)

    def process_avatar(self, body: bytes, content_type: Optional[str]) -> UpstreamResponse:
        # multipart 본문은 boundary가 content-type에 들어있으므로 헤더와 함께 그대로 전달한다.
        url = self._url(PROCESS_AVATAR_PATH)
        headers = {"Content-Type": content_type} if content_type else {}
        logger.info("[proxy] forwarding %d bytes to %s", len(body), url)
        try:
            response = httpx.post(url, content=body, headers=headers, timeout=self.timeout)
        except httpx.HTTPError as exc:
            raise AvatarAPIError(f"원격 서버 호출 실패(POST {url}): {exc}") from exc
        return self._relay(response)
