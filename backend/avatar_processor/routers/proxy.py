"""원격 Avatar 처리 서버로 요청을 중계하는 프록시 API 라우터입니다."""

import logging

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from avatar_processor.schemas.avatar import ProcessFailureOut, ProxyErrorOut
from avatar_processor.services.avatar_api import AvatarAPIClient, AvatarAPIError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["proxy"])


def _error_response(message: str) -> JSONResponse:
    return JSONResponse(ProxyErrorOut(error=message).model_dump(), status_code=500)


@router.get("/health")
def health():
    try:
        upstream = AvatarAPIClient().get_health()
    except AvatarAPIError as exc:
        logger.error("[proxy] health API error: %s", exc)
        return _error_response("Failed to fetch health status")
    return JSONResponse(upstream.payload, status_code=upstream.status_code)


@router.get("/info")
def info():
    try:
        upstream = AvatarAPIClient().get_info()
    except AvatarAPIError as exc:
        logger.error("[proxy] info API error: %s", exc)
        return _error_response("Failed to fetch API info")
    return JSONResponse(upstream.payload, status_code=upstream.status_code)


@router.post("/process-avatar")
async def process_avatar(request: Request):
    # 클라이언트가 보낸 multipart 본문을 수정 없이 원격 서버로 전달한다.
    body = await request.body()
    content_type = request.headers.get("content-type")
    try:
        upstream = await run_in_threadpool(AvatarAPIClient().process_avatar, body, content_type)
    except AvatarAPIError as exc:
        logger.error("[proxy] process-avatar error: %s", exc)
        return JSONResponse(
            ProcessFailureOut(message="Failed to process request").model_dump(),
            status_code=500,
        )
    return JSONResponse(upstream.payload, status_code=upstream.status_code)
