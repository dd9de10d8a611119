"""업로드 페이지 라우터입니다. 세션별 AvatarProcessor 상태를 HTML로 그리고 사용자 동작을 위임합니다."""

from typing import List

import httpx
from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from avatar_processor.config import settings
from avatar_processor.page.controller import AvatarProcessor, SelectedFile
from avatar_processor.page.object_urls import BLOB_PREFIX
from avatar_processor.page.render import render_page
from avatar_processor.page.sessions import PageSessionStore

router = APIRouter(tags=["page"])


def build_page_client() -> httpx.Client:
    # 페이지는 브라우저와 같은 경로(/api/process-avatar)로 프록시를 호출한다.
    return httpx.Client(base_url=settings.PAGE_API_BASE_URL, timeout=settings.AVATAR_API_TIMEOUT_SECONDS)


session_store = PageSessionStore(
    factory=lambda: AvatarProcessor(build_page_client()),
    max_sessions=settings.PAGE_MAX_SESSIONS,
)


def get_session_store() -> PageSessionStore:
    return session_store


def _session(request: Request, store: PageSessionStore):
    return store.get_or_create(request.cookies.get(settings.PAGE_SESSION_COOKIE))


def _with_session_cookie(response: Response, session_id: str) -> Response:
    response.set_cookie(settings.PAGE_SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return response


def _back_to_page(session_id: str) -> Response:
    return _with_session_cookie(RedirectResponse("/", status_code=303), session_id)


@router.get("/", response_class=HTMLResponse)
def index(request: Request, store: PageSessionStore = Depends(get_session_store)):
    session_id, processor = _session(request, store)
    return _with_session_cookie(HTMLResponse(render_page(processor)), session_id)


@router.post("/upload")
async def upload(
    request: Request,
    image: List[UploadFile] = File(...),
    source: str = Form("browse"),
    store: PageSessionStore = Depends(get_session_store),
):
    files = [
        SelectedFile(
            filename=f.filename or "",
            content_type=f.content_type or "",
            data=await f.read(),
        )
        for f in image
    ]
    session_id, processor = _session(request, store)
    if source == "drop":
        await run_in_threadpool(processor.handle_drop, files)
    else:
        await run_in_threadpool(processor.handle_file_select, files[0])
    return _back_to_page(session_id)


@router.post("/reset")
def reset(request: Request, store: PageSessionStore = Depends(get_session_store)):
    session_id, processor = _session(request, store)
    processor.reset_upload()
    return _back_to_page(session_id)


@router.get("/download")
def download(request: Request, store: PageSessionStore = Depends(get_session_store)):
    session_id = request.cookies.get(settings.PAGE_SESSION_COOKIE)
    processor = store.get(session_id)
    if processor is None or processor.result is None:
        raise HTTPException(status_code=404, detail="No processed avatar to download")
    downloaded = processor.download_image()
    if downloaded is None:
        return _back_to_page(session_id)
    return Response(
        content=downloaded.data,
        media_type=downloaded.content_type,
        headers={"Content-Disposition": f'attachment; filename="{downloaded.filename}"'},
    )


@router.get("/preview/{key}")
def preview(key: str, request: Request, store: PageSessionStore = Depends(get_session_store)):
    processor = store.get(request.cookies.get(settings.PAGE_SESSION_COOKIE))
    blob = processor.object_urls.get(f"{BLOB_PREFIX}{key}") if processor is not None else None
    if blob is None:
        raise HTTPException(status_code=404, detail="Preview not found")
    return Response(content=blob.data, media_type=blob.content_type)
