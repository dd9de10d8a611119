"""FastAPI 애플리케이션 진입점. 미들웨어, 프록시 API 라우터, 업로드 페이지를 등록합니다."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from avatar_processor.config import settings
from avatar_processor.logging_config import setup_logging
from avatar_processor.routers import page, proxy

setup_logging(settings.LOG_LEVEL)

app = FastAPI(
    title="AI Avatar Processor",
    description="원격 Avatar 처리 서버로 이미지를 전달하고 결과를 보여주는 업로드 UI",
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register all routers
app.include_router(proxy.router)
app.include_router(page.router)


@app.on_event("shutdown")
def release_page_sessions():
    page.session_store.clear()
