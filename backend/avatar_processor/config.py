"""환경 변수 기반 애플리케이션 설정을 중앙에서 관리합니다."""

from pydantic_settings import BaseSettings
from typing import List, Optional
from pathlib import Path


class Settings(BaseSettings):
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Remote avatar processing server
    AVATAR_API_BASE_URL: str = "http://31.97.135.175:8989"
    # None이면 타임아웃 없이 원격 응답을 기다린다.
    AVATAR_API_TIMEOUT_SECONDS: Optional[float] = None

    # Upload page
    PAGE_API_BASE_URL: str = "http://127.0.0.1:8000"
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10 MB
    ACCEPTED_MIME_PREFIX: str = "image/"
    PAGE_MAX_SESSIONS: int = 256
    PAGE_SESSION_COOKIE: str = "avatar_session"

    class Config:
        # 실행 cwd와 무관하게 backend/.env를 로드한다.
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
