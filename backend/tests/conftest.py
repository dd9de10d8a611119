import httpx
import pytest
from fastapi.testclient import TestClient

from avatar_processor.main import app
from avatar_processor.page.controller import AvatarProcessor, SelectedFile
from avatar_processor.page.sessions import PageSessionStore
from avatar_processor.routers.page import get_session_store

PROCESSED_IMAGE_URL = "http://avatar.local/media/avatars/avatar_42.png"
PROCESSED_IMAGE_BYTES = b"\x89PNG\r\n\x1a\nprocessed"

SUCCESS_PAYLOAD = {
    "success": True,
    "message": "Avatar processed successfully",
    "processed_image_url": PROCESSED_IMAGE_URL,
    "original_filename": "me.jpg",
    "avatar_id": 42,
    "processing_details": {
        "cropped": True,
        "background_removed": True,
        "face_detected": False,
        "size": "512x512",
        "original_size_bytes": 1536,
        "processed_size_bytes": 1048576,
    },
}


def _fresh(response: httpx.Response) -> httpx.Response:
    # 같은 응답 객체를 여러 요청에 재사용하지 않도록 매번 새로 만든다.
    return httpx.Response(response.status_code, headers=response.headers, content=response.content)


class FakePageBackend:
    """AvatarProcessor 가 호출하는 /api/process-avatar 와 처리 이미지 URL 을 흉내낸다."""

    def __init__(self):
        self.requests = []
        self.process_response = httpx.Response(200, json=SUCCESS_PAYLOAD)
        self.image_response = httpx.Response(
            200, content=PROCESSED_IMAGE_BYTES, headers={"content-type": "image/png"}
        )

    @property
    def upload_requests(self):
        return [r for r in self.requests if r.url.path == "/api/process-avatar"]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/api/process-avatar":
            if isinstance(self.process_response, Exception):
                raise self.process_response
            return _fresh(self.process_response)
        if request.url.path.startswith("/media/"):
            if isinstance(self.image_response, Exception):
                raise self.image_response
            return _fresh(self.image_response)
        return httpx.Response(404, json={"detail": "Not Found"})


def make_processor(backend: FakePageBackend) -> AvatarProcessor:
    client = httpx.Client(base_url="http://page.local", transport=httpx.MockTransport(backend))
    return AvatarProcessor(client)


def png_file(name: str = "me.png", size: int = 128) -> SelectedFile:
    return SelectedFile(filename=name, content_type="image/png", data=b"\x89PNG" + b"\0" * max(0, size - 4))


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def page_backend():
    return FakePageBackend()


@pytest.fixture
def processor(page_backend):
    proc = make_processor(page_backend)
    yield proc
    proc.close()


@pytest.fixture
def page_store(page_backend):
    store = PageSessionStore(factory=lambda: make_processor(page_backend), max_sessions=8)
    app.dependency_overrides[get_session_store] = lambda: store
    yield store
    app.dependency_overrides.pop(get_session_store, None)
    store.clear()
