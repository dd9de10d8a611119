"""업로드 페이지 컨트롤러입니다. 파일 선택/드래그앤드롭/업로드/다운로드/초기화 동작과 뷰 상태 전이를 담당합니다."""

import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

import httpx

from avatar_processor.page.object_urls import ObjectURLRegistry
from avatar_processor.page.state import Failed, Idle, Submitting, Succeeded, ViewState
from avatar_processor.schemas.avatar import ProcessingResult
from avatar_processor.utils.helpers import validate_image_file

logger = logging.getLogger(__name__)

PROCESS_AVATAR_PATH = "/api/process-avatar"
UPLOAD_FIELD = "image"


@dataclass
class SelectedFile:
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path, content_type: Optional[str] = None) -> "SelectedFile":
        p = Path(path)
        guessed = content_type or mimetypes.guess_type(p.name)[0] or "application/octet-stream"
        return cls(filename=p.name, content_type=guessed, data=p.read_bytes())


@dataclass
class DownloadedFile:
    filename: str
    content_type: str
    data: bytes

    def save(self, directory) -> Path:
        target = Path(directory) / self.filename
        target.write_bytes(self.data)
        return target


class AvatarProcessor:
    """업로드 페이지 하나의 상태를 관리합니다.

    상태는 `state` 하나로만 표현되며 결과(Succeeded)와 오류(Failed)는 동시에 존재하지 않는다.
    원본 미리보기는 object URL로 보관하고, 새 업로드나 초기화로 대체될 때 revoke 한다.

    처리 중(Submitting) 재제출을 막는 잠금은 없다. 동시에 두 번 제출하면 마지막에 끝난
    요청의 결과가 남는다.
    """

    def __init__(self, client: httpx.Client, object_urls: Optional[ObjectURLRegistry] = None):
        self.client = client
        self.object_urls = object_urls if object_urls is not None else ObjectURLRegistry()
        self.state: ViewState = Idle()
        self.is_drag_over = False
        self.file_input_value = ""

    @property
    def is_processing(self) -> bool:
        return isinstance(self.state, Submitting)

    @property
    def result(self) -> Optional[ProcessingResult]:
        return self.state.result if isinstance(self.state, Succeeded) else None

    @property
    def error(self) -> Optional[str]:
        return self.state.message if isinstance(self.state, Failed) else None

    @property
    def original_image_url(self) -> Optional[str]:
        return getattr(self.state, "preview_url", None)

    def handle_file_select(self, file: SelectedFile) -> None:
        error = validate_image_file(file.size, file.content_type)
        if error:
            logger.info("[page] rejected %s (%s, %d bytes): %s", file.filename, file.content_type, file.size, error)
            self.state = Failed(message=error, preview_url=self.original_image_url)
            return
        self.file_input_value = file.filename
        self.process_image(file)

    def handle_drag_over(self) -> None:
        self.is_drag_over = True

    def handle_drag_leave(self) -> None:
        self.is_drag_over = False

    def handle_drop(self, files: Sequence[SelectedFile]) -> None:
        self.is_drag_over = False
        if len(files) > 0:
            self.handle_file_select(files[0])

    def process_image(self, file: SelectedFile) -> None:
        self._release_preview()
        preview_url = self.object_urls.create(file.data, file.content_type)
        self.state = Submitting(preview_url=preview_url)

        try:
            response = self.client.post(
                PROCESS_AVATAR_PATH,
                files={UPLOAD_FIELD: (file.filename, file.data, file.content_type)},
            )
            data = response.json()
            if not isinstance(data, dict):
                raise ValueError(f"unexpected response body: {type(data).__name__}")
            if data.get("success"):
                result = ProcessingResult.model_validate(data)
                logger.info("[page] avatar %s created from %s", result.avatar_id, file.filename)
                self.state = Succeeded(result=result, preview_url=preview_url)
            else:
                message = data.get("message") or "Processing failed"
                logger.info("[page] processing rejected for %s: %s", file.filename, message)
                self.state = Failed(message=message, preview_url=preview_url)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("[page] upload of %s failed: %s", file.filename, exc)
            self.state = Failed(message=f"Network error: {str(exc) or 'Unknown error'}", preview_url=preview_url)

    def download_image(self) -> Optional[DownloadedFile]:
        result = self.result
        if result is None or not result.processed_image_url:
            return None

        try:
            response = self.client.get(result.processed_image_url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("[page] download of avatar %s failed: %s", result.avatar_id, exc)
            self.state = Failed(message="Failed to download image", preview_url=self.original_image_url)
            return None

        url = self.object_urls.create(response.content, response.headers.get("content-type", "image/png"))
        try:
            blob = self.object_urls.get(url)
            return DownloadedFile(
                filename=f"avatar_{result.avatar_id}.png",
                content_type=blob.content_type,
                data=blob.data,
            )
        finally:
            self.object_urls.revoke(url)

    def reset_upload(self) -> None:
        self._release_preview()
        self.state = Idle()
        self.file_input_value = ""

    def close(self) -> None:
        self.object_urls.revoke_all()
        self.state = Idle()
        self.client.close()

    def _release_preview(self) -> None:
        self.object_urls.revoke(self.original_image_url)
