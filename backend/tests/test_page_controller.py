"""업로드 페이지 컨트롤러의 상태 전이, 검증, object URL 정리를 검증합니다."""

import httpx

from avatar_processor.page.controller import AvatarProcessor, DownloadedFile, SelectedFile
from avatar_processor.page.state import Failed, Idle, Submitting, Succeeded
from tests.conftest import PROCESSED_IMAGE_BYTES, png_file

TEN_MIB = 10 * 1024 * 1024


def test_initial_state_is_idle(processor):
    assert isinstance(processor.state, Idle)
    assert processor.result is None
    assert processor.error is None
    assert processor.original_image_url is None
    assert processor.is_processing is False
    assert processor.is_drag_over is False


def test_oversized_file_is_rejected_without_request(processor, page_backend):
    big = SelectedFile(filename="big.png", content_type="image/png", data=b"\0" * (TEN_MIB + 1))
    processor.handle_file_select(big)
    assert processor.error == "File size must be less than 10MB"
    assert page_backend.requests == []
    assert len(processor.object_urls) == 0


def test_non_image_file_is_rejected_without_request(processor, page_backend):
    doc = SelectedFile(filename="cv.pdf", content_type="application/pdf", data=b"%PDF-1.4")
    processor.handle_file_select(doc)
    assert processor.error == "Please select a valid image file"
    assert page_backend.requests == []


def test_valid_file_sends_exactly_one_upload_carrying_the_file(processor, page_backend):
    file = png_file("me.png")
    processor.handle_file_select(file)

    assert len(page_backend.requests) == 1
    request = page_backend.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/api/process-avatar"
    assert request.headers["content-type"].startswith("multipart/form-data")
    assert b'name="image"' in request.content
    assert b'filename="me.png"' in request.content
    assert file.data in request.content


def test_file_of_exactly_ten_mib_is_accepted(processor, page_backend):
    processor.handle_file_select(SelectedFile(filename="max.jpg", content_type="image/jpeg", data=b"\0" * TEN_MIB))
    assert len(page_backend.upload_requests) == 1


def test_success_response_stores_result_and_preview(processor):
    file = png_file()
    processor.handle_file_select(file)

    assert isinstance(processor.state, Succeeded)
    assert processor.error is None
    assert processor.result.avatar_id == 42
    assert processor.result.processing_details.size == "512x512"
    preview = processor.object_urls.get(processor.original_image_url)
    assert preview.data == file.data
    assert preview.content_type == "image/png"
    assert processor.file_input_value == "me.png"


def test_application_rejection_shows_server_message(processor, page_backend):
    page_backend.process_response = httpx.Response(400, json={"success": False, "message": "No face detected"})
    processor.handle_file_select(png_file())
    assert isinstance(processor.state, Failed)
    assert processor.error == "No face detected"
    assert processor.result is None
    assert processor.original_image_url is not None


def test_rejection_without_message_uses_generic_text(processor, page_backend):
    page_backend.process_response = httpx.Response(500, json={"success": False, "message": ""})
    processor.handle_file_select(png_file())
    assert processor.error == "Processing failed"


def test_transport_error_is_reported_as_network_error(processor, page_backend):
    page_backend.process_response = httpx.ConnectError("connection refused")
    processor.handle_file_select(png_file())
    assert processor.error == "Network error: connection refused"
    assert processor.is_processing is False


def test_non_json_response_is_reported_as_network_error(processor, page_backend):
    page_backend.process_response = httpx.Response(502, text="Bad Gateway")
    processor.handle_file_select(png_file())
    assert processor.error.startswith("Network error: ")


def test_new_submission_revokes_previous_preview(processor):
    processor.handle_file_select(png_file("first.png"))
    first_preview = processor.original_image_url

    processor.handle_file_select(png_file("second.png"))
    assert first_preview not in processor.object_urls
    assert processor.original_image_url != first_preview
    assert len(processor.object_urls) == 1


def test_failed_then_success_clears_error(processor, page_backend):
    page_backend.process_response = httpx.Response(400, json={"success": False, "message": "No face detected"})
    processor.handle_file_select(png_file())
    assert processor.error == "No face detected"

    page_backend.process_response = httpx.Response(200, json={"success": True, "avatar_id": 5})
    processor.handle_file_select(png_file())
    assert processor.error is None
    assert processor.result.avatar_id == 5


def test_submitting_state_is_visible_while_request_is_in_flight():
    seen = {}
    holder = {}

    def _observe(request):
        seen["state"] = holder["processor"].state
        return httpx.Response(200, json={"success": True, "avatar_id": 1})

    proc = AvatarProcessor(httpx.Client(base_url="http://page.local", transport=httpx.MockTransport(_observe)))
    holder["processor"] = proc
    try:
        proc.handle_file_select(png_file())
    finally:
        proc.close()
    assert isinstance(seen["state"], Submitting)
    assert seen["state"].preview_url is not None
    assert isinstance(proc.state, Idle)


def test_reset_after_success_returns_to_initial_state(processor):
    processor.handle_file_select(png_file())
    processor.reset_upload()

    assert isinstance(processor.state, Idle)
    assert processor.result is None
    assert processor.error is None
    assert processor.original_image_url is None
    assert processor.file_input_value == ""
    assert len(processor.object_urls) == 0


def test_reset_after_failure_returns_to_initial_state(processor, page_backend):
    page_backend.process_response = httpx.ConnectError("down")
    processor.handle_file_select(png_file())
    processor.reset_upload()

    assert isinstance(processor.state, Idle)
    assert processor.error is None
    assert len(processor.object_urls) == 0


def test_drag_over_and_leave_toggle_highlight(processor):
    processor.handle_drag_over()
    assert processor.is_drag_over is True
    processor.handle_drag_leave()
    assert processor.is_drag_over is False


def test_drop_uses_only_first_file(processor, page_backend):
    processor.handle_drag_over()
    processor.handle_drop([png_file("first.png"), png_file("second.png"), png_file("third.png")])

    assert processor.is_drag_over is False
    assert len(page_backend.upload_requests) == 1
    assert b'filename="first.png"' in page_backend.upload_requests[0].content
    assert b"second.png" not in page_backend.upload_requests[0].content


def test_drop_of_invalid_first_file_is_rejected(processor, page_backend):
    doc = SelectedFile(filename="notes.txt", content_type="text/plain", data=b"hello")
    processor.handle_drop([doc, png_file()])
    assert processor.error == "Please select a valid image file"
    assert page_backend.requests == []


def test_empty_drop_does_nothing(processor, page_backend):
    processor.handle_drag_over()
    processor.handle_drop([])
    assert processor.is_drag_over is False
    assert isinstance(processor.state, Idle)
    assert page_backend.requests == []


def test_download_names_file_by_avatar_id_and_revokes_blob(processor, page_backend):
    processor.handle_file_select(png_file())
    downloaded = processor.download_image()

    assert isinstance(downloaded, DownloadedFile)
    assert downloaded.filename == "avatar_42.png"
    assert downloaded.data == PROCESSED_IMAGE_BYTES
    assert downloaded.content_type == "image/png"
    assert page_backend.requests[-1].url.path == "/media/avatars/avatar_42.png"
    # 미리보기 참조만 남고 다운로드용 blob 은 해제된다.
    assert len(processor.object_urls) == 1
    assert isinstance(processor.state, Succeeded)


def test_download_failure_sets_error(processor, page_backend):
    processor.handle_file_select(png_file())
    page_backend.image_response = httpx.ConnectError("gone")

    assert processor.download_image() is None
    assert processor.error == "Failed to download image"
    assert processor.result is None


def test_download_without_result_is_noop(processor, page_backend):
    assert processor.download_image() is None
    assert page_backend.requests == []


def test_downloaded_file_saves_to_directory(tmp_path):
    downloaded = DownloadedFile(filename="avatar_3.png", content_type="image/png", data=b"png")
    path = downloaded.save(tmp_path)
    assert path == tmp_path / "avatar_3.png"
    assert path.read_bytes() == b"png"
