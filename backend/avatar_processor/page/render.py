"""업로드 페이지 HTML 렌더링입니다. 컨트롤러의 현재 상태만 보고 화면을 그립니다."""

from html import escape
from typing import Optional

from avatar_processor.page.controller import AvatarProcessor
from avatar_processor.page.object_urls import blob_key
from avatar_processor.schemas.avatar import ProcessingResult
from avatar_processor.utils.helpers import format_file_size

PLACEHOLDER_IMAGE = "/placeholder.svg"

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>AI Avatar Processor</title>
<style>
body {{ font-family: sans-serif; background: linear-gradient(135deg, #7c3aed, #2563eb, #4338ca); margin: 0; padding: 1rem; }}
.card {{ max-width: 56rem; margin: 0 auto; background: #fff; border-radius: 1rem; padding: 2rem; }}
.drop-zone {{ border: 3px dashed #c4b5fd; background: #f5f3ff; border-radius: .75rem; padding: 2rem; text-align: center; cursor: pointer; }}
.drop-zone.drag-over {{ border-color: #4ade80; background: #f0fdf4; }}
.processing {{ background: #eff6ff; padding: 1.5rem; border-radius: .5rem; }}
.error {{ background: #fef2f2; color: #991b1b; padding: 1rem; border-radius: .5rem; }}
.compare {{ display: grid; grid-template-columns: 1fr 1fr; gap: 1.5rem; }}
.compare img {{ max-width: 100%; max-height: 16rem; object-fit: contain; }}
.yes {{ color: #16a34a; }} .no {{ color: #dc2626; }}
.sizes {{ display: flex; justify-content: space-between; border-top: 1px solid #ddd; padding-top: .5rem; }}
</style>
</head>
<body>
<div class="card">
<h1>AI Avatar Processor</h1>
<p>Upload an image and watch our AI transform it into a perfect avatar!</p>
{upload}
{processing}
{error}
{result}
{endpoints}
</div>
{script}
</body>
</html>
"""

# 드래그 오버/리브/드롭은 브라우저 이벤트이므로 클라이언트에서 처리하고, 드롭 시 source=drop 으로 제출한다.
_DROP_SCRIPT = """<script>
(function () {
  var zone = document.getElementById("drop-zone");
  var form = document.getElementById("upload-form");
  var input = document.getElementById("image-input");
  var source = document.getElementById("upload-source");
  zone.addEventListener("click", function (e) {
    if (e.target.tagName !== "INPUT" && e.target.type !== "submit") { input.click(); }
  });
  input.addEventListener("change", function () {
    if (input.files.length > 0) { source.value = "browse"; form.submit(); }
  });
  zone.addEventListener("dragover", function (e) { e.preventDefault(); zone.classList.add("drag-over"); });
  zone.addEventListener("dragleave", function (e) { e.preventDefault(); zone.classList.remove("drag-over"); });
  zone.addEventListener("drop", function (e) {
    e.preventDefault();
    zone.classList.remove("drag-over");
    if (e.dataTransfer.files.length > 0) {
      input.files = e.dataTransfer.files;
      source.value = "drop";
      form.submit();
    }
  });
})();
</script>"""


def preview_src(url: Optional[str]) -> str:
    if not url:
        return PLACEHOLDER_IMAGE
    return f"/preview/{blob_key(url)}"


def _flag(value: bool) -> str:
    return '<span class="yes">Yes</span>' if value else '<span class="no">No</span>'


def render_upload_area(processor: AvatarProcessor) -> str:
    # 브라우저에서는 하이라이트를 _DROP_SCRIPT 가 클라이언트에서 토글한다. is_drag_over 는
    # handle_drag_over/handle_drag_leave 를 직접 호출하는 쪽(CLI, 테스트)의 상태를 그릴 때만 반영된다.
    zone_class = "drop-zone drag-over" if processor.is_drag_over else "drop-zone"
    return (
        '<form id="upload-form" action="/upload" method="post" enctype="multipart/form-data">'
        f'<div id="drop-zone" class="{zone_class}">'
        "<p>Drag and drop an image here or click to select</p>"
        '<button type="button">Choose Image</button>'
        "<p>Supported formats: JPG, PNG, WEBP (Max: 10MB)</p>"
        '<input id="image-input" type="file" name="image" accept="image/*">'
        '<input id="upload-source" type="hidden" name="source" value="browse">'
        '<button type="submit">Upload</button>'
        "</div></form>"
    )


def render_processing(processor: AvatarProcessor) -> str:
    if not processor.is_processing:
        return ""
    return (
        '<div class="processing"><p><strong>Processing your avatar...</strong></p>'
        "<p>AI is detecting faces, removing background, and optimizing your image</p></div>"
    )


def render_error(processor: AvatarProcessor) -> str:
    if processor.error is None:
        return ""
    return (
        f'<div class="error" role="alert">Error: {escape(processor.error)}'
        '<form action="/reset" method="post" style="display:inline"><button type="submit">Try Again</button></form>'
        "</div>"
    )


def render_details(result: ProcessingResult) -> str:
    details = result.processing_details
    return (
        '<section class="details"><h3>Processing Details</h3>'
        f"<div>Face Detected: {_flag(details.face_detected)}</div>"
        f"<div>Image Cropped: {_flag(details.cropped)}</div>"
        f"<div>Background Removed: {_flag(details.background_removed)}</div>"
        f"<div>Output Size: {escape(details.size or 'N/A')}</div>"
        f"<div>Original Filename: {escape(result.original_filename)}</div>"
        f"<div>Avatar ID: {result.avatar_id}</div>"
        '<div class="sizes">'
        f"<span>Original Size: {format_file_size(details.original_size_bytes)}</span>"
        f"<span>Processed Size: {format_file_size(details.processed_size_bytes)}</span>"
        "</div></section>"
    )


def render_result(processor: AvatarProcessor) -> str:
    result = processor.result
    if result is None:
        return ""
    original = ""
    if processor.original_image_url:
        original = f'<img src="{escape(preview_src(processor.original_image_url))}" alt="Original">'
    processed_src = escape(result.processed_image_url or PLACEHOLDER_IMAGE)
    return (
        '<section class="result"><h2>Avatar Created Successfully!</h2>'
        '<div class="compare">'
        f"<div><h3>Original Image</h3>{original}</div>"
        f'<div><h3>Processed Avatar</h3><img src="{processed_src}" alt="Processed Avatar"></div>'
        "</div>"
        '<div class="actions">'
        '<a href="/download">Download Avatar</a> '
        '<form action="/reset" method="post" style="display:inline"><button type="submit">Process Another Image</button></form>'
        "</div>"
        f"{render_details(result)}</section>"
    )


def render_endpoints() -> str:
    return (
        '<section class="endpoints"><h3>API Endpoints</h3>'
        "<p><strong>Upload:</strong> <code>POST /api/process-avatar/</code></p>"
        '<p><a href="/api/info" target="_blank" rel="noopener noreferrer">API Info</a> '
        '<a href="/api/health" target="_blank" rel="noopener noreferrer">Health Check</a></p>'
        "</section>"
    )


def render_page(processor: AvatarProcessor) -> str:
    return _PAGE_TEMPLATE.format(
        upload=render_upload_area(processor),
        processing=render_processing(processor),
        error=render_error(processor),
        result=render_result(processor),
        endpoints=render_endpoints(),
        script=_DROP_SCRIPT,
    )
