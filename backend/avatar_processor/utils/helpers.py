from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from avatar_processor.config import settings

FILE_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def format_file_size(size: int) -> str:
    if not size or size <= 0:
        return "0 Bytes"
    k = 1024
    # floor(log_1024(size)) 를 정수 연산으로 구한다. GB 이상은 GB로 표시.
    i = 0
    while i < len(FILE_SIZE_UNITS) - 1 and size >= k ** (i + 1):
        i += 1
    # 소수 둘째 자리에서 반올림(0.5는 올림). 1.50 -> 1.5, 1.00 -> 1
    value = (Decimal(size) / Decimal(k ** i)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    text = f"{value:f}".rstrip("0").rstrip(".")
    return f"{text} {FILE_SIZE_UNITS[i]}"


def validate_image_file(size: int, content_type: Optional[str]) -> Optional[str]:
    """업로드 전 검증. 통과하면 None, 아니면 사용자에게 보여줄 오류 메시지."""
    if size > settings.MAX_UPLOAD_SIZE:
        limit = format_file_size(settings.MAX_UPLOAD_SIZE).replace(" ", "")
        return f"File size must be less than {limit}"
    if not str(content_type or "").startswith(settings.ACCEPTED_MIME_PREFIX):
        return "Please select a valid image file"
    return None
