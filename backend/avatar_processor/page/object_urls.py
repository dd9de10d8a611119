"""로컬 blob 참조(object URL) 테이블입니다. 생성한 참조는 더 이상 필요 없을 때 revoke 해야 합니다."""

import threading
import uuid
from dataclasses import dataclass
from typing import Dict, Optional

BLOB_PREFIX = "blob:"


@dataclass(frozen=True)
class Blob:
    data: bytes
    content_type: str


class ObjectURLRegistry:
    def __init__(self):
        self._blobs: Dict[str, Blob] = {}
        self._lock = threading.Lock()

    def create(self, data: bytes, content_type: str) -> str:
        url = f"{BLOB_PREFIX}{uuid.uuid4().hex}"
        with self._lock:
            self._blobs[url] = Blob(data=data, content_type=content_type)
        return url

    def get(self, url: Optional[str]) -> Optional[Blob]:
        if not url:
            return None
        with self._lock:
            return self._blobs.get(url)

    def revoke(self, url: Optional[str]) -> None:
        if not url:
            return
        with self._lock:
            self._blobs.pop(url, None)

    def revoke_all(self) -> None:
        with self._lock:
            self._blobs.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._blobs)

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._blobs


def blob_key(url: str) -> str:
    return url[len(BLOB_PREFIX):] if url.startswith(BLOB_PREFIX) else url
