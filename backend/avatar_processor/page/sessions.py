"""브라우저 세션별 업로드 페이지 컨트롤러 저장소입니다."""

import logging
import threading
import uuid
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from avatar_processor.page.controller import AvatarProcessor

logger = logging.getLogger(__name__)


class PageSessionStore:
    """세션 ID -> AvatarProcessor. 최대 개수를 넘으면 가장 오래 쓰지 않은 세션부터 정리한다."""

    def __init__(self, factory: Callable[[], AvatarProcessor], max_sessions: int = 256):
        self.factory = factory
        self.max_sessions = max(1, int(max_sessions))
        self._sessions: "OrderedDict[str, AvatarProcessor]" = OrderedDict()
        self._lock = threading.Lock()

    def get_or_create(self, session_id: Optional[str]) -> Tuple[str, AvatarProcessor]:
        with self._lock:
            if session_id and session_id in self._sessions:
                self._sessions.move_to_end(session_id)
                return session_id, self._sessions[session_id]

            new_id = uuid.uuid4().hex
            self._sessions[new_id] = self.factory()
            while len(self._sessions) > self.max_sessions:
                evicted_id, evicted = self._sessions.popitem(last=False)
                evicted.close()
                logger.info("[page] evicted session %s", evicted_id)
            return new_id, self._sessions[new_id]

    def get(self, session_id: Optional[str]) -> Optional[AvatarProcessor]:
        # 조회 전용. 세션이 없어도 새로 만들지 않는다.
        if not session_id:
            return None
        with self._lock:
            processor = self._sessions.get(session_id)
            if processor is not None:
                self._sessions.move_to_end(session_id)
            return processor

    def clear(self) -> None:
        with self._lock:
            for processor in self._sessions.values():
                processor.close()
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
