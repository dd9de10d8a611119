"""애플리케이션 로깅 설정입니다."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler = logging.StreamHandler()
_handler.setFormatter(logging.Formatter(LOG_FORMAT))


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level or "INFO").upper(), logging.INFO))
    # 여러 번 호출되어도 같은 핸들러를 한 번만 등록한다.
    if _handler not in root.handlers:
        root.addHandler(_handler)
