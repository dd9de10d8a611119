"""업로드 페이지 뷰 상태입니다.

페이지는 항상 아래 네 상태 중 하나만 가진다. 결과와 오류가 동시에 존재할 수 없도록
플래그 대신 상태 객체 하나로 표현한다.

    Idle -> (검증) -> Submitting -> Succeeded | Failed -> Idle
"""

from dataclasses import dataclass
from typing import Optional, Union

from avatar_processor.schemas.avatar import ProcessingResult


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Submitting:
    preview_url: Optional[str] = None


@dataclass(frozen=True)
class Succeeded:
    result: ProcessingResult
    preview_url: Optional[str] = None


@dataclass(frozen=True)
class Failed:
    message: str
    preview_url: Optional[str] = None


ViewState = Union[Idle, Submitting, Succeeded, Failed]
