"""Avatar 처리 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel, Field


class ProcessingDetails(BaseModel):
    cropped: bool = False
    background_removed: bool = False
    face_detected: bool = False
    size: str = ""
    original_size_bytes: int = 0
    processed_size_bytes: int = 0


class ProcessingResult(BaseModel):
    success: bool
    message: str = ""
    processed_image_url: str = ""
    original_filename: str = ""
    avatar_id: int = 0
    processing_details: ProcessingDetails = Field(default_factory=ProcessingDetails)


class ProxyErrorOut(BaseModel):
    error: str


class ProcessFailureOut(BaseModel):
    success: bool = False
    message: str
