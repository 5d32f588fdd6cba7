"""
Pydantic 스키마 공통 정의 (API 요청/응답)
"""

import re
from typing import Optional

from pydantic import BaseModel


# ============================================================
# Common
# ============================================================

class ErrorResponse(BaseModel):
    """공통 에러 응답"""
    error: str
    code: str
    detail: Optional[str] = None


# ============================================================
# 입력 검증 패턴
# ============================================================

# 링크 필드 (downloadLink, githubLink, externalLink)
URL_PATTERN = re.compile(
    r"[(http(s)?):/(www\.)?a-zA-Z0-9@:%._+~#=]{2,256}\.[a-z]{2,6}\b([-a-zA-Z0-9@:%_+.~#?&/=]*)",
    re.IGNORECASE,
)

# 이미지 필드 (heroImage, appIcon): 이미지 확장자 URL 또는 Microsoft Store 이미지
IMAGE_URL_PATTERN = re.compile(
    r"(?:https?://)[-a-zA-Z0-9@:%._+~#=]{2,256}\.[a-z]{2,4}\b(?:[-a-zA-Z0-9@:%_+.~#?&/=].+(\.jpe?g|\.png|\.gif))"
    r"|(store-images\.s-microsoft\.com/image/apps)"
)

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


def is_valid_url(value: str) -> bool:
    return URL_PATTERN.search(value) is not None


def is_valid_image_url(value: str) -> bool:
    return IMAGE_URL_PATTERN.search(value) is not None
