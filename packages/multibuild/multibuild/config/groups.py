"""
설정 그룹 정의.

Settings를 논리적 그룹으로 분리하여 관리합니다.
각 그룹은 독립적으로 사용 가능하며, Settings에서 통합됩니다.
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class TaskNamingConfig(BaseModel):
    """태스크 이름 / 출력 파일 이름 설정."""

    task_prefix: str = Field(default="js", min_length=1, description="태스크 이름 접두사 (js:app)")
    output_suffix: str = Field(default=".js", description="번들 출력 파일 확장자")

    @field_validator("task_prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        """Prefix must not contain whitespace or ':'"""
        if any(ch.isspace() for ch in v) or ":" in v:
            raise ValueError(f"Invalid task prefix: {v!r}")
        return v


class ObservabilityConfig(BaseModel):
    """로깅 설정."""

    log_level: str = Field(default="INFO", description="로그 레벨")
    log_format: Literal["console", "json"] = Field(default="console", description="로그 출력 포맷")
    slow_build_ms: float = Field(default=1000.0, ge=0.0, description="느린 빌드 경고 임계값 (ms)")
