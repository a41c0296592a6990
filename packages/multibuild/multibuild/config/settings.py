from functools import cached_property, lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from multibuild.config.groups import ObservabilityConfig, TaskNamingConfig


class MultiBuildSettings(BaseSettings):
    """
    MultiBuild Settings

    Environment variables should use MULTIBUILD_ prefix.
    Example: MULTIBUILD_TASK_PREFIX, MULTIBUILD_LOG_FORMAT

    그룹화된 설정 접근:
        settings.tasks          # TaskNamingConfig
        settings.observability  # ObservabilityConfig
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MULTIBUILD_",
        extra="ignore",
    )

    # Task naming
    task_prefix: str = "js"
    output_suffix: str = ".js"

    # Observability
    log_level: str = "INFO"
    log_format: str = "console"
    slow_build_ms: float = 1000.0

    @cached_property
    def tasks(self) -> TaskNamingConfig:
        """태스크 이름 설정 그룹."""
        return TaskNamingConfig(
            task_prefix=self.task_prefix,
            output_suffix=self.output_suffix,
        )

    @cached_property
    def observability(self) -> ObservabilityConfig:
        """로깅 설정 그룹."""
        return ObservabilityConfig(
            log_level=self.log_level,
            log_format=self.log_format,
            slow_build_ms=self.slow_build_ms,
        )


@lru_cache
def get_settings() -> MultiBuildSettings:
    return MultiBuildSettings()
