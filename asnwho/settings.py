from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Response cache
    data_dir: Path = Field(default=Path("/data"), alias="DATA_DIR")
    cache_write_strict: bool = Field(default=True, alias="CACHE_WRITE_STRICT")

    # Registry / RDAP
    rate_limit_retry_delay: float = Field(
        default=10.0,
        alias="RATE_LIMIT_RETRY_DELAY",
    )

    # Misc
    cache_expire: int = Field(default=86400, alias="CACHE_EXPIRE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def recommended_warnings(self) -> List[str]:
        warnings: List[str] = []
        if not self.data_dir.is_absolute():
            warnings.append(
                (
                    f"DATA_DIR={self.data_dir} is relative; cached responses "
                    "depend on the working directory."
                )
            )
        if self.rate_limit_retry_delay <= 0:
            warnings.append(
                (
                    "RATE_LIMIT_RETRY_DELAY is not positive; throttled "
                    "registries will be hammered with retries."
                )
            )
        return warnings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[arg-type]


def reset_settings_cache() -> None:
    """Clear cached settings (intended for test usage)."""
    get_settings.cache_clear()
