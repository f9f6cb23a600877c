from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    # DB URL (환경변수: DATABASE_URL)
    database_url: Optional[str] = Field(
        default="sqlite:///./dev.db",
        validation_alias="DATABASE_URL",
    )
    # SQL 로그 출력 (기본 끔)
    sql_echo: bool = Field(default=False, validation_alias="SQL_ECHO")

    # 외부 API (OCLC Classify)
    classify_api_base: str = Field(
        default="http://classify.oclc.org/classify2/Classify",
        validation_alias="CLASSIFY_API_BASE",
    )
    classify_timeout_s: float = Field(default=10.0, validation_alias="CLASSIFY_TIMEOUT_S")

    # 인덱스 페이지 기본 이름
    default_display_name: str = Field(default="Gopher", validation_alias="DEFAULT_DISPLAY_NAME")

    # 서버
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=8080, validation_alias="PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="forbid",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
