from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    database_url: str = Field(default="sqlite:///rbac_metadata.db", alias="DATABASE_URL")
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")

    # 페이지네이션 옵션에 limit을 지정하지 않았을 때 사용할 기본값
    default_page_limit: int = Field(default=10, alias="DEFAULT_PAGE_LIMIT")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",  # 프로젝트 루트의 .env 파일
        extra="ignore"    # 사용하지 않는 .env 항목은 무시
    )

    # logging 모듈은 대문자 레벨 이름만 인식함
    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()

settings = Settings()
