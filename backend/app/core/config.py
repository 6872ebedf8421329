from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

STYLE_PLACEHOLDER = "{{style}}"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        protected_namespaces=(),
    )

    env: Literal["local", "prod", "test"] = Field(default="local", alias="ENV")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    cors_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        alias="CORS_ORIGINS",
    )

    aws_region: str = Field(default="us-east-1", alias="AWS_REGION")
    aws_access_key_id: str = Field(default="change-me", alias="AWS_ACCESS_KEY_ID")
    aws_secret_access_key: str = Field(default="change-me", alias="AWS_SECRET_ACCESS_KEY")
    s3_bucket: str = Field(default="image-studio", alias="AWS_S3_BUCKET_NAME")
    s3_endpoint: HttpUrl | None = Field(default=None, alias="S3_ENDPOINT_URL")
    cdn_domain: str = Field(default="localhost", alias="CLOUDFRONT_DOMAIN")

    upload_url_ttl: int = Field(default=60, gt=0, alias="UPLOAD_URL_TTL")

    gemini_api_key: str = Field(default="gemini-api-key", alias="GEMINI_API_KEY")
    gemini_model: str = Field(
        default="gemini-2.0-flash-exp-image-generation",
        alias="GEMINI_MODEL",
    )
    prompt_template: str = Field(
        default=f"Transform this image into {STYLE_PLACEHOLDER} style.",
        alias="TRANSFORM_PROMPT_TEMPLATE",
    )

    available_styles: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["ghibli", "lego", "watercolor", "anime"],
        alias="AVAILABLE_STYLES",
    )

    @field_validator("cors_origins", "available_styles", mode="before")
    @classmethod
    def _split_csv(cls, value):
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("cdn_domain")
    @classmethod
    def _strip_scheme(cls, value: str) -> str:
        domain = value.strip()
        for scheme in ("https://", "http://"):
            domain = domain.removeprefix(scheme)
        domain = domain.rstrip("/")
        if not domain:
            raise ValueError("CLOUDFRONT_DOMAIN must not be empty")
        return domain

    @field_validator("prompt_template")
    @classmethod
    def _require_placeholder(cls, value: str) -> str:
        if STYLE_PLACEHOLDER not in value:
            raise ValueError(
                f"TRANSFORM_PROMPT_TEMPLATE must contain the {STYLE_PLACEHOLDER} placeholder"
            )
        return value

    @field_validator("available_styles")
    @classmethod
    def _require_styles(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("AVAILABLE_STYLES must list at least one style")
        return value

    @property
    def default_style(self) -> str:
        return self.available_styles[0]


@lru_cache
def get_settings() -> Settings:
    return Settings()
