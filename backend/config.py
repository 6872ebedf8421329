from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def varenv(varname, default=...):
    return Field(default=default, validation_alias=AliasChoices(varname))


class EnvConf(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="allow"
    )


class StudioApi(EnvConf):
    base_url: str = varenv("STUDIO_API_URL", "http://localhost:8000")
    timeout: float = varenv("STUDIO_API_TIMEOUT", 120.0)


class EnvironmentSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")
    studio: StudioApi

    def __init__(self, **data: Any):
        super().__init__(
            studio=StudioApi(),
            **data,
        )


env_settings = EnvironmentSettings()
