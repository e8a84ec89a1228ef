from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class CatalogModel(BaseModel):
    use_xdg_dirs: bool = True
    extra_dirs: list[str] = Field(default_factory=list)
    extension: str = ".desktop"

    @field_validator("extension")
    @classmethod
    def _non_empty_extension(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("extension must not be empty")
        return v.strip()


class QueryModel(BaseModel):
    calculator: bool = True


class LaunchModel(BaseModel):
    # run launched programs in their own session so they outlive the launcher
    new_session: bool = True


class LoggingModel(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v


class ConfigModel(BaseModel):
    catalog: CatalogModel = Field(default_factory=CatalogModel)
    query: QueryModel = Field(default_factory=QueryModel)
    launch: LaunchModel = Field(default_factory=LaunchModel)
    logging: LoggingModel = Field(default_factory=LoggingModel)
