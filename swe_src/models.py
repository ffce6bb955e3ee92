#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Configuration models for workspace management.
"""

from enum import Enum
from pathlib import PurePosixPath
from typing import Literal, Tuple, Type

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    SettingsConfigDict,
    PydanticBaseSettingsSource,
)


class Profile(str, Enum):
    """Which compose file a lifecycle command targets"""

    PRODUCTION = "production"
    DEVELOPMENT = "development"


class EnvFileStatus(str, Enum):
    """Outcome of provisioning one app's env file"""

    CREATED = "created"
    EXISTS = "exists"
    MISSING_TEMPLATE = "missing_template"


# ============================================================================
# Pydantic Models for Configuration
# ============================================================================


class ComposeConfig(BaseModel):
    """Compose file locations, relative to the project root"""

    file: str = Field(
        default="docker-compose.yml", description="Production compose file"
    )
    dev_file: str = Field(
        default="docker-compose.dev.yml", description="Development compose file"
    )

    def file_for(self, profile: Profile) -> str:
        if profile is Profile.DEVELOPMENT:
            return self.dev_file
        return self.file


class AppConfig(BaseModel):
    """Application directory that carries its own env file"""

    name: str = Field(description="Application name")
    path: str = Field(description="Directory relative to the project root")
    env_example: str = Field(
        default=".env.example", description="Template copied when env_file is absent"
    )
    env_file: str = Field(default=".env", description="Env file read by the service")

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Reject absolute paths and parent traversal"""
        p = PurePosixPath(v)
        if p.is_absolute() or ".." in p.parts:
            raise ValueError("App path must be relative to the project root")
        return v


class EndpointConfig(BaseModel):
    """Published service endpoint"""

    service: str = Field(description="Compose service name")
    label: str = Field(description="Human readable name")
    port: int = Field(ge=1, le=65535, description="Published host port")
    scheme: Literal["http", "https"] = Field(default="http")

    def url(self, host: str) -> str:
        return f"{self.scheme}://{host}:{self.port}"


class BuildConfig(BaseModel):
    """Image build options"""

    no_cache: bool = Field(
        default=True, description="Pass --no-cache to compose build"
    )


def _default_apps() -> list[AppConfig]:
    return [
        AppConfig(name="web", path="apps/web"),
        AppConfig(name="open-swe", path="apps/open-swe"),
    ]


def _default_endpoints() -> list[EndpointConfig]:
    return [
        EndpointConfig(service="web", label="Web app", port=3000),
        EndpointConfig(service="agent", label="Agent API", port=2024),
    ]


class Config(BaseSettings):
    """Main configuration model"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SWE_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Host used in printed URLs")
    compose: ComposeConfig = Field(default_factory=ComposeConfig)
    apps: list[AppConfig] = Field(default_factory=_default_apps)
    endpoints: list[EndpointConfig] = Field(default_factory=_default_endpoints)
    build: BuildConfig = Field(default_factory=BuildConfig)

    @field_validator("apps")
    @classmethod
    def validate_apps(cls, v: list[AppConfig]) -> list[AppConfig]:
        if not v:
            raise ValueError("apps must contain at least one application")
        names = [app.name for app in v]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate app names: {', '.join(duplicates)}")
        return v

    @model_validator(mode="after")
    def check_port_conflicts(self) -> "Config":
        """Check for port conflicts across endpoints"""
        seen = set[int]()
        duplicates: list[str] = []
        for endpoint in self.endpoints:
            if endpoint.port in seen:
                duplicates.append(f"{endpoint.service}:{endpoint.port}")
            seen.add(endpoint.port)

        if duplicates:
            raise ValueError(f"Port conflicts detected: {', '.join(duplicates)}")

        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """
        Customize settings sources priority.
        Priority: env vars > .env file > YAML (init) > file secrets > defaults
        """
        return env_settings, dotenv_settings, init_settings, file_secret_settings
