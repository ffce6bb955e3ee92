#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Open SWE Docker workspace package.
"""

from .commands import app, main
from .errors import (
    ComposeCommandError,
    ConfigError,
    OperationInterrupted,
    PrerequisiteError,
    ProjectLayoutError,
    UnknownServiceError,
    WorkspaceError,
)
from .manager import WorkspaceManager
from .models import (
    AppConfig,
    BuildConfig,
    ComposeConfig,
    Config,
    EndpointConfig,
    EnvFileStatus,
    Profile,
)

__all__ = [
    # Commands
    "app",
    "main",
    # Manager
    "WorkspaceManager",
    # Models
    "Config",
    "ComposeConfig",
    "AppConfig",
    "EndpointConfig",
    "BuildConfig",
    "Profile",
    "EnvFileStatus",
    # Errors
    "WorkspaceError",
    "PrerequisiteError",
    "ProjectLayoutError",
    "ConfigError",
    "UnknownServiceError",
    "ComposeCommandError",
    "OperationInterrupted",
]
