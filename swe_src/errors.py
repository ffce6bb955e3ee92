#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Exceptions raised by the workspace helpers.

The CLI layer turns every ``WorkspaceError`` into an ``[ERROR]`` line and
exits with ``exit_code``.
"""


class WorkspaceError(Exception):
    """Base class for failures that abort a command"""

    exit_code = 1

    def __init__(self, message: str, *, hints: tuple[str, ...] = ()):
        super().__init__(message)
        self.hints = hints


class PrerequisiteError(WorkspaceError):
    """Docker or Docker Compose is not available"""


class ProjectLayoutError(WorkspaceError):
    """A required compose file or app directory is missing"""


class ConfigError(WorkspaceError):
    """swe.yaml or SWE_* settings failed to load or validate"""


class UnknownServiceError(WorkspaceError):
    """The requested compose service is not running"""


class ComposeCommandError(WorkspaceError):
    """An external docker / compose invocation exited non-zero"""

    def __init__(self, cmd: list[str], returncode: int):
        super().__init__(f"Command failed with exit code {returncode}: {' '.join(cmd)}")
        self.cmd = cmd
        self.returncode = returncode
        self.exit_code = returncode


class OperationInterrupted(WorkspaceError):
    """The user pressed Ctrl+C while an external command was running"""

    exit_code = 130
