#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Host toolchain detection: docker, the compose front end and git.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from .errors import PrerequisiteError

logger = logging.getLogger(__name__)


def ensure_docker() -> str:
    """Return the path of the docker binary or raise PrerequisiteError"""
    docker = shutil.which("docker")
    if docker is None:
        raise PrerequisiteError("Docker is not installed. Please install Docker first.")
    logger.debug("docker found at %s", docker)
    return docker


def _compose_plugin_available() -> bool:
    try:
        result = subprocess.run(
            ["docker", "compose", "version"],
            capture_output=True,
            text=True,
            timeout=10,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError):
        return False
    return result.returncode == 0


def detect_compose_command() -> list[str]:
    """Pick the compose front end.

    The standalone ``docker-compose`` binary wins when it is on PATH,
    otherwise ``docker compose version`` decides whether the plugin works.
    """
    if shutil.which("docker-compose") is not None:
        logger.debug("using standalone docker-compose")
        return ["docker-compose"]

    if _compose_plugin_available():
        logger.debug("using docker compose plugin")
        return ["docker", "compose"]

    raise PrerequisiteError(
        "Docker Compose is not installed. Please install Docker Compose first."
    )


def find_repo_root(start: Path) -> Optional[Path]:
    """Return the enclosing git work tree root, if any"""
    if shutil.which("git") is None:
        return None

    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            capture_output=True,
            text=True,
            cwd=start,
            timeout=5,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError):
        return None

    if result.returncode != 0:
        return None

    top = (result.stdout or "").strip()
    if not top:
        return None

    root = Path(top)
    if not root.is_dir():
        return None

    logger.debug("git work tree root: %s", root)
    return root
