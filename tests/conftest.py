# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""Shared fixtures: a temporary project tree and a fake subprocess.run."""

import shutil
import subprocess
from pathlib import Path
from typing import Optional, Union

import pytest

PROD_COMPOSE = """\
services:
  web:
    build: ./apps/web
    ports:
      - "3000:3000"
  agent:
    build: ./apps/open-swe
    ports:
      - "2024:2024"
"""

DEV_COMPOSE = """\
services:
  web:
    build: ./apps/web
  agent:
    build: ./apps/open-swe
"""


class FakeRun:
    """Records every command and answers with canned results"""

    def __init__(self):
        self.calls: list[list[str]] = []
        self.kwargs: list[dict] = []
        self.returncodes: dict[tuple[str, ...], int] = {}
        self.outputs: dict[tuple[str, ...], str] = {}
        self.raises: dict[tuple[str, ...], BaseException] = {}

    def set(
        self,
        cmd: list[str],
        returncode: int = 0,
        stdout: str = "",
        raises: Optional[BaseException] = None,
    ) -> None:
        key = tuple(cmd)
        self.returncodes[key] = returncode
        self.outputs[key] = stdout
        if raises is not None:
            self.raises[key] = raises

    def __call__(self, cmd, *args, **kwargs):
        cmd = list(cmd)
        self.calls.append(cmd)
        self.kwargs.append(kwargs)
        key = tuple(cmd)
        if key in self.raises:
            raise self.raises[key]
        return subprocess.CompletedProcess(
            cmd,
            self.returncodes.get(key, 0),
            stdout=self.outputs.get(key, ""),
            stderr="",
        )

    def commands_starting_with(self, *prefix: str) -> list[list[str]]:
        return [c for c in self.calls if c[: len(prefix)] == list(prefix)]


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> FakeRun:
    runner = FakeRun()
    monkeypatch.setattr(subprocess, "run", runner)
    return runner


def make_which(*available: str):
    def which(name: str, *args, **kwargs) -> Union[str, None]:
        return f"/usr/bin/{name}" if name in available else None

    return which


@pytest.fixture
def docker_installed(monkeypatch: pytest.MonkeyPatch, fake_run: FakeRun) -> FakeRun:
    """docker on PATH with the compose plugin, no standalone binary, no git"""
    monkeypatch.setattr(shutil, "which", make_which("docker"))
    return fake_run


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "open-swe"
    root.mkdir()
    (root / "docker-compose.yml").write_text(PROD_COMPOSE, encoding="utf-8")
    (root / "docker-compose.dev.yml").write_text(DEV_COMPOSE, encoding="utf-8")
    for app, body in (
        ("apps/web", "NEXT_PUBLIC_API_URL=http://localhost:2024\n"),
        ("apps/open-swe", "ANTHROPIC_API_KEY=\n"),
    ):
        app_dir = root / app
        app_dir.mkdir(parents=True)
        (app_dir / ".env.example").write_text(body, encoding="utf-8")
    return root.resolve()
