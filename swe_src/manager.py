#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Workspace manager for Docker Compose operations.
"""

import json
import logging
import subprocess
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from .docker import find_repo_root
from .errors import (
    ComposeCommandError,
    ConfigError,
    OperationInterrupted,
    ProjectLayoutError,
    UnknownServiceError,
    WorkspaceError,
)
from .models import Config, Profile
from .output import print_command, print_status, print_success

logger = logging.getLogger(__name__)

DEFAULT_COMPOSE_FILE = "docker-compose.yml"


class ComposeLoader(yaml.SafeLoader):
    """SafeLoader that also accepts Compose merge tags such as !reset"""


def _construct_compose_tag(loader: ComposeLoader, tag_suffix: str, node: yaml.Node):
    if isinstance(node, yaml.MappingNode):
        return loader.construct_mapping(node, deep=True)
    if isinstance(node, yaml.SequenceNode):
        return loader.construct_sequence(node, deep=True)
    return loader.construct_scalar(node)


ComposeLoader.add_multi_constructor("!", _construct_compose_tag)


def resolve_project_root(explicit: Optional[Path], cwd: Path) -> Path:
    """Pick the project root.

    Priority: explicit option > enclosing git work tree > cwd
    """
    if explicit is not None:
        return explicit.resolve()

    repo_root = find_repo_root(cwd)
    if repo_root is not None:
        print_status(f"Changed to repository root: {repo_root}")
        return repo_root

    return cwd.resolve()


# ============================================================================
# Core Workspace Manager
# ============================================================================


class WorkspaceManager:
    """Manages workspace operations"""

    def __init__(
        self,
        project_root: Path,
        compose_cmd: list[str],
        config: Optional[Config] = None,
    ):
        self.project_root = project_root
        self.compose_cmd = list(compose_cmd)
        self.config_path = project_root / "swe.yaml"
        self.config = config if config is not None else self.load_config()

    def load_config(self) -> Config:
        """Load and validate configuration from swe.yaml (optional)"""
        data: dict[str, Any] = {}
        if self.config_path.exists():
            try:
                with open(self.config_path, encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"{self.config_path} is not valid YAML: {e}")
            if not isinstance(data, dict):
                raise ConfigError(f"{self.config_path} must contain a mapping")
            logger.debug("loaded settings from %s", self.config_path)
        else:
            logger.debug("%s not found, using defaults", self.config_path)

        try:
            return Config(_env_file=self.project_root / ".env", **data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}")

    def compose_file_path(self, profile: Profile) -> Path:
        return self.project_root / self.config.compose.file_for(profile)

    def _read_compose_file(self, profile: Profile) -> dict[str, Any]:
        path = self.compose_file_path(profile)
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.load(f, Loader=ComposeLoader)
        except yaml.YAMLError as e:
            raise ProjectLayoutError(f"{path.name} is not valid YAML: {e}")
        if not isinstance(data, dict):
            raise ProjectLayoutError(f"{path.name} must contain a YAML mapping")
        return data

    def verify_project(self) -> None:
        """Check compose files and app directories exist under the root"""
        prod_file = self.config.compose.file
        if not self.compose_file_path(Profile.PRODUCTION).is_file():
            raise ProjectLayoutError(
                f"{prod_file} not found in current directory: {self.project_root}",
                hints=(
                    "Please run this script from the Open SWE project root directory",
                ),
            )

        dev_file = self.config.compose.dev_file
        if not self.compose_file_path(Profile.DEVELOPMENT).is_file():
            raise ProjectLayoutError(
                f"{dev_file} not found in current directory: {self.project_root}",
                hints=("Please ensure all Docker configuration files are present",),
            )

        for app in self.config.apps:
            if not (self.project_root / app.path).is_dir():
                raise ProjectLayoutError(
                    f"{app.path} directory not found. "
                    "Are you in the correct project directory?"
                )

        print_success("Project structure verified")

    def compose_base(self, profile: Profile) -> list[str]:
        """Compose front end plus the -f flag the profile needs"""
        compose_file = self.config.compose.file_for(profile)
        if profile is Profile.PRODUCTION and compose_file == DEFAULT_COMPOSE_FILE:
            return list(self.compose_cmd)
        return self.compose_cmd + ["-f", compose_file]

    def _run(self, cmd: list[str], check: bool = True) -> int:
        print_command(cmd)
        try:
            result = subprocess.run(cmd, cwd=self.project_root)
        except KeyboardInterrupt:
            raise OperationInterrupted("Interrupted by user")

        if check and result.returncode != 0:
            raise ComposeCommandError(cmd, result.returncode)
        return result.returncode

    def _capture(self, cmd: list[str]) -> subprocess.CompletedProcess[str]:
        logger.debug("capturing: %s", " ".join(cmd))
        return subprocess.run(
            cmd,
            cwd=self.project_root,
            capture_output=True,
            text=True,
        )

    def compose(
        self,
        args: list[str],
        profile: Profile = Profile.PRODUCTION,
        check: bool = True,
    ) -> int:
        """Run a compose command in the project root"""
        return self._run(self.compose_base(profile) + args, check=check)

    def print_endpoints(self) -> None:
        for endpoint in self.config.endpoints:
            print_status(f"{endpoint.label}: {endpoint.url(self.config.host)}")

    def start(self, profile: Profile, no_cache: Optional[bool] = None) -> None:
        """Rebuild and start every service of a profile in the background"""
        if no_cache is None:
            no_cache = self.config.build.no_cache

        if profile is Profile.DEVELOPMENT:
            print_status("Building and starting development environment...")
        else:
            print_status("Building and starting production services...")

        self.compose(["down", "--remove-orphans"], profile)
        self.compose(["build", "--no-cache"] if no_cache else ["build"], profile)
        self.compose(["up", "-d"], profile)

        if profile is Profile.DEVELOPMENT:
            print_success("Development environment started")
        else:
            print_success("Production services started")
        self.print_endpoints()

        if profile is Profile.DEVELOPMENT:
            logs_cmd = " ".join(self.compose_base(profile) + ["logs", "-f"])
            print_status(f"Use '{logs_cmd}' to view logs")

    def stop(self) -> None:
        """Stop the services of both profiles"""
        print_status("Stopping all services...")
        for profile in (Profile.PRODUCTION, Profile.DEVELOPMENT):
            self.compose(["down", "--remove-orphans"], profile)
        print_success("All services stopped")

    def cleanup(self) -> None:
        """Remove containers and volumes of both profiles, then prune"""
        print_status("Cleaning up Docker resources...")
        for profile in (Profile.PRODUCTION, Profile.DEVELOPMENT):
            self.compose(["down", "--remove-orphans", "--volumes"], profile)
        self._run(["docker", "system", "prune", "-f"])
        print_success("Cleanup completed")

    def service_names(self, profile: Profile = Profile.PRODUCTION) -> list[str]:
        """Service names reported by ``compose ps --services``"""
        result = self._capture(self.compose_base(profile) + ["ps", "--services"])
        return [s.strip() for s in (result.stdout or "").splitlines() if s.strip()]

    def show_logs(
        self,
        service: Optional[str] = None,
        follow: bool = True,
        tail: Optional[int] = None,
        profile: Profile = Profile.PRODUCTION,
    ) -> None:
        """Stream compose logs, optionally for a single service"""
        args = ["logs"]
        if follow:
            args.append("-f")
        if tail is not None:
            args.extend(["--tail", str(tail)])

        if not service:
            print_status("Showing logs for all services...")
            self.compose(args, profile)
            return

        ps_result = self._capture(self.compose_base(profile) + ["ps", service])
        if ps_result.returncode != 0:
            available = self.service_names(profile)
            raise UnknownServiceError(
                f"Service '{service}' not found or not running",
                hints=("Available services:", *[f"  {s}" for s in available]),
            )

        print_status(f"Showing logs for {service}...")
        self.compose(args + [service], profile)

    def running_services(self, profile: Profile = Profile.PRODUCTION) -> set[str]:
        """Names of services whose container state is ``running``"""
        result = self._capture(
            self.compose_base(profile) + ["ps", "--format", "json"]
        )
        if result.returncode != 0:
            return set()

        stdout = (result.stdout or "").strip()
        if not stdout:
            return set()

        # Older compose releases print a JSON array, newer ones one object per line
        try:
            if stdout.startswith("["):
                entries = json.loads(stdout)
            else:
                entries = [
                    json.loads(line) for line in stdout.splitlines() if line.strip()
                ]
        except json.JSONDecodeError as e:
            raise WorkspaceError(
                f"Unexpected output from '{' '.join(result.args)}': {e}"
            )
        if not isinstance(entries, list):
            entries = [entries]

        running = set[str]()
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            if entry.get("State") == "running":
                running.add(entry.get("Service", ""))
        running.discard("")
        return running

    def declared_services(self, profile: Profile = Profile.PRODUCTION) -> list[str]:
        """Service names declared in the profile's compose file"""
        services = self._read_compose_file(profile).get("services") or {}
        if not isinstance(services, dict):
            return []
        return list(services)

    def status_rows(
        self, profile: Profile = Profile.PRODUCTION
    ) -> list[tuple[str, bool, Optional[str]]]:
        """(service, running, url) for every declared service"""
        running = self.running_services(profile)
        urls = {
            endpoint.service: endpoint.url(self.config.host)
            for endpoint in self.config.endpoints
        }
        return [
            (name, name in running, urls.get(name))
            for name in self.declared_services(profile)
        ]

