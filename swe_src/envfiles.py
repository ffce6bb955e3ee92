#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Env file provisioning for the application directories.
"""

import shutil
from pathlib import Path

from .models import AppConfig, EnvFileStatus
from .output import print_error, print_status, print_success, print_warning


def setup_env_file(app_dir: Path, example: str, target: str) -> EnvFileStatus:
    """Copy ``example`` to ``target`` inside ``app_dir`` unless target exists.

    The copy is byte-for-byte and an existing target is never touched.
    """
    target_path = app_dir / target
    if target_path.exists():
        return EnvFileStatus.EXISTS

    example_path = app_dir / example
    if not example_path.is_file():
        return EnvFileStatus.MISSING_TEMPLATE

    shutil.copyfile(example_path, target_path)
    return EnvFileStatus.CREATED


def setup_env_files(
    project_root: Path, apps: list[AppConfig]
) -> dict[str, EnvFileStatus]:
    """Provision env files for every app and report each outcome"""
    print_status("Setting up environment files...")

    results: dict[str, EnvFileStatus] = {}
    for app in apps:
        status = setup_env_file(project_root / app.path, app.env_example, app.env_file)
        results[app.name] = status

        env_rel = f"{app.path}/{app.env_file}"
        if status is EnvFileStatus.CREATED:
            print_success(f"Created {env_rel} from example")
            print_warning(f"Please edit {env_rel} with your configuration")
        elif status is EnvFileStatus.EXISTS:
            print_status(f"{env_rel} already exists")
        else:
            print_error(f"{app.path}/{app.env_example} not found")

    return results
