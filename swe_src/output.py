#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Console output shared by all workspace commands.
"""

from rich.console import Console
from rich.markup import escape

# Rich Console for beautiful output
console = Console(highlight=False)

BANNER = "🐳 Open SWE Docker Setup"


def _emit(style: str, tag: str, message: str) -> None:
    console.print(
        f"[{style}]{escape(f'[{tag}]')}[/{style}] {escape(message)}",
        soft_wrap=True,
    )


def print_status(message: str) -> None:
    _emit("blue", "INFO", message)


def print_success(message: str) -> None:
    _emit("green", "SUCCESS", message)


def print_warning(message: str) -> None:
    _emit("yellow", "WARNING", message)


def print_error(message: str) -> None:
    _emit("red", "ERROR", message)


def print_banner() -> None:
    """Print the tool banner followed by an underline"""
    console.print(BANNER, soft_wrap=True)
    console.print("=" * 24)


def print_command(cmd: list[str]) -> None:
    """Echo an external command before it runs"""
    console.print(f"[dim]Running: {escape(' '.join(cmd))}[/dim]", soft_wrap=True)
