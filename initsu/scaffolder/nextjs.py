"""Next.js project creation through ``npx create-next-app``.

Every interactive question ``create-next-app`` could ask is answered up
front with an explicit flag so the generator never blocks on a prompt.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from initsu.utils import CommandError, create_status, print_error, print_success, run_command

PackageManager = Literal["npm", "pnpm", "yarn", "bun"]
Linter = Literal["eslint", "biome", "none"]

DEFAULT_IMPORT_ALIAS = "@/*"

LINTER_FLAGS: dict[str, str] = {
    "eslint": "--eslint",
    "biome": "--biome",
    "none": "--no-linter",
}


class NextjsOptions(BaseModel):
    """Answers for ``create-next-app``."""

    version: str = Field(default="latest", description='"latest" or an explicit version')
    typescript: bool = Field(default=True)
    linter: Linter = Field(default="eslint")
    tailwind: bool = Field(default=True)
    src_dir: bool = Field(default=True)
    app_router: bool = Field(default=True)
    turbopack: bool = Field(default=False)
    react_compiler: bool = Field(default=False)
    package_manager: PackageManager = Field(default="npm")
    import_alias: bool = Field(default=False, description="Whether a custom alias was requested")
    custom_alias: str | None = Field(default=None)


class ScaffoldFlags(BaseModel):
    """Command-line switches that are passed straight through to the generator."""

    skip_install: bool = Field(default=False)
    git: bool = Field(default=True)
    empty: bool = Field(default=False)
    api: bool = Field(default=False)


def preset_nextjs_options(package_manager: PackageManager = "yarn") -> NextjsOptions:
    """The "usual" setup: only the package manager is asked for."""
    return NextjsOptions(
        version="latest",
        package_manager=package_manager,
        typescript=True,
        linter="eslint",
        tailwind=True,
        src_dir=False,
        app_router=True,
        turbopack=False,
        react_compiler=False,
        import_alias=False,
    )


def _toggle(enabled: bool, name: str) -> str:
    return f"--{name}" if enabled else f"--no-{name}"


def build_create_next_app_args(
    project_name: str,
    options: NextjsOptions,
    flags: ScaffoldFlags | None = None,
) -> list[str]:
    """Arguments for ``npx`` (the ``npx`` executable itself excluded)."""
    flags = flags or ScaffoldFlags()
    args = ["-y", f"create-next-app@{options.version}", project_name]

    args.append("--ts" if options.typescript else "--js")
    args.append(LINTER_FLAGS[options.linter])
    args.append(_toggle(options.tailwind, "tailwind"))
    args.append(_toggle(options.src_dir, "src-dir"))
    args.append(_toggle(options.app_router, "app"))
    args.extend(["--import-alias", options.custom_alias or DEFAULT_IMPORT_ALIAS])
    args.append(f"--use-{options.package_manager}")

    if flags.skip_install:
        args.append("--skip-install")
    if not flags.git:
        args.append("--disable-git")
    args.append(_toggle(options.turbopack, "turbopack"))
    args.append(_toggle(options.react_compiler, "react-compiler"))
    if flags.empty:
        args.append("--empty")
    if flags.api:
        args.append("--api")

    args.append("--yes")
    return args


async def initialize_nextjs_app(
    project_name: str,
    options: NextjsOptions,
    flags: ScaffoldFlags | None = None,
    cwd: str | Path = ".",
    timeout: int = 300,
) -> None:
    """Run ``create-next-app`` in *cwd*, inheriting the terminal.

    Raises:
        CommandError: If the generator exits non-zero or times out.
    """
    cmd = ["npx", *build_create_next_app_args(project_name, options, flags)]
    with create_status("Creating Next.js application..."):
        returncode, _, stderr = await run_command(
            cmd, cwd=cwd, timeout=timeout, capture=False
        )
    if returncode != 0:
        print_error("Failed to create Next.js application")
        raise CommandError(cmd, returncode, stderr)
    print_success("Next.js application created successfully")
