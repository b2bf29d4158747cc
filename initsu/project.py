"""initsu project creation flow and CLI entry point.

Sequence for a Next.js project:

1. Ask for preferences (or take the preset).
2. Run ``create-next-app``.
3. Apply tooling configuration (Prettier, Husky, shadcn/ui).
4. Apply the starter template.

A plain TypeScript project skips the template step.

Usage::

    python -m initsu my-app
    python -m initsu my-app --template default --skip-install
    python -m initsu --list-templates
"""

from __future__ import annotations

import asyncio
import sys

from pydantic import BaseModel, Field
from rich.table import Table

from initsu import __version__, prompts
from initsu.config import Config
from initsu.scaffolder.applier import TemplateApplier
from initsu.scaffolder.configuration import ConfigurationManager, ConfigurationOptions
from initsu.scaffolder.fetcher import ContentFetcher
from initsu.scaffolder.nextjs import ScaffoldFlags, initialize_nextjs_app
from initsu.scaffolder.typescript import initialize_typescript_app
from initsu.utils import console, print_banner, print_error, print_next_steps, print_success


class InitOptions(BaseModel):
    """Options given on the command line."""

    template: str = Field(default="default")
    skip_install: bool = Field(default=False)
    git: bool = Field(default=True)
    empty: bool = Field(default=False)
    api: bool = Field(default=False)

    def scaffold_flags(self) -> ScaffoldFlags:
        return ScaffoldFlags(
            skip_install=self.skip_install, git=self.git, empty=self.empty, api=self.api
        )


def dev_command(package_manager: str) -> str:
    """How to start the Next.js dev server with *package_manager*."""
    return "npm run dev" if package_manager == "npm" else f"{package_manager} dev"


def run_command_hint(package_manager: str) -> str:
    """How to run a freshly created TypeScript project."""
    if package_manager == "npm":
        return "npm run start"
    if package_manager == "bun":
        return "bun run index.ts"
    return f"{package_manager} start"


def make_applier(config: Config) -> TemplateApplier:
    fetcher = ContentFetcher(
        host=config.template_host.host,
        timeout=config.template_host.timeout,
    )
    return TemplateApplier(fetcher=fetcher)


# ---------------------------------------------------------------------------
# Project flows
# ---------------------------------------------------------------------------


async def create_nextjs_project(
    project_name: str,
    options: InitOptions,
    config: Config,
    use_preset: bool = False,
) -> None:
    nextjs_options = prompts.ask_nextjs_options(use_preset)
    console.print()

    if use_preset:
        config_options = ConfigurationOptions(prettier=True, husky=True, shadcn=True)
    else:
        config_options = prompts.ask_configuration_options()

    # Fail on an unknown template before anything is generated.
    applier = make_applier(config)
    applier.definition(options.template)

    await initialize_nextjs_app(
        project_name,
        nextjs_options,
        options.scaffold_flags(),
        cwd=config.cwd,
        timeout=config.scaffold_timeout,
    )

    project_path = config.project_path(project_name)
    manager = ConfigurationManager(
        project_path,
        package_manager=nextjs_options.package_manager,
        timeout=config.command_timeout,
    )
    await manager.apply_configurations(config_options)

    await applier.apply(options.template, project_path, use_src_dir=nextjs_options.src_dir)

    print_success(f"\nProject {project_name} has been successfully created and configured!\n")
    print_next_steps(project_name, dev_command(nextjs_options.package_manager))


async def create_typescript_project(
    project_name: str,
    options: InitOptions,
    config: Config,
) -> None:
    typescript_options = prompts.ask_typescript_options()
    console.print()
    config_options = prompts.ask_typescript_configuration_options()

    project_path = await initialize_typescript_app(
        config.project_path(project_name),
        typescript_options,
        timeout=config.command_timeout,
    )

    manager = ConfigurationManager(
        project_path,
        package_manager=typescript_options.package_manager,
        timeout=config.command_timeout,
    )
    await manager.apply_configurations(config_options)

    print_success(
        f"\nTypeScript project {project_name} has been successfully created and configured!\n"
    )
    print_next_steps(project_name, run_command_hint(typescript_options.package_manager))


async def init_command(
    project_name: str | None,
    options: InitOptions,
    config: Config | None = None,
) -> None:
    """Ask what to build and build it.  Errors propagate to the caller."""
    config = config or Config.from_env()
    print_banner()

    if not project_name:
        project_name = prompts.ask_project_name()
    else:
        error = prompts.validate_project_name(project_name)
        if error:
            raise ValueError(error)

    if prompts.ask_project_type() == "nextjs":
        use_preset = prompts.ask_use_preset()
        await create_nextjs_project(project_name, options, config, use_preset)
    else:
        await create_typescript_project(project_name, options, config)


def print_templates(applier: TemplateApplier) -> None:
    """Print the registered templates as a table."""
    table = Table(title="Available templates", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bold", no_wrap=True)
    table.add_column("Description")
    for template in applier.list_available():
        table.add_row(template.name, template.description)
    console.print(table)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``initsu`` / ``python -m initsu``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="initsu",
        description="A CLI tool to initialize and configure projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  initsu my-app\n"
            "  initsu my-app --template default --skip-install\n"
            "  initsu --list-templates\n"
        ),
    )
    parser.add_argument("project_name", nargs="?", help="Name of the project directory")
    parser.add_argument("-t", "--template", default="default", help="Template to use (default: default)")
    parser.add_argument("--skip-install", action="store_true", help="Skip package installation")
    parser.add_argument("--no-git", dest="git", action="store_false", help="Skip git initialization")
    parser.add_argument("--list-templates", action="store_true", help="List available templates and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(argv)

    try:
        config = Config.from_env()
    except ValueError as exc:
        print_error(f"Invalid configuration: {exc}")
        sys.exit(1)

    if args.list_templates:
        print_templates(make_applier(config))
        return

    options = InitOptions(template=args.template, skip_install=args.skip_install, git=args.git)
    try:
        asyncio.run(init_command(args.project_name, options, config))
    except KeyboardInterrupt:
        print_error("\nAborted.")
        sys.exit(130)
    except Exception as exc:  # noqa: BLE001
        print_error(f"\nError creating project: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
