"""Interactive questions asked before a project is created.

All prompting goes through ``rich.prompt`` so answers are validated against
their allowed choices before anything is generated.
"""

from __future__ import annotations

import re

from rich.prompt import Confirm, Prompt

from initsu.scaffolder.configuration import ConfigurationOptions
from initsu.scaffolder.nextjs import DEFAULT_IMPORT_ALIAS, NextjsOptions, preset_nextjs_options
from initsu.scaffolder.typescript import TypescriptOptions
from initsu.utils import console, print_error

_PROJECT_NAME_RE = re.compile(r"^[a-z0-9_-]+$", re.IGNORECASE)
_VERSION_RE = re.compile(r"^\d+(\.\d+)?(\.\d+)?$")

PACKAGE_MANAGERS = ["npm", "pnpm", "yarn", "bun"]
NEXTJS_VERSIONS = ["latest", "15", "14", "13", "custom"]
LINTERS = ["eslint", "biome", "none"]
PROJECT_TYPES = ["nextjs", "typescript"]


def validate_project_name(name: str) -> str | None:
    """Return an error message for an invalid project name, else ``None``."""
    if not name.strip():
        return "Project name is required"
    if not _PROJECT_NAME_RE.match(name):
        return "Project name can only contain letters, numbers, hyphens, and underscores"
    return None


def validate_version(version: str) -> str | None:
    """Return an error message for an invalid Next.js version, else ``None``."""
    if not version.strip():
        return "Version is required"
    if not _VERSION_RE.match(version.strip()):
        return "Please enter a valid version format (e.g., 14.2.3 or 14.2 or 14)"
    return None


def _ask_validated(question: str, validator, default: str | None = None) -> str:
    while True:
        if default is None:
            answer = Prompt.ask(question, console=console)
        else:
            answer = Prompt.ask(question, default=default, console=console)
        error = validator(answer or "")
        if error is None:
            return answer.strip()
        print_error(error)


def ask_project_name() -> str:
    return _ask_validated("What is your project name?", validate_project_name)


def ask_project_type() -> str:
    return Prompt.ask(
        "What type of project would you like to create?",
        choices=PROJECT_TYPES,
        default="nextjs",
        console=console,
    )


def ask_use_preset() -> bool:
    return Confirm.ask("Should I cook up the usual?", default=True, console=console)


def ask_package_manager(default: str = "npm", choices: list[str] | None = None) -> str:
    return Prompt.ask(
        "Which package manager would you like to use?",
        choices=choices or PACKAGE_MANAGERS,
        default=default,
        console=console,
    )


def ask_nextjs_options(use_preset: bool = False) -> NextjsOptions:
    """Collect ``create-next-app`` answers.

    With *use_preset* only the package manager is asked for and everything
    else comes from ``preset_nextjs_options``.
    """
    if use_preset:
        return preset_nextjs_options(ask_package_manager(default="yarn"))

    version = Prompt.ask(
        "Which Next.js version would you like to use?",
        choices=NEXTJS_VERSIONS,
        default="latest",
        console=console,
    )
    package_manager = ask_package_manager(default="npm")
    typescript = Confirm.ask("Would you like to use TypeScript?", default=True, console=console)
    linter = Prompt.ask(
        "Which linter would you like to use?",
        choices=LINTERS,
        default="eslint",
        console=console,
    )
    tailwind = Confirm.ask("Would you like to use Tailwind CSS?", default=True, console=console)
    src_dir = Confirm.ask("Would you like to use `src/` directory?", default=True, console=console)
    app_router = Confirm.ask(
        "Would you like to use App Router? (recommended)", default=True, console=console
    )
    turbopack = Confirm.ask(
        "Would you like to enable Turbopack for development?", default=False, console=console
    )
    react_compiler = Confirm.ask(
        "Would you like to enable the React Compiler?", default=False, console=console
    )
    import_alias = Confirm.ask(
        f"Would you like to customize the default import alias ({DEFAULT_IMPORT_ALIAS})?",
        default=False,
        console=console,
    )

    if version == "custom":
        version = _ask_validated("Enter the Next.js version (e.g., 14.2.3):", validate_version)

    custom_alias = None
    if import_alias:
        custom_alias = Prompt.ask(
            "What import alias would you like configured?",
            default=DEFAULT_IMPORT_ALIAS,
            console=console,
        )

    return NextjsOptions(
        version=version,
        package_manager=package_manager,
        typescript=typescript,
        linter=linter,
        tailwind=tailwind,
        src_dir=src_dir,
        app_router=app_router,
        turbopack=turbopack,
        react_compiler=react_compiler,
        import_alias=import_alias,
        custom_alias=custom_alias,
    )


def ask_configuration_options() -> ConfigurationOptions:
    return ConfigurationOptions(
        prettier=Confirm.ask("Would you like to configure Prettier?", default=True, console=console),
        husky=Confirm.ask("Would you like to set up Husky for git hooks?", default=True, console=console),
        shadcn=Confirm.ask("Would you like to install shadcn/ui?", default=True, console=console),
    )


def ask_typescript_options() -> TypescriptOptions:
    package_manager = ask_package_manager(
        default="bun", choices=["bun", "npm", "pnpm", "yarn"]
    )
    return TypescriptOptions(package_manager=package_manager)


def ask_typescript_configuration_options() -> ConfigurationOptions:
    return ConfigurationOptions(
        prettier=Confirm.ask("Would you like to configure Prettier?", default=True, console=console),
        eslint=Confirm.ask("Would you like to configure ESLint?", default=True, console=console),
        husky=Confirm.ask("Would you like to set up Husky for git hooks?", default=True, console=console),
    )
