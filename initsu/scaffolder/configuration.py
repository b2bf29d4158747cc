"""Post-scaffold tooling setup: Prettier, ESLint, Husky and shadcn/ui.

Each step installs its dev dependencies with the project's package manager,
writes its config files and merges what it needs into ``package.json``.
Steps run in a fixed order (prettier, eslint, husky, shadcn) and any failure
propagates to the caller.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from initsu.utils import create_status, load_json, print_success, run_checked, save_json

from .templates import TemplateRenderer


class ConfigurationError(Exception):
    """Raised for configuration requests initsu cannot honour."""


class ConfigurationOptions(BaseModel):
    """Which tooling steps to run after the project has been created."""

    prettier: bool = Field(default=False)
    husky: bool = Field(default=False)
    shadcn: bool = Field(default=False)
    eslint: bool = Field(default=False)


# package manager -> (install verb, dev flag)
INSTALL_COMMANDS: dict[str, tuple[str, str]] = {
    "npm": ("install", "--save-dev"),
    "yarn": ("add", "--dev"),
    "pnpm": ("add", "--save-dev"),
    "bun": ("add", "--dev"),
}

PRETTIER_PACKAGES = ["prettier", "eslint-config-prettier", "eslint-plugin-prettier"]

PRETTIER_CONFIG: dict[str, Any] = {
    "semi": True,
    "trailingComma": "es5",
    "singleQuote": True,
    "printWidth": 80,
    "tabWidth": 2,
    "useTabs": False,
}

ESLINT_PACKAGES = [
    "eslint",
    "@typescript-eslint/parser",
    "@typescript-eslint/eslint-plugin",
    "@eslint/js",
    "typescript-eslint",
]

ESLINT_IGNORES = ["node_modules/**", "dist/**", "build/**", "*.js", "*.d.ts"]

HUSKY_PACKAGES = ["husky", "lint-staged"]

LINT_STAGED_CONFIG: dict[str, list[str]] = {
    "*.{js,jsx,ts,tsx}": ["eslint --cache --fix", "prettier --write"],
    "*.{json,css,md}": ["prettier --write"],
}


class ConfigurationManager:
    """Applies tooling configuration to an already-created project.

    Args:
        project_path: Root of the project (must contain ``package.json``).
        package_manager: One of ``npm``, ``yarn``, ``pnpm``, ``bun``.
        timeout: Seconds allowed for each external command.
        renderer: Renderer for the bundled config-file templates.
    """

    def __init__(
        self,
        project_path: str | Path,
        package_manager: str = "npm",
        timeout: int = 600,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.project_path = Path(project_path)
        self.package_manager = package_manager
        self.timeout = timeout
        self.renderer = renderer or TemplateRenderer()

    @property
    def package_json_path(self) -> Path:
        return self.project_path / "package.json"

    # -- Public API --------------------------------------------------------

    async def apply_configurations(self, options: ConfigurationOptions) -> None:
        """Run every enabled step in order."""
        if options.prettier:
            await self.setup_prettier()
        if options.eslint:
            await self.setup_eslint()
        if options.husky:
            await self.setup_husky()
        if options.shadcn:
            await self.setup_shadcn()

    async def setup_prettier(self) -> None:
        with create_status("Setting up Prettier..."):
            await self.install_packages(PRETTIER_PACKAGES, dev=True)
            await save_json(PRETTIER_CONFIG, self.project_path / ".prettierrc")
            await self.renderer.render_to_file(
                "prettierignore.j2",
                self.project_path / ".prettierignore",
                {"extra_ignores": []},
            )
            await self.update_package_json_scripts({
                "format": "prettier --write .",
                "format:check": "prettier --check .",
            })
            await self.update_eslint_config()
        print_success("Prettier configured successfully")

    async def setup_eslint(self) -> None:
        with create_status("Setting up ESLint..."):
            await self.install_packages(ESLINT_PACKAGES, dev=True)
            await self.renderer.render_to_file(
                "eslint.config.js.j2",
                self.project_path / "eslint.config.js",
                {"ignores": ESLINT_IGNORES},
            )
            await self.update_package_json_scripts({
                "lint": "eslint . && prettier --check .",
                "lint:fix": "eslint . --fix && prettier --write .",
            })
        print_success("ESLint configured successfully")

    async def setup_husky(self) -> None:
        with create_status("Setting up Husky..."):
            await self.install_packages(HUSKY_PACKAGES, dev=True)
            await self.run(["npx", "husky", "init"])
            await self.renderer.render_to_file(
                "husky/pre-commit.j2",
                self.project_path / ".husky" / "pre-commit",
                {"runner": "npx"},
            )
            package_json = load_json(self.package_json_path)
            package_json["lint-staged"] = LINT_STAGED_CONFIG
            await save_json(package_json, self.package_json_path)
        print_success("Husky configured successfully")

    async def setup_shadcn(self) -> None:
        with create_status("Setting up shadcn/ui..."):
            await self.run(["npx", "shadcn@latest", "init", "--yes"])
        print_success("shadcn/ui configured successfully")

    # -- package.json / eslintrc merging -----------------------------------

    async def update_package_json_scripts(self, scripts: dict[str, str]) -> None:
        """Merge *scripts* into ``package.json``; new values win."""
        package_json = load_json(self.package_json_path)
        package_json["scripts"] = {**package_json.get("scripts", {}), **scripts}
        await save_json(package_json, self.package_json_path)

    async def update_eslint_config(self) -> bool:
        """Add ``prettier`` to a legacy ``.eslintrc.json`` ``extends`` list.

        Returns:
            ``True`` if the file existed (whether or not it changed).
        """
        eslintrc = self.project_path / ".eslintrc.json"
        if not eslintrc.exists():
            return False

        config = load_json(eslintrc)
        extends = config.get("extends") or []
        if isinstance(extends, str):
            extends = [extends]
        if "prettier" not in extends:
            extends.append("prettier")
        config["extends"] = extends
        await save_json(config, eslintrc)
        return True

    # -- Command helpers ---------------------------------------------------

    def install_args(self, packages: list[str], dev: bool = False) -> list[str]:
        """Build the package manager invocation that adds *packages*.

        Raises:
            ConfigurationError: For an unsupported package manager.
        """
        try:
            verb, dev_flag = INSTALL_COMMANDS[self.package_manager]
        except KeyError:
            raise ConfigurationError(
                f"Unsupported package manager: {self.package_manager}"
            ) from None
        args = [self.package_manager, verb]
        if dev:
            args.append(dev_flag)
        return args + list(packages)

    async def install_packages(self, packages: list[str], dev: bool = False) -> None:
        await self.run(self.install_args(packages, dev=dev))

    async def run(self, cmd: list[str]) -> None:
        await run_checked(cmd, cwd=self.project_path, timeout=self.timeout)
