"""Tests for post-scaffold tooling configuration.

Covers:
- install_args per package manager (and unsupported managers)
- Prettier, ESLint, Husky and shadcn setup (commands issued, files written)
- package.json script merging and .eslintrc.json extension
- apply_configurations ordering and failure propagation
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, call, patch

import pytest

from initsu.scaffolder.configuration import (
    ESLINT_PACKAGES,
    HUSKY_PACKAGES,
    LINT_STAGED_CONFIG,
    PRETTIER_CONFIG,
    PRETTIER_PACKAGES,
    ConfigurationError,
    ConfigurationManager,
    ConfigurationOptions,
)
from initsu.utils import CommandError


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


def _read_json(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def _commands(mock_run) -> list[list[str]]:
    return [c.args[0] for c in mock_run.await_args_list]


# ---------------------------------------------------------------------------
# install_args
# ---------------------------------------------------------------------------


class TestInstallArgs:
    @pytest.mark.parametrize(
        "manager,expected",
        [
            ("npm", ["npm", "install", "--save-dev", "a", "b"]),
            ("yarn", ["yarn", "add", "--dev", "a", "b"]),
            ("pnpm", ["pnpm", "add", "--save-dev", "a", "b"]),
            ("bun", ["bun", "add", "--dev", "a", "b"]),
        ],
    )
    def test_dev_install(self, tmp_path, manager, expected):
        manager_obj = ConfigurationManager(tmp_path, package_manager=manager)
        assert manager_obj.install_args(["a", "b"], dev=True) == expected

    def test_runtime_install_has_no_dev_flag(self, tmp_path):
        manager = ConfigurationManager(tmp_path, package_manager="npm")
        assert manager.install_args(["a"]) == ["npm", "install", "a"]

    def test_unsupported_manager(self, tmp_path):
        manager = ConfigurationManager(tmp_path, package_manager="pip")
        with pytest.raises(ConfigurationError, match="Unsupported package manager: pip"):
            manager.install_args(["a"])


# ---------------------------------------------------------------------------
# Individual steps
# ---------------------------------------------------------------------------


class TestSetupPrettier:
    @pytest.mark.asyncio
    async def test_writes_config_and_scripts(self, package_json_project, mock_run_command):
        manager = ConfigurationManager(package_json_project, package_manager="yarn")
        await manager.setup_prettier()

        assert _commands(mock_run_command) == [["yarn", "add", "--dev", *PRETTIER_PACKAGES]]
        assert _read_json(package_json_project / ".prettierrc") == PRETTIER_CONFIG

        ignore = (package_json_project / ".prettierignore").read_text(encoding="utf-8")
        assert ignore.splitlines()[0] == "node_modules"
        assert ".next" in ignore.splitlines()

        scripts = _read_json(package_json_project / "package.json")["scripts"]
        assert scripts["format"] == "prettier --write ."
        assert scripts["format:check"] == "prettier --check ."
        assert scripts["dev"] == "next dev"

    @pytest.mark.asyncio
    async def test_extends_legacy_eslintrc(self, package_json_project, mock_run_command):
        eslintrc = package_json_project / ".eslintrc.json"
        eslintrc.write_text(json.dumps({"extends": "next/core-web-vitals"}), encoding="utf-8")

        await ConfigurationManager(package_json_project).setup_prettier()

        assert _read_json(eslintrc)["extends"] == ["next/core-web-vitals", "prettier"]

    @pytest.mark.asyncio
    async def test_install_failure_propagates(self, package_json_project, mock_run_command):
        mock_run_command.return_value = (1, "", "network down")
        with pytest.raises(CommandError) as exc_info:
            await ConfigurationManager(package_json_project).setup_prettier()
        assert exc_info.value.returncode == 1
        assert not (package_json_project / ".prettierrc").exists()


class TestUpdateEslintConfig:
    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_project_dir):
        assert await ConfigurationManager(tmp_project_dir).update_eslint_config() is False
        assert not (tmp_project_dir / ".eslintrc.json").exists()

    @pytest.mark.asyncio
    async def test_no_duplicate(self, tmp_project_dir):
        eslintrc = tmp_project_dir / ".eslintrc.json"
        eslintrc.write_text(json.dumps({"extends": ["next", "prettier"]}), encoding="utf-8")
        assert await ConfigurationManager(tmp_project_dir).update_eslint_config() is True
        assert _read_json(eslintrc)["extends"] == ["next", "prettier"]

    @pytest.mark.asyncio
    async def test_missing_extends(self, tmp_project_dir):
        eslintrc = tmp_project_dir / ".eslintrc.json"
        eslintrc.write_text(json.dumps({"rules": {}}), encoding="utf-8")
        await ConfigurationManager(tmp_project_dir).update_eslint_config()
        data = _read_json(eslintrc)
        assert data["extends"] == ["prettier"]
        assert data["rules"] == {}


class TestSetupEslint:
    @pytest.mark.asyncio
    async def test_writes_flat_config(self, package_json_project, mock_run_command):
        manager = ConfigurationManager(package_json_project, package_manager="bun")
        await manager.setup_eslint()

        assert _commands(mock_run_command) == [["bun", "add", "--dev", *ESLINT_PACKAGES]]
        config = (package_json_project / "eslint.config.js").read_text(encoding="utf-8")
        assert config.startswith("import js from '@eslint/js';")
        assert "'node_modules/**'," in config
        assert "'*.d.ts'," in config

        scripts = _read_json(package_json_project / "package.json")["scripts"]
        assert scripts["lint"] == "eslint . && prettier --check ."
        assert scripts["lint:fix"] == "eslint . --fix && prettier --write ."


class TestSetupHusky:
    @pytest.mark.asyncio
    async def test_hook_and_lint_staged(self, package_json_project, mock_run_command):
        await ConfigurationManager(package_json_project, package_manager="pnpm").setup_husky()

        assert _commands(mock_run_command) == [
            ["pnpm", "add", "--save-dev", *HUSKY_PACKAGES],
            ["npx", "husky", "init"],
        ]
        hook = (package_json_project / ".husky" / "pre-commit").read_text(encoding="utf-8")
        assert hook.startswith("#!/usr/bin/env sh")
        assert hook.rstrip().endswith("npx lint-staged")

        package_json = _read_json(package_json_project / "package.json")
        assert package_json["lint-staged"] == LINT_STAGED_CONFIG
        assert package_json["name"] == "test-project"

    @pytest.mark.asyncio
    async def test_commands_run_in_project(self, package_json_project, mock_run_command):
        await ConfigurationManager(package_json_project, timeout=42).setup_husky()
        for awaited in mock_run_command.await_args_list:
            assert awaited.kwargs["cwd"] == package_json_project
            assert awaited.kwargs["timeout"] == 42


class TestSetupShadcn:
    @pytest.mark.asyncio
    async def test_runs_init(self, tmp_project_dir, mock_run_command):
        await ConfigurationManager(tmp_project_dir).setup_shadcn()
        assert _commands(mock_run_command) == [["npx", "shadcn@latest", "init", "--yes"]]


# ---------------------------------------------------------------------------
# package.json merging / orchestration
# ---------------------------------------------------------------------------


class TestUpdatePackageJsonScripts:
    @pytest.mark.asyncio
    async def test_new_values_win(self, package_json_project):
        manager = ConfigurationManager(package_json_project)
        await manager.update_package_json_scripts({"lint": "eslint .", "test": "vitest"})
        package_json = _read_json(package_json_project / "package.json")
        assert package_json["scripts"] == {
            "dev": "next dev",
            "build": "next build",
            "lint": "eslint .",
            "test": "vitest",
        }
        assert package_json["dependencies"] == {"next": "15.0.0", "react": "19.0.0"}

    @pytest.mark.asyncio
    async def test_creates_scripts_section(self, tmp_project_dir):
        (tmp_project_dir / "package.json").write_text('{"name": "x"}', encoding="utf-8")
        await ConfigurationManager(tmp_project_dir).update_package_json_scripts({"a": "b"})
        assert _read_json(tmp_project_dir / "package.json")["scripts"] == {"a": "b"}

    @pytest.mark.asyncio
    async def test_written_with_two_space_indent(self, package_json_project):
        await ConfigurationManager(package_json_project).update_package_json_scripts({"a": "b"})
        raw = (package_json_project / "package.json").read_text(encoding="utf-8")
        assert raw.startswith('{\n  "name"')
        assert raw.endswith("}\n")


class TestApplyConfigurations:
    @pytest.mark.asyncio
    async def test_order(self, tmp_project_dir):
        manager = ConfigurationManager(tmp_project_dir)
        parent = AsyncMock()
        with patch.object(manager, "setup_prettier", parent.prettier), \
             patch.object(manager, "setup_eslint", parent.eslint), \
             patch.object(manager, "setup_husky", parent.husky), \
             patch.object(manager, "setup_shadcn", parent.shadcn):
            await manager.apply_configurations(
                ConfigurationOptions(prettier=True, eslint=True, husky=True, shadcn=True)
            )
        assert parent.mock_calls == [call.prettier(), call.eslint(), call.husky(), call.shadcn()]

    @pytest.mark.asyncio
    async def test_nothing_enabled(self, tmp_project_dir, mock_run_command):
        await ConfigurationManager(tmp_project_dir).apply_configurations(ConfigurationOptions())
        mock_run_command.assert_not_awaited()
        assert list(tmp_project_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_failure_stops_later_steps(self, tmp_project_dir):
        manager = ConfigurationManager(tmp_project_dir)
        with patch.object(manager, "setup_prettier", AsyncMock(side_effect=CommandError("x", 1))), \
             patch.object(manager, "setup_husky", AsyncMock()) as husky:
            with pytest.raises(CommandError):
                await manager.apply_configurations(ConfigurationOptions(prettier=True, husky=True))
        husky.assert_not_awaited()
