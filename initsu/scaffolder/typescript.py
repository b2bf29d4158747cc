"""Plain TypeScript project creation (``bun init`` plus a tsconfig)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

from initsu.utils import (
    create_status,
    ensure_dir,
    load_json,
    print_success,
    run_checked,
    save_json,
)

from .templates import TemplateRenderer


class TypescriptOptions(BaseModel):
    package_manager: Literal["bun", "npm", "pnpm", "yarn"] = Field(default="bun")


DEV_DEPENDENCIES: dict[str, str] = {
    "typescript": "^5.0.0",
    "@types/node": "^20.0.0",
}

SCRIPTS: dict[str, str] = {
    "build": "tsc",
    "dev": "tsc --watch",
    "start": "node dist/index.js",
}

TSCONFIG: dict[str, Any] = {
    "compilerOptions": {
        "target": "ES2022",
        "module": "commonjs",
        "lib": ["ES2022"],
        "outDir": "./dist",
        "rootDir": "./src",
        "strict": True,
        "esModuleInterop": True,
        "skipLibCheck": True,
        "forceConsistentCasingInFileNames": True,
        "declaration": True,
        "declarationMap": True,
        "sourceMap": True,
    },
    "include": ["src/**/*"],
    "exclude": ["node_modules", "dist", "**/*.test.ts", "**/*.spec.ts"],
}


def merge_package_json(package_json: dict[str, Any]) -> dict[str, Any]:
    """Add the TypeScript dev dependencies and build scripts, keeping the rest."""
    merged = dict(package_json)
    merged["devDependencies"] = {**package_json.get("devDependencies", {}), **DEV_DEPENDENCIES}
    merged["scripts"] = {**package_json.get("scripts", {}), **SCRIPTS}
    return merged


async def initialize_typescript_app(
    project_path: str | Path,
    options: TypescriptOptions,
    timeout: int = 600,
    renderer: TemplateRenderer | None = None,
) -> Path:
    """Create a TypeScript project at *project_path*.

    ``bun init`` always bootstraps the project; any other package manager
    is then used to install dependencies.

    Returns:
        The resolved project path.
    """
    renderer = renderer or TemplateRenderer()
    with create_status("Creating TypeScript project..."):
        root = ensure_dir(project_path)
        await run_checked(["bun", "init", "-y"], cwd=root, timeout=timeout, capture=False)

        package_json_path = root / "package.json"
        await save_json(merge_package_json(load_json(package_json_path)), package_json_path)
        await save_json(TSCONFIG, root / "tsconfig.json")
        await renderer.render_to_file(
            "typescript/index.ts.j2",
            root / "src" / "index.ts",
            {"project_name": root.name},
        )

        if options.package_manager != "bun":
            await run_checked(
                [options.package_manager, "install"], cwd=root, timeout=timeout, capture=False
            )

    print_success("TypeScript project created successfully")
    return root
