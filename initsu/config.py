"""initsu configuration.

Typed settings for project creation. All settings use Pydantic v2 models so
they are validated at construction time and can be overridden from
environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class TemplateHostConfig(BaseModel):
    """Where remote template files are served from."""

    host: str = Field(default="raw.githubusercontent.com")
    timeout: float = Field(default=10.0, gt=0, description="Per-file fetch timeout in seconds")


class Config(BaseModel):
    """Global initsu configuration.

    Created once by the CLI entry point and passed to every step that needs
    a timeout, a base directory, or the template host.
    """

    template_host: TemplateHostConfig = Field(default_factory=TemplateHostConfig)
    scaffold_timeout: int = Field(
        default=300, ge=30, description="create-next-app timeout in seconds"
    )
    command_timeout: int = Field(
        default=600, ge=10, description="Package manager / helper command timeout in seconds"
    )
    cwd: Path = Field(default=Path("."))

    def project_path(self, project_name: str) -> Path:
        """Absolute path of the project directory for *project_name*."""
        return (self.cwd / project_name).resolve()

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            INITSU_TEMPLATE_HOST, INITSU_FETCH_TIMEOUT,
            INITSU_SCAFFOLD_TIMEOUT, INITSU_COMMAND_TIMEOUT, INITSU_CWD.
        """
        host_kwargs: dict[str, Any] = {}
        if os.environ.get("INITSU_TEMPLATE_HOST"):
            host_kwargs["host"] = os.environ["INITSU_TEMPLATE_HOST"]
        if os.environ.get("INITSU_FETCH_TIMEOUT"):
            host_kwargs["timeout"] = os.environ["INITSU_FETCH_TIMEOUT"]

        kwargs: dict[str, Any] = {"template_host": TemplateHostConfig(**host_kwargs)}
        if os.environ.get("INITSU_SCAFFOLD_TIMEOUT"):
            kwargs["scaffold_timeout"] = os.environ["INITSU_SCAFFOLD_TIMEOUT"]
        if os.environ.get("INITSU_COMMAND_TIMEOUT"):
            kwargs["command_timeout"] = os.environ["INITSU_COMMAND_TIMEOUT"]
        if os.environ.get("INITSU_CWD"):
            kwargs["cwd"] = Path(os.environ["INITSU_CWD"])

        return cls(**kwargs)
