"""Resolve named templates and write their files into a project.

``TemplateApplier`` looks a template up in the registry, pulls its files via
``ContentFetcher`` and writes them under the project root.  Templates are
authored for a ``src/`` layout; when the project opts out of that layout the
leading ``src/`` segment is dropped so the same file lands one level higher.

Writes overwrite existing files and are not transactional: if one write
fails, files written before it stay on disk.
"""

from __future__ import annotations

import asyncio
from pathlib import Path, PurePosixPath

from pydantic import BaseModel, Field

from initsu.utils import print_success

from .fetcher import ContentFetcher
from .sources import TEMPLATE_REGISTRY, TemplateDefinition

SRC_PREFIX = "src/"


class TemplateFile(BaseModel):
    """A single file of a resolved template."""

    path: str = Field(..., description="Repository-relative destination path")
    content: str = Field(default="", description="Full text written verbatim")


class TemplateDescriptor(BaseModel):
    """A template resolved into concrete file contents."""

    name: str
    description: str = Field(default="")
    files: list[TemplateFile] = Field(default_factory=list)


class TemplateNotFoundError(Exception):
    """Raised when a template name is not in the registry."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = available or []
        message = f'Template "{name}" not found'
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class TemplateWriteError(Exception):
    """Raised when a template file cannot be written into the project."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not write {self.path}: {reason}")


def adjust_path(path: str, use_src_dir: bool) -> str:
    """Drop one leading ``src/`` segment unless the project uses ``src/``."""
    if not use_src_dir and path.startswith(SRC_PREFIX):
        return path[len(SRC_PREFIX):]
    return path


def destination_for(root: Path, path: str, use_src_dir: bool) -> Path:
    """Absolute destination of a template file under *root*.

    Raises:
        TemplateWriteError: If the path is absolute or climbs out of *root*.
    """
    relative = adjust_path(path, use_src_dir)
    if PurePosixPath(relative).is_absolute() or Path(relative).is_absolute():
        raise TemplateWriteError(relative, "absolute paths are not allowed in templates")

    base = root.resolve()
    target = (base / relative).resolve()
    if target == base or not target.is_relative_to(base):
        raise TemplateWriteError(target, "path escapes the project root")
    return target


class TemplateApplier:
    """Resolves templates from the registry and materialises them on disk."""

    def __init__(
        self,
        fetcher: ContentFetcher | None = None,
        registry: dict[str, TemplateDefinition] | None = None,
    ) -> None:
        self.fetcher = fetcher or ContentFetcher()
        self.registry = TEMPLATE_REGISTRY if registry is None else registry

    # -- Lookup ------------------------------------------------------------

    def list_available(self) -> list[TemplateDescriptor]:
        """Name and description of every registered template (no files)."""
        return [
            TemplateDescriptor(name=definition.name, description=definition.description)
            for definition in self.registry.values()
        ]

    def definition(self, name: str) -> TemplateDefinition:
        """Registry entry for *name*.

        Raises:
            TemplateNotFoundError: If *name* is not registered.
        """
        try:
            return self.registry[name]
        except KeyError:
            raise TemplateNotFoundError(name, sorted(self.registry)) from None

    async def resolve(self, name: str) -> TemplateDescriptor:
        """Build a fresh descriptor for *name*, fetching its files.

        Raises:
            TemplateNotFoundError: If *name* is not registered.  Raised before
                any network access.
        """
        definition = self.definition(name)

        contents = await self.fetcher.fetch_many(definition.source)
        return TemplateDescriptor(
            name=definition.name,
            description=definition.description,
            files=[
                TemplateFile(path=path, content=contents.get(path, ""))
                for path in definition.source.files
            ],
        )

    # -- Apply -------------------------------------------------------------

    async def apply(
        self,
        name: str,
        destination_root: str | Path,
        use_src_dir: bool = True,
    ) -> list[Path]:
        """Resolve *name* and write its files under *destination_root*.

        Args:
            name: Registered template name.
            destination_root: Existing project directory.
            use_src_dir: Keep the ``src/`` prefix of template paths.

        Returns:
            The written file paths, in template order.

        Raises:
            TemplateNotFoundError: Unknown template.
            TemplateWriteError: A directory or file could not be written.
        """
        template = await self.resolve(name)
        root = Path(destination_root)

        written: list[Path] = []
        for template_file in template.files:
            target = destination_for(root, template_file.path, use_src_dir)
            try:
                await asyncio.to_thread(_write_file, target, template_file.content)
            except OSError as exc:
                raise TemplateWriteError(target, exc.strerror or str(exc)) from exc
            written.append(target)

        print_success(f"{name} template applied successfully")
        return written


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
