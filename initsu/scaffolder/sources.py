"""Registry of named starter templates and where their files live.

Each template is a ``TemplateDefinition`` keyed by name.  Adding a template
means adding an entry to ``TEMPLATE_REGISTRY``; nothing else branches on the
template name.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TemplateSource(BaseModel):
    """A remote repository and the repo-relative files to pull from it."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str
    branch: str = Field(default="main")
    files: tuple[str, ...] = Field(default=())


class TemplateDefinition(BaseModel):
    """A registered template: display metadata plus its remote source."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = Field(default="")
    source: TemplateSource


TEMPLATE_REGISTRY: dict[str, TemplateDefinition] = {
    "default": TemplateDefinition(
        name="default",
        description="Default Next.js template with custom page content and styling from GitHub",
        source=TemplateSource(
            owner="dharminnagar",
            repo="nextjs-template",
            branch="main",
            files=("src/app/page.tsx", "src/app/globals.css"),
        ),
    ),
}
