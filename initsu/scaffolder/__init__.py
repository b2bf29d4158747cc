"""initsu scaffolder -- project generation and starter templates.

The core is the template pipeline: ``ContentFetcher`` pulls raw starter files
from a remote host (falling back to built-in boilerplate) and
``TemplateApplier`` writes them into a freshly created project, honouring the
``src/`` layout choice.

Quick usage::

    from initsu.scaffolder import TemplateApplier

    applier = TemplateApplier()
    await applier.apply("default", "/path/to/my-app", use_src_dir=False)
"""

from initsu.scaffolder.applier import (
    TemplateApplier,
    TemplateDescriptor,
    TemplateFile,
    TemplateNotFoundError,
    TemplateWriteError,
)
from initsu.scaffolder.configuration import ConfigurationManager, ConfigurationOptions
from initsu.scaffolder.fetcher import ContentFetcher, RemoteFetchError, fallback_content
from initsu.scaffolder.sources import TEMPLATE_REGISTRY, TemplateDefinition, TemplateSource
from initsu.scaffolder.templates import TemplateRenderer

__all__ = [
    "TEMPLATE_REGISTRY",
    "ConfigurationManager",
    "ConfigurationOptions",
    "ContentFetcher",
    "RemoteFetchError",
    "TemplateApplier",
    "TemplateDefinition",
    "TemplateDescriptor",
    "TemplateFile",
    "TemplateNotFoundError",
    "TemplateRenderer",
    "TemplateSource",
    "TemplateWriteError",
    "fallback_content",
]
