"""Async retrieval of template files from a raw-content host.

Files are requested with a plain unauthenticated GET against
``https://<host>/<owner>/<repo>/<branch>/<path>``.  ``fetch_one`` is strict
(anything but HTTP 200 is an error); ``fetch_many`` is best-effort and swaps
in built-in boilerplate for every file it could not retrieve.

Typical usage::

    fetcher = ContentFetcher()
    files = await fetcher.fetch_many(TEMPLATE_REGISTRY["default"].source)
"""

from __future__ import annotations

import asyncio

import httpx

from initsu.utils import print_warning

from .sources import TemplateSource


class RemoteFetchError(Exception):
    """Raised when a single template file cannot be retrieved."""

    def __init__(
        self,
        path: str,
        url: str,
        status_code: int | None = None,
        reason: str = "",
    ) -> None:
        self.path = path
        self.url = url
        self.status_code = status_code
        self.reason = reason
        detail = f"HTTP {status_code}" if status_code is not None else reason
        super().__init__(f"Failed to fetch {path}: {detail}")


# ---------------------------------------------------------------------------
# Fallback content
# ---------------------------------------------------------------------------

STYLESHEET_FALLBACK = """\
@tailwind base;
@tailwind components;
@tailwind utilities;

:root {
  --foreground-rgb: 0, 0, 0;
  --background-start-rgb: 214, 219, 220;
  --background-end-rgb: 255, 255, 255;
}

@media (prefers-color-scheme: dark) {
  :root {
    --foreground-rgb: 255, 255, 255;
    --background-start-rgb: 0, 0, 0;
    --background-end-rgb: 0, 0, 0;
  }
}

body {
  color: rgb(var(--foreground-rgb));
  background: linear-gradient(
      to bottom,
      transparent,
      rgb(var(--background-end-rgb))
    )
    rgb(var(--background-start-rgb));
}
"""

PAGE_FALLBACK = """\
export default function Home() {
  return (
    <div className="grid grid-rows-[20px_1fr_20px] items-center justify-items-center min-h-screen p-8 pb-20 gap-16 sm:p-20">
      <main className="flex flex-col gap-8 row-start-2 items-center sm:items-start">
        <h1 className="text-4xl font-bold">Welcome to Next.js!</h1>
        <p className="text-lg">Get started by editing this page.</p>
      </main>
    </div>
  );
}
"""

# (category, path suffixes, content) -- first match wins.
FALLBACK_TABLE: tuple[tuple[str, tuple[str, ...], str], ...] = (
    ("stylesheet", (".css",), STYLESHEET_FALLBACK),
    ("page", ("page.tsx", "page.jsx"), PAGE_FALLBACK),
)


def fallback_category(path: str) -> str | None:
    """Return the fallback category name for *path*, or ``None`` if unknown."""
    for category, suffixes, _ in FALLBACK_TABLE:
        if path.endswith(suffixes):
            return category
    return None


def fallback_content(path: str) -> str:
    """Built-in text used when *path* could not be fetched.

    Unrecognised suffixes get an empty string.
    """
    for _, suffixes, content in FALLBACK_TABLE:
        if path.endswith(suffixes):
            return content
    return ""


# ---------------------------------------------------------------------------
# ContentFetcher
# ---------------------------------------------------------------------------


class ContentFetcher:
    """Fetches raw template files over HTTP(S) using ``httpx.AsyncClient``.

    Args:
        host: Raw-content host name (no scheme).
        timeout: Per-request timeout in seconds.
        transport: Optional ``httpx`` transport, mainly for tests
            (``httpx.MockTransport``).
    """

    def __init__(
        self,
        host: str = "raw.githubusercontent.com",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.host = host.strip("/")
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` configured with our timeout."""
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=min(self.timeout, 5.0)),
            transport=self.transport,
        )

    def build_url(self, source: TemplateSource, relative_path: str) -> str:
        """Deterministic raw-content URL for one file of *source*."""
        return (
            f"https://{self.host}/{source.owner}/{source.repo}/"
            f"{source.branch}/{relative_path.lstrip('/')}"
        )

    async def fetch_one(
        self,
        source: TemplateSource,
        relative_path: str,
        client: httpx.AsyncClient | None = None,
    ) -> str:
        """Fetch a single file and return its body.

        Raises:
            RemoteFetchError: On any status other than 200, or on a
                transport failure (connection refused, timeout, ...).
        """
        url = self.build_url(source, relative_path)
        if client is None:
            async with self._client() as own_client:
                return await self._get(own_client, url, relative_path)
        return await self._get(client, url, relative_path)

    @staticmethod
    async def _get(client: httpx.AsyncClient, url: str, relative_path: str) -> str:
        try:
            response = await client.get(url)
        except httpx.TimeoutException as exc:
            raise RemoteFetchError(relative_path, url, reason=f"timed out ({exc})") from exc
        except httpx.HTTPError as exc:
            raise RemoteFetchError(relative_path, url, reason=str(exc) or type(exc).__name__) from exc

        if response.status_code != 200:
            raise RemoteFetchError(relative_path, url, status_code=response.status_code)
        return response.text

    async def fetch_many(self, source: TemplateSource) -> dict[str, str]:
        """Fetch every file declared by *source*, falling back per file.

        Requests run concurrently.  A file that cannot be fetched is replaced
        by ``fallback_content(path)`` and a warning is printed; the call as a
        whole never fails because of a single file.

        Returns:
            ``{relative_path: content}`` with one entry per declared path.
        """
        if not source.files:
            return {}

        async with self._client() as client:
            contents = await asyncio.gather(
                *(self._fetch_or_fallback(source, path, client) for path in source.files)
            )
        return dict(zip(source.files, contents))

    async def _fetch_or_fallback(
        self,
        source: TemplateSource,
        relative_path: str,
        client: httpx.AsyncClient,
    ) -> str:
        try:
            return await self.fetch_one(source, relative_path, client)
        except RemoteFetchError as exc:
            category = fallback_category(relative_path)
            if category is None:
                print_warning(f"Warning: {exc}, writing an empty file")
            else:
                print_warning(f"Warning: {exc}, using default {category} content")
            return fallback_content(relative_path)
