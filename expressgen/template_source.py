"""Base template acquisition.

The orchestrator populates a new project root from a ``TemplateSource``
before feature modules run.  Three sources exist:

* ``SkeletonTemplateSource`` -- built-in minimal layout (default).
* ``LocalTemplateSource`` -- copy of a directory on disk.
* ``ArchiveTemplateSource`` -- ``.tar.gz`` downloaded over HTTP with httpx.

Every failure surfaces as ``TemplateFetchError`` with the cause chained.
"""

from __future__ import annotations

import asyncio
import io
import shutil
import tarfile
from pathlib import Path, PurePosixPath
from typing import Protocol

import httpx

from .errors import TemplateFetchError
from .manifest import MANIFEST_NAME
from .utils import dump_json, write_text

# Directories every generated project starts with.
SKELETON_DIRS: tuple[str, ...] = (
    "src/controllers",
    "src/services",
    "src/middleware",
    "src/routes",
    "src/models",
    "src/config",
    "tests",
)

_COPY_IGNORE = shutil.ignore_patterns("node_modules", ".git")


class TemplateSource(Protocol):
    """Anything that can populate a project root."""

    description: str

    async def fetch(self, target_root: Path) -> None: ...


class SkeletonTemplateSource:
    """Create the role directories and a minimal ``package.json``."""

    description = "built-in skeleton"

    async def fetch(self, target_root: Path) -> None:
        try:
            await asyncio.to_thread(self._populate, Path(target_root))
        except OSError as exc:
            raise TemplateFetchError(self.description, str(exc)) from exc

    @staticmethod
    def _populate(root: Path) -> None:
        for directory in SKELETON_DIRS:
            (root / directory).mkdir(parents=True, exist_ok=True)
        manifest = {
            "name": root.resolve().name,
            "version": "1.0.0",
            "dependencies": {},
            "devDependencies": {},
            "scripts": {},
        }
        write_text(root / MANIFEST_NAME, dump_json(manifest))


class LocalTemplateSource:
    """Copy a template directory from the local filesystem."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()
        self.description = str(self.path)

    async def fetch(self, target_root: Path) -> None:
        if not self.path.is_dir():
            raise TemplateFetchError(self.description, "not a directory")
        try:
            await asyncio.to_thread(
                shutil.copytree, self.path, Path(target_root), ignore=_COPY_IGNORE, dirs_exist_ok=True
            )
        except (OSError, shutil.Error) as exc:
            raise TemplateFetchError(self.description, str(exc)) from exc


class ArchiveTemplateSource:
    """Download a ``.tar.gz`` template and unpack it into the project root.

    The archive's single top-level directory (as produced by GitHub's
    tarball endpoints) is dropped.  Members that would land outside the root,
    and link members, are refused.
    """

    def __init__(self, url: str, timeout: float = 60.0) -> None:
        self.url = url
        self.timeout = timeout
        self.description = url

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            follow_redirects=True,
        )

    async def download(self) -> bytes:
        """Return the raw archive bytes."""
        try:
            async with self._client() as client:
                response = await client.get(self.url)
                response.raise_for_status()
                return response.content
        except httpx.TimeoutException as exc:
            raise TemplateFetchError(self.url, f"timed out after {self.timeout}s") from exc
        except httpx.HTTPStatusError as exc:
            raise TemplateFetchError(self.url, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise TemplateFetchError(self.url, str(exc) or type(exc).__name__) from exc

    async def fetch(self, target_root: Path) -> None:
        payload = await self.download()
        await asyncio.to_thread(self.extract, payload, Path(target_root))

    def extract(self, payload: bytes, root: Path) -> list[str]:
        """Unpack *payload* under *root*; return the relative paths written."""
        written: list[str] = []
        try:
            with tarfile.open(fileobj=io.BytesIO(payload), mode="r:gz") as archive:
                for member in archive.getmembers():
                    relative = self._strip_top_dir(member.name)
                    if relative is None:
                        continue
                    if member.issym() or member.islnk():
                        raise TemplateFetchError(self.url, f"link member not allowed: {member.name}")
                    destination = root / relative
                    if member.isdir():
                        destination.mkdir(parents=True, exist_ok=True)
                        continue
                    if not member.isfile():
                        continue
                    source = archive.extractfile(member)
                    if source is None:
                        continue
                    destination.parent.mkdir(parents=True, exist_ok=True)
                    destination.write_bytes(source.read())
                    written.append(relative.as_posix())
        except (tarfile.TarError, OSError, EOFError) as exc:
            raise TemplateFetchError(self.url, f"invalid archive: {exc}") from exc
        return written

    def _strip_top_dir(self, name: str) -> PurePosixPath | None:
        pure = PurePosixPath(name)
        if pure.is_absolute() or ".." in pure.parts:
            raise TemplateFetchError(self.url, f"archive member escapes the target: {name}")
        parts = [p for p in pure.parts if p not in ("", ".")]
        if len(parts) <= 1:
            return None
        return PurePosixPath(*parts[1:])


def template_source_for(spec: str, timeout: float = 60.0) -> TemplateSource:
    """Pick a source for a ``--template`` value.

    Empty selects the built-in skeleton, an ``http(s)://`` URL an archive
    download, anything else a local directory.
    """
    spec = (spec or "").strip()
    if not spec:
        return SkeletonTemplateSource()
    if spec.startswith(("http://", "https://")):
        return ArchiveTemplateSource(spec, timeout)
    return LocalTemplateSource(spec)
