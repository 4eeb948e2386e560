"""
resource_orchestrator.templates.filesystem

Filesystem-backed template source.

Layout:
    <root>/<resource name>/template.yaml   (manifest template)
    <root>/<resource name>/welcome.txt     (onboarding text template)
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import BinaryIO

from resource_orchestrator.settings import Settings


class TemplateNotFound(Exception):
    def __init__(self, name: str, path: Path) -> None:
        super().__init__(f"template for resource {name!r} not found at {path}")
        self.name = name
        self.path = path


class FileSystemTemplateSource:
    def __init__(
        self,
        *,
        root: Path,
        template_filename: str = "template.yaml",
        welcome_filename: str = "welcome.txt",
    ) -> None:
        self._root = root
        self._template_filename = template_filename
        self._welcome_filename = welcome_filename

    @classmethod
    def from_settings(cls, settings: Settings) -> FileSystemTemplateSource:
        return cls(
            root=settings.templates_dir,
            template_filename=settings.template_filename,
            welcome_filename=settings.welcome_filename,
        )

    async def template(self, name: str) -> BinaryIO:
        return await self._open(name, self._template_filename)

    async def welcome_template(self, name: str) -> BinaryIO:
        return await self._open(name, self._welcome_filename)

    async def _open(self, name: str, filename: str) -> BinaryIO:
        path = self._path(name, filename)
        # The worker thread cannot be interrupted; shield it so a cancelled caller can still
        # hand the late file object to `_close_abandoned`.
        opening = asyncio.ensure_future(asyncio.to_thread(path.open, "rb"))
        try:
            return await asyncio.shield(opening)
        except asyncio.CancelledError:
            opening.add_done_callback(_close_abandoned)
            raise
        except FileNotFoundError as e:
            raise TemplateNotFound(name, path) from e

    def _path(self, name: str, filename: str) -> Path:
        # Resource names come from callers; refuse anything that escapes the root.
        root = self._root.resolve()
        path = (root / name / filename).resolve()
        if root not in path.parents:
            raise TemplateNotFound(name, path)
        return path


def _close_abandoned(opening: asyncio.Future[BinaryIO]) -> None:
    if opening.cancelled() or opening.exception() is not None:
        return
    opening.result().close()
