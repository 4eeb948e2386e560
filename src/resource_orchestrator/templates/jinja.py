"""
resource_orchestrator.templates.jinja

Jinja2 template renderer.

Responsibilities:
- Render a template stream with the request settings exposed as variables.
- Stream rendered chunks into the output as they are produced.
- Keep stream reads and rendering off the event loop (worker thread).
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any, BinaryIO

from jinja2 import Environment, StrictUndefined

from resource_orchestrator.resources.models import Setting

SETTINGS_VAR = "settings"


class JinjaTemplateRenderer:
    def __init__(self, *, encoding: str = "utf-8") -> None:
        self._encoding = encoding
        # StrictUndefined: a setting missing from the request fails the render instead of
        # producing an empty value in the manifest.
        self._env = Environment(
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            autoescape=False,
        )

    async def execute(
        self, output: BinaryIO, template: BinaryIO, settings: Sequence[Setting]
    ) -> None:
        # Streams may be slow (files, sockets); the caller's deadline can only fire while
        # this coroutine is suspended.
        await asyncio.to_thread(self._render, output, template, tuple(settings))

    def _render(self, output: BinaryIO, template: BinaryIO, settings: Sequence[Setting]) -> None:
        source = template.read().decode(self._encoding)
        tpl = self._env.from_string(source)
        for chunk in tpl.generate(**template_context(settings)):
            output.write(chunk.encode(self._encoding))


def template_context(settings: Sequence[Setting]) -> dict[str, Any]:
    """
    Settings as template variables.

    Keys are available both as top-level names and through `settings["some-key"]` (for
    keys that are not valid identifiers). With duplicate keys the last one wins.
    A setting literally named `settings` is reachable only as `settings["settings"]`;
    the top-level name always refers to the full mapping.
    """

    values: dict[str, str] = {}
    for s in settings:
        values[s.key] = s.value
    ctx: dict[str, Any] = {
        k: v for k, v in values.items() if k.isidentifier() and k != SETTINGS_VAR
    }
    ctx[SETTINGS_VAR] = values
    return ctx
