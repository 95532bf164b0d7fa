"""Sequential, awaitable middleware chain over a chunk's tokens and HTML."""

from __future__ import annotations

import inspect
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Callable, List, Optional

from markdown_it.token import Token

from ..errors import PluginError
from ..logging import get_logger
from ..markdown import engine
from ..markdown.renderer import RenderHooks

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..core.chunk import Chunk

_LOGGER = get_logger("plugins")


class Plugin:
    """Optional base class for plugins.

    A plugin may define any of ``set_options(options)``, ``tokenize(tokens)``
    and ``transform(html)``. Hooks returning ``None`` pass the current value
    through; hooks may also return an awaitable.
    """

    name: Optional[str] = None


def plugin_name(plugin: Any) -> str:
    if isinstance(plugin, Mapping):
        name = plugin.get("name")
    else:
        name = getattr(plugin, "name", None)
    return str(name) if name else "anonymous"


def _hook(plugin: Any, name: str) -> Optional[Callable[..., Any]]:
    if isinstance(plugin, Mapping):
        hook = plugin.get(name)
    else:
        hook = getattr(plugin, name, None)
    return hook if callable(hook) else None


def _is_token_stream(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _is_text(value: Any) -> bool:
    return isinstance(value, str)


class PluginPipeline:
    """Runs a chunk's plugins strictly in list order for one stage at a time."""

    def __init__(self, chunk: "Chunk", plugins: Optional[Sequence[Any]] = None) -> None:
        self.chunk = chunk
        self.plugins = list(plugins or [])

    async def tokenize(self, content: str) -> List[Token]:
        tokens = engine.tokenize(content, self.chunk.options)
        result = await self.invoke("tokenize", tokens, _is_token_stream)
        return list(result)

    async def transform(self, tokens: Sequence[Token], hooks: RenderHooks | None = None) -> str:
        html = engine.render(list(tokens), self.chunk.options, hooks)
        return await self.invoke("transform", html, _is_text)

    async def invoke(self, stage: str, value: Any, validate: Callable[[Any], bool]) -> Any:
        for plugin in self.plugins:
            if plugin is None:
                continue

            set_options = _hook(plugin, "set_options")
            if set_options is not None:
                set_options(self.chunk.options)

            hook = _hook(plugin, stage)
            if hook is None:
                continue

            _LOGGER.debug("Running %s hook of plugin %s", stage, plugin_name(plugin))
            result = hook(value)
            while result is not None:
                if validate(result):
                    value = result
                    break
                if inspect.isawaitable(result):
                    result = await result
                    continue
                raise PluginError(plugin_name(plugin), stage)
        return value


__all__ = ["Plugin", "PluginPipeline", "plugin_name"]
