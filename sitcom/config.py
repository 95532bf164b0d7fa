"""Configuration loading for sitcom (.sitcom.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

import yaml

from .errors import ConfigError
from .logging import get_logger

DEFAULT_CONFIG_NAME = ".sitcom.yml"
_CONFIG_NAMES = (DEFAULT_CONFIG_NAME, ".sitcom.yaml", ".sitcom.json")

_LOGGER = get_logger("config")

Entry = Union[str, Sequence["Entry"]]
WrapValue = Union[str, Callable[..., Any], None]


@dataclass
class InputOptions:
    """Which files a bundle compiles and how they are read."""

    input: Any = None
    root: Path = field(default_factory=Path.cwd)
    declare: Optional[str] = None
    plugins: List[Any] = field(default_factory=list)
    mapping: Dict[str, Any] = field(default_factory=dict)


@dataclass
class OutputOptions:
    """Where a bundle writes and how each chunk is wrapped."""

    intro: WrapValue = None
    outro: WrapValue = None
    file: Optional[str] = None
    dist: Optional[str] = None
    layout: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SitcomConfig:
    """Represents the settings defined in .sitcom.yml."""

    input: InputOptions = field(default_factory=InputOptions)
    output: OutputOptions = field(default_factory=OutputOptions)
    markdown: Dict[str, Any] = field(default_factory=dict)
    silent: bool = False


def load_config(config_path: Path) -> SitcomConfig:
    """Load configuration from disk; relative paths resolve against its directory."""
    config_file = resolve_config_path(config_path)
    if not config_file.exists():
        raise ConfigError(f"Config file not found: {config_file}")
    data = _read_config(config_file)
    return parse_config(data, base_dir=config_file.parent)


def resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.is_dir():
        for name in _CONFIG_NAMES:
            candidate = config_path / name
            if candidate.exists():
                return candidate.resolve()
        return (config_path / DEFAULT_CONFIG_NAME).resolve()
    return config_path.resolve()


def parse_config(data: Any, *, base_dir: Path | None = None) -> SitcomConfig:
    """Build a :class:`SitcomConfig` from an already-parsed mapping."""
    if isinstance(data, SitcomConfig):
        return data
    if not isinstance(data, Mapping):
        raise ConfigError(f"bad config type {type(data).__name__!r}")

    base = Path(base_dir) if base_dir is not None else Path.cwd()
    root_value = _as_str(data.get("root"))
    root = (base / root_value).resolve() if root_value else base.resolve()

    inputs = InputOptions(
        input=_as_entry(data.get("input")),
        root=root,
        declare=_as_str(data.get("declare")),
        plugins=_as_plugins(data.get("plugins")),
        mapping=_as_dict(data.get("mapping")),
    )

    output_data = _as_dict(data.get("output"))
    output = OutputOptions(
        intro=_as_wrap(output_data.get("intro")),
        outro=_as_wrap(output_data.get("outro")),
        file=_as_str(output_data.get("file")),
        dist=_as_str(output_data.get("dist")),
        layout=_as_str(output_data.get("layout")),
        data=dict(_as_dict(output_data.get("data"))),
    )

    return SitcomConfig(
        input=inputs,
        output=output,
        markdown=dict(_as_dict(data.get("markdown"))),
        silent=bool(data.get("silent", False)),
    )


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"bad config type {type(loaded).__name__!r} in {path.name}")
    return loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


def _as_str(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (str, int, float, Path)):
        text = str(value)
        return text or None
    return None


def _as_entry(value: Any) -> Any:
    if isinstance(value, (str, Path)):
        return str(value) or None
    if isinstance(value, Sequence):
        return [_as_entry(item) for item in value if item]
    return None


def _as_wrap(value: Any) -> WrapValue:
    if value is None or callable(value):
        return value
    return str(value)


def _as_plugins(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Sequence):
        _LOGGER.warning("Invalid plugins type; converting plugins to an empty list")
        return []
    return list(value)


__all__ = [
    "DEFAULT_CONFIG_NAME",
    "InputOptions",
    "OutputOptions",
    "SitcomConfig",
    "load_config",
    "parse_config",
    "resolve_config_path",
]
