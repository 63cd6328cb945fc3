"""Configuration loading for moddoc (.moddoc.yml plus CLI overrides)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".moddoc.yml"
DEFAULT_OUTPUT = "dist"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080


@dataclass
class ServerConfig:
    """Listening address for server mode."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


@dataclass
class ModDocConfig:
    """Effective settings for one moddoc invocation."""

    module: Path
    output_dir: Path
    serve: bool = False
    server: ServerConfig = field(default_factory=ServerConfig)
    index_timeout: Optional[float] = None
    exclude_paths: List[str] = field(default_factory=list)


def load_config(
    module: Path | str,
    *,
    output: Path | str | None = None,
    serve: bool = False,
    host: str | None = None,
    port: int | None = None,
) -> ModDocConfig:
    """Load `.moddoc.yml` from the module root and apply explicit overrides.

    Keyword arguments come from the command line and win over file values. A
    relative `output` argument is taken relative to the working directory,
    while a relative `output` in the file is taken relative to the module root.
    """
    module_path = Path(module).expanduser().resolve()
    root = module_path if module_path.is_dir() else module_path.parent
    data = _read_config(root / CONFIG_FILENAME)

    server_data = _as_dict(data.get("server"))
    server = ServerConfig(
        host=_as_str(server_data.get("host")) or DEFAULT_HOST,
        port=_as_int(server_data.get("port")) or DEFAULT_PORT,
    )
    if host:
        server.host = host
    if port is not None:
        server.port = port
    if not 0 < server.port < 65536:
        raise ConfigError(f"Invalid port {server.port}")

    index_data = _as_dict(data.get("index"))
    index_timeout = _as_float(index_data.get("timeout"))
    if index_timeout is not None and index_timeout <= 0:
        index_timeout = None

    if output is not None:
        output_dir = Path(output).expanduser().resolve()
    else:
        configured = _as_str(data.get("output"))
        if configured:
            output_dir = (root / configured).expanduser().resolve()
        else:
            output_dir = Path(DEFAULT_OUTPUT).resolve()

    return ModDocConfig(
        module=module_path,
        output_dir=output_dir,
        serve=serve,
        server=server,
        index_timeout=index_timeout,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
    )


def _read_config(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_HOST",
    "DEFAULT_OUTPUT",
    "DEFAULT_PORT",
    "ModDocConfig",
    "ServerConfig",
    "load_config",
]
