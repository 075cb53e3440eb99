"""Configuration loading: built-in defaults, config.default.yaml, then user overrides."""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from .log import log_debug, log_warn

DEFAULTS = {
    "proxy": {"base_url": "https://r.jina.ai", "backend_host": "chatgpt.com"},
    "fetch": {"timeout": 30, "user_agent": "Mozilla/5.0"},
    "render": {
        "default_title": "ChatGPT Conversation",
        "boundary_marker": "##### You said:",
        "role_labels": {"user": "User", "assistant": "Assistant"},
    },
    "output": {"dir": ".", "filename": "chatgpt_conversation.md", "format": "md"},
    "activity": {"max_entries": 500},
}

def get_config_paths(base_dir: Optional[Path] = None) -> dict:
    """Get candidate paths for the shipped defaults and the user's config.yaml."""
    package_dir = Path(__file__).resolve().parent
    base_dir = base_dir or Path.cwd()

    appdata = os.environ.get("APPDATA")
    if appdata:
        user_dir = Path(appdata) / "sharesaver"
    else:
        user_dir = Path.home() / ".config" / "sharesaver"

    return {
        "local": base_dir / "config.yaml",
        "user": user_dir / "config.yaml",
        "default": package_dir / "config.default.yaml",
    }

def deep_merge(target: dict, source: dict) -> dict:
    for k, v in source.items():
        if k in target and isinstance(target[k], dict) and isinstance(v, dict):
            deep_merge(target[k], v)
        else:
            target[k] = v
    return target

def _normalize(d):
    if isinstance(d, dict):
        return {k: _normalize(v) for k, v in d.items()}
    if isinstance(d, list):
        return [_normalize(i) for i in d]
    if isinstance(d, str) and d.lower() in ("true", "false"):
        return d.lower() == "true"
    return d

def load_file(path: Optional[Path]) -> dict:
    if not path or not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        log_warn(f"Failed to load {path.name}: {e}")
        return {}
    if not isinstance(data, dict):
        log_warn(f"Ignoring {path.name}: top level must be a mapping")
        return {}
    return _normalize(data)

def load_config(base_dir: Optional[Path] = None, explicit: Optional[Path] = None) -> dict:
    """Load configuration. Priority: explicit path > local config.yaml > user config > defaults."""
    paths = get_config_paths(base_dir)
    config = copy.deepcopy(DEFAULTS)

    deep_merge(config, load_file(paths["default"]))

    if explicit is not None:
        if not explicit.exists():
            log_warn(f"Config file not found: {explicit}")
        user_path = explicit
    elif paths["local"].exists():
        user_path = paths["local"]
    else:
        user_path = paths["user"]

    user_data = load_file(user_path)
    if user_data:
        log_debug(f"Loaded overrides from {user_path}")
    deep_merge(config, user_data)
    return config

def config_section(config: dict, name: str) -> dict:
    """Return a top-level section, treating a missing or empty (null) one as {}."""
    section = config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError(f"{name} must be a mapping, got {type(section).__name__}")
    return section


@dataclass(frozen=True)
class Settings:
    """Pipeline-facing view of the merged configuration."""

    proxy_base_url: str = DEFAULTS["proxy"]["base_url"]
    backend_host: str = DEFAULTS["proxy"]["backend_host"]
    timeout: float = DEFAULTS["fetch"]["timeout"]
    user_agent: str = DEFAULTS["fetch"]["user_agent"]
    default_title: str = DEFAULTS["render"]["default_title"]
    boundary_marker: str = DEFAULTS["render"]["boundary_marker"]
    role_labels: dict = field(default_factory=lambda: dict(DEFAULTS["render"]["role_labels"]))

    @classmethod
    def from_config(cls, config: dict) -> "Settings":
        proxy = config_section(config, "proxy")
        fetch = config_section(config, "fetch")
        render = config_section(config, "render")

        base_url = str(proxy.get("base_url", cls.proxy_base_url)).strip().rstrip("/")
        if not base_url.startswith(("http://", "https://")):
            raise ValueError("proxy.base_url must start with http:// or https://")

        try:
            timeout = float(fetch.get("timeout", cls.timeout))
        except (TypeError, ValueError) as e:
            raise ValueError(f"fetch.timeout must be a number: {e}") from e
        if timeout <= 0:
            raise ValueError("fetch.timeout must be positive")

        labels = dict(DEFAULTS["render"]["role_labels"])
        overrides = render.get("role_labels") or {}
        if not isinstance(overrides, dict):
            raise ValueError("render.role_labels must be a mapping")
        labels.update(overrides)

        return cls(
            proxy_base_url=base_url,
            backend_host=str(proxy.get("backend_host", cls.backend_host)).strip("/"),
            timeout=timeout,
            user_agent=str(fetch.get("user_agent", cls.user_agent)),
            default_title=str(render.get("default_title", cls.default_title)),
            boundary_marker=str(render.get("boundary_marker", cls.boundary_marker)),
            role_labels=labels,
        )
