from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

POSTS_API_URL = "https://jsonplaceholder.typicode.com/posts"
USERS_API_URL = "https://jsonplaceholder.typicode.com/users"

_REQUIRED_RESOURCES = ("posts", "users")
_RESOURCE_KEYS = ("url", "display_field")


@dataclass
class ResourceSpec:
    name: str
    url: str
    result_cap: int
    auto_start: bool = False
    display_field: str = "name"


@dataclass
class PageConfig:
    resources: Dict[str, ResourceSpec]
    timeout_seconds: Optional[float] = None
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def posts(self) -> ResourceSpec:
        return self.resources["posts"]

    @property
    def users(self) -> ResourceSpec:
        return self.resources["users"]


class ConfigValidationError(ValueError):
    pass


def default_page_config() -> PageConfig:
    return PageConfig(
        resources={
            "posts": ResourceSpec(
                name="posts",
                url=POSTS_API_URL,
                result_cap=5,
                auto_start=True,
                display_field="title",
            ),
            "users": ResourceSpec(
                name="users",
                url=USERS_API_URL,
                result_cap=3,
                auto_start=False,
                display_field="name",
            ),
        }
    )


def load_page_config(path: str | Path) -> PageConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigValidationError(f"Config file not found: {config_path}")

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigValidationError(f"Invalid YAML in {config_path}: {exc}") from exc

    return parse_page_config(raw)


def parse_page_config(raw: Any) -> PageConfig:
    if not isinstance(raw, dict):
        raise ConfigValidationError("Config root must be a YAML mapping")

    resources_raw = raw.get("resources")
    if not isinstance(resources_raw, dict) or not resources_raw:
        raise ConfigValidationError("`resources` is required and must be a non-empty mapping")

    missing = [name for name in _REQUIRED_RESOURCES if name not in resources_raw]
    if missing:
        raise ConfigValidationError(f"`resources` is missing: {', '.join(missing)}")
    unknown = sorted(name for name in resources_raw if name not in _REQUIRED_RESOURCES)
    if unknown:
        raise ConfigValidationError(
            f"Unknown resources: {', '.join(unknown)}. "
            f"Allowed: {', '.join(_REQUIRED_RESOURCES)}"
        )

    defaults = default_page_config().resources
    resources: Dict[str, ResourceSpec] = {}
    for name, conf in resources_raw.items():
        resources[name] = _parse_resource(name, conf, defaults[name])

    timeout = raw.get("timeout_seconds")
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigValidationError("`timeout_seconds` must be a positive number or null")
        timeout = float(timeout)

    headers = raw.get("headers", {})
    if not isinstance(headers, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in headers.items()
    ):
        raise ConfigValidationError("`headers` must be a mapping of strings")

    return PageConfig(resources=resources, timeout_seconds=timeout, headers=headers)


def _parse_resource(name: str, conf: Any, default: ResourceSpec) -> ResourceSpec:
    if not isinstance(conf, dict):
        raise ConfigValidationError(f"Resource `{name}` must be a mapping")

    unsupported = sorted(key for key in conf if key not in _RESOURCE_KEYS)
    if unsupported:
        raise ConfigValidationError(
            f"Resource `{name}` has unsupported keys: {', '.join(unsupported)}. "
            f"Allowed: {', '.join(_RESOURCE_KEYS)}"
        )

    url = conf.get("url", default.url)
    if not isinstance(url, str) or not url.startswith(("http://", "https://")):
        raise ConfigValidationError(f"Resource `{name}` url must be an http(s) URL")

    display_field = conf.get("display_field", default.display_field)
    if not isinstance(display_field, str) or not display_field:
        raise ConfigValidationError(f"Resource `{name}` display_field must be a non-empty string")

    # Cap and start mode belong to the page, not the config file.
    return replace(default, url=url, display_field=display_field)
