"""Config file loading, validation, and persistence.

Schema on disk (~/.config/lazytf/config.json):

    {
        "search_paths": [".", "~/Projects", "~/Documents"],
        "ignore_patterns": ["node_modules", ".git", "vendor", ".terraform"]
    }

Both keys are optional and fall back to the defaults above.  Keys prefixed
with "_" are reserved (e.g. "_comment") and are stripped on load.
"""

import json
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from lazytf.constants import DEFAULT_IGNORE_PATTERNS, DEFAULT_SEARCH_PATHS

CONFIG_PATH = Path("~/.config/lazytf/config.json").expanduser()

_README_PATH = Path("~/.config/lazytf/README.md").expanduser()

_README_CONTENT = """\
# lazytf configuration

Edit `config.json` in this directory to tell lazytf where to look for
Terraform projects.

## Schema

```json
{
    "search_paths": ["<directory>", "..."],
    "ignore_patterns": ["<glob matched against directory names>", "..."]
}
```

## Example

```json
{
    "search_paths": ["~/work/infra", "~/Projects"],
    "ignore_patterns": ["node_modules", ".git", "archive-*"]
}
```

A leading `~` is expanded to your home directory.  A directory whose name
matches an ignore pattern is skipped together with everything below it.
Keys prefixed with `_` (e.g. `_comment`) are ignored by lazytf.
"""


class Config(BaseModel):
    """Where to look for Terraform projects and what to skip."""

    search_paths: list[str] = Field(default_factory=lambda: list(DEFAULT_SEARCH_PATHS))
    ignore_patterns: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS))


class ConfigError(Exception):
    """Raised when config.json exists but cannot be parsed or validated."""


def load_config() -> Config:
    """Load and validate the config file.

    Creates the config directory, a default config.json, and a README on
    first run.  Raises ConfigError if the file exists but is malformed.
    """
    if not CONFIG_PATH.exists():
        config = Config()
        _bootstrap(config)
        return config

    try:
        raw: object = json.loads(CONFIG_PATH.read_text())
    except OSError as exc:
        raise ConfigError(f"config.json cannot be read: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"config.json is not valid JSON: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError("config.json must be a JSON object at the top level")

    # Strip reserved/comment keys.
    data = {k: v for k, v in raw.items() if not k.startswith("_")}
    try:
        return Config.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config: {exc}") from exc


def save_config(config: Config) -> None:
    """Persist config to disk, creating directories as needed."""
    CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_PATH.write_text(json.dumps(config.model_dump(), indent=2))


def _bootstrap(config: Config) -> None:
    """Create the config directory, a default config.json, and a README."""
    save_config(config)
    if not _README_PATH.exists():
        _README_PATH.write_text(_README_CONTENT)


# Theme persistence
THEME_CONFIG_PATH = Path("~/.config/lazytf/theme.json").expanduser()


def load_theme() -> str | None:
    """Load the saved theme preference.

    Returns the theme name if set, None otherwise.
    """
    if not THEME_CONFIG_PATH.exists():
        return None
    try:
        data = json.loads(THEME_CONFIG_PATH.read_text())
        return data.get("theme")
    except (json.JSONDecodeError, AttributeError):
        return None


def save_theme(theme: str) -> None:
    """Save the theme preference to disk."""
    THEME_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    THEME_CONFIG_PATH.write_text(json.dumps({"theme": theme}, indent=2))
