"""
Application configuration.

Values come from, in increasing precedence: model defaults, an optional YAML
file (``CHASM_CONFIG`` or an explicit path), and ``CHASM_<FIELD>``
environment variables.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from chasm import __version__

ENV_PREFIX = "CHASM_"
CONFIG_ENV_VAR = "CHASM_CONFIG"


class AppConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    github_api_url: str = "https://api.github.com"
    user_agent: str = f"chasm/{__version__}"
    content_root: str = "content"
    document_commit_message: str = "Add post"
    image_commit_message: str = "Add image"
    request_timeout_seconds: float = 30.0
    log_level: str = "INFO"
    summary_marker: bool = False


def _strip_yaml_fence(content: str) -> str:
    """Return the body of the first ```yaml block, or the whole text if none."""
    yaml_lines = []
    in_block = False
    found_block = False

    for line in content.splitlines():
        s_line = line.strip()
        if s_line.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and s_line.startswith("```"):
            break
        if in_block:
            yaml_lines.append(line)

    return "\n".join(yaml_lines) if found_block else content


def _env_overrides(environ: dict[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for name in AppConfig.model_fields:
        key = f"{ENV_PREFIX}{name.upper()}"
        if key in environ:
            overrides[name] = environ[key]
    return overrides


def load_config(path: Path | None = None, environ: dict[str, str] | None = None) -> AppConfig:
    """
    Load configuration from YAML and the environment.

    A missing file is not an error; defaults apply.
    Raises ValueError on invalid YAML or values that fail validation.
    """
    env = dict(os.environ) if environ is None else environ
    if path is None and env.get(CONFIG_ENV_VAR):
        path = Path(env[CONFIG_ENV_VAR])

    data: dict[str, Any] = {}
    if path is not None and path.exists():
        with open(path) as f:
            content = f.read()
        try:
            loaded = yaml.safe_load(_strip_yaml_fence(content))
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML syntax in config file: {e}") from e
        if loaded is not None:
            if not isinstance(loaded, dict):
                raise ValueError(f"Config file {path} must contain a mapping")
            data.update(loaded)

    data.update(_env_overrides(env))

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Config validation failed:\n{e}") from e


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
