"""Configuration loading from YAML and environment.

Secrets (tokens) are taken from environment variables or from files
(Docker secrets). Never put real tokens in config files committed to the
repo.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _read_secret(env_key: str, file_env_key: str) -> str | None:
    """Value of env_key, else contents of the file named by file_env_key."""
    value = _current_env.get(env_key)
    if value:
        return value.strip()
    file_path = _current_env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    return None


# Environment snapshot taken by load_config
_current_env: dict[str, str] = {}


class GitLabConfig(BaseSettings):
    """GitLab API settings and the merge request being served."""

    model_config = SettingsConfigDict(env_prefix="GITLAB_", extra="ignore")

    token: str | None = Field(default=None, description="Personal or project access token; use env or secret file")
    api_url: str = Field(default="https://gitlab.com/api/v4", description="API base URL")
    project_id: int | str = Field(default="", description="Numeric project id or namespaced path (group/project)")
    merge_request_iid: int = Field(default=0, ge=0, description="Merge request IID within the project")
    timeout: float = Field(default=30, gt=0, description="Upstream request timeout in seconds")


class ServerConfig(BaseSettings):
    """HTTP server bind settings."""

    model_config = SettingsConfigDict(env_prefix="SERVER_", extra="ignore")

    host: str = Field(default="127.0.0.1", description="Bind host")
    port: int = Field(default=8080, ge=0, le=65535, description="Bind port (0 picks a free port)")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )
    access_log: bool = Field(default=False, description="Log every HTTP request regardless of level")


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    gitlab: GitLabConfig = Field(default_factory=GitLabConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def gitlab_token_resolved(self) -> str | None:
        """Resolve GitLab token from config, env or Docker secret file."""
        t = self.gitlab.token
        if t and not t.startswith("${"):
            return t
        return _read_secret("GITLAB_TOKEN", "GITLAB_TOKEN_FILE")


def _substitute_env(value: Any) -> Any:
    """Expand whole-string ${VAR} or $VAR values; unknown names are kept."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    Secrets: GITLAB_TOKEN or GITLAB_TOKEN_FILE. Nested values can also be
    set per section through env (GITLAB_PROJECT_ID, SERVER_PORT, ...);
    values present in the YAML file win.
    """
    global _current_env
    import os

    _current_env = dict(os.environ)

    path = config_path or Path("config.yaml")
    if not path.is_file():
        return AppConfig()

    raw = yaml.safe_load(path.read_text()) or {}
    raw = _substitute_env(raw)

    gitlab = GitLabConfig(**(raw.get("gitlab") or {}))
    server = ServerConfig(**(raw.get("server") or {}))
    logging = LoggingConfig(**(raw.get("logging") or {}))

    return AppConfig(gitlab=gitlab, server=server, logging=logging)
