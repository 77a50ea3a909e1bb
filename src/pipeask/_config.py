"""Settings for reaching the completion service, read from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from pipeask._exceptions import ConfigError

DEFAULT_BASE_URL = "https://api.openai.com/v1"


def _resolve_key(environ: Mapping[str, str], env_var: str) -> str:
    key = environ.get(env_var, "").strip()
    if not key:
        raise ConfigError(f"No API key provided. Set the {env_var} environment variable.")
    return key


def _optional(environ: Mapping[str, str], env_var: str) -> str | None:
    value = environ.get(env_var, "").strip()
    return value or None


@dataclass(frozen=True, slots=True)
class Settings:
    """Connection settings for an OpenAI-compatible Chat Completions API."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    organization: str | None = None
    project: str | None = None

    def __repr__(self) -> str:
        return (
            f"Settings(api_key='***', base_url={self.base_url!r}, "
            f"organization={self.organization!r}, project={self.project!r})"
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``OPENAI_*`` variables (``os.environ`` by default)."""
        env = os.environ if environ is None else environ
        base_url = _optional(env, "OPENAI_BASE_URL") or DEFAULT_BASE_URL
        if not base_url.startswith(("http://", "https://")):
            raise ConfigError(f"OPENAI_BASE_URL must be an http(s) URL, got {base_url!r}")
        return cls(
            api_key=_resolve_key(env, "OPENAI_API_KEY"),
            base_url=base_url.rstrip("/"),
            organization=_optional(env, "OPENAI_ORG_ID"),
            project=_optional(env, "OPENAI_PROJECT_ID"),
        )

    def headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if self.organization:
            headers["OpenAI-Organization"] = self.organization
        if self.project:
            headers["OpenAI-Project"] = self.project
        return headers
