"""Configuration loading from the environment."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_GRAPHQL_URL = "https://api.github.com/graphql"


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


def _token_from_gh_cli() -> str:
    """Ask the gh CLI for a token; empty string if unavailable."""
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return ""


@dataclass
class Settings:
    """Runtime settings.

    Attributes:
        github_token: Token used for GitHub GraphQL requests.
        owner: Default repository owner (GITHUB_OWNER).
        repo: Default repository name (GITHUB_REPO).
        graphql_url: GitHub GraphQL endpoint.
    """

    github_token: str = ""
    owner: str = ""
    repo: str = ""
    graphql_url: str = DEFAULT_GRAPHQL_URL

    def resolve_repo(self, owner: str | None = None, repo: str | None = None) -> str:
        """Combine explicit and default owner/repo into "owner/repo".

        Raises:
            ConfigError: If owner or repo is missing from both sources.
        """
        owner = owner or self.owner
        repo = repo or self.repo
        if not owner:
            raise ConfigError("owner is required (set GITHUB_OWNER or pass explicitly)")
        if not repo:
            raise ConfigError("repo is required (set GITHUB_REPO or pass explicitly)")
        return f"{owner}/{repo}"

    def require_token(self) -> str:
        """Return the GitHub token or raise ConfigError."""
        if not self.github_token:
            raise ConfigError(
                "GitHub token not configured (set GITHUB_TOKEN or run `gh auth login`)"
            )
        return self.github_token


def load_settings(env: Mapping[str, str] | None = None, use_gh_cli: bool = True) -> Settings:
    """Load settings from environment variables.

    Args:
        env: Environment mapping. Defaults to os.environ.
        use_gh_cli: Fall back to `gh auth token` when GITHUB_TOKEN is unset.

    Returns:
        Populated Settings.
    """
    if env is None:
        env = os.environ

    token = env.get("GITHUB_TOKEN", "")
    if not token and use_gh_cli:
        token = _token_from_gh_cli()
        if token:
            logger.debug("Using GitHub token from gh CLI")

    return Settings(
        github_token=token,
        owner=env.get("GITHUB_OWNER", ""),
        repo=env.get("GITHUB_REPO", ""),
        graphql_url=env.get("GITHUB_GRAPHQL_URL", DEFAULT_GRAPHQL_URL),
    )
