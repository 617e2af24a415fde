import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from codestats_readme.errors import ConfigError

CODESTATS_API = "https://codestats.net/api/users"
CODESTATS_PROFILE = "https://codestats.net/users"

DEFAULT_README = "./README.md"
DEFAULT_GIT_USERNAME = "CodeStats bot"
DEFAULT_COMMIT_MESSAGE = "Update codestats metrics"
DEFAULT_WIDTH = 42

TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Config:
    username: str
    readme_file: str = DEFAULT_README
    git_username: str = DEFAULT_GIT_USERNAME
    commit_message: str = DEFAULT_COMMIT_MESSAGE
    graph_width: int = DEFAULT_WIDTH
    show_title: bool = False
    show_link: bool = False
    debug: bool = False
    commit: bool = True
    commit_on_write_failure: bool = True

    @property
    def api_url(self) -> str:
        return f"{CODESTATS_API}/{self.username}"

    @property
    def profile_url(self) -> str:
        return f"{CODESTATS_PROFILE}/{self.username}"

    def with_overrides(self, **changes) -> "Config":
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **changes)


def _text(env: Mapping[str, str], key: str, default: str) -> str:
    value = env.get(key)
    if value is None or not value.strip():
        return default
    return value


def parse_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in TRUTHY


def parse_width(value: Optional[str], default: int = DEFAULT_WIDTH) -> int:
    try:
        width = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return width if width > 0 else default


def load_config(env: Optional[Mapping[str, str]] = None) -> Config:
    """
    Build the run configuration from GitHub Action style environment variables.
    Raises ConfigError when INPUT_CODESTATS_USERNAME is absent or blank.
    """
    env = os.environ if env is None else env
    username = (env.get("INPUT_CODESTATS_USERNAME") or "").strip()
    if not username:
        raise ConfigError("INPUT_CODESTATS_USERNAME has to be set")

    return Config(
        username=username,
        readme_file=_text(env, "INPUT_README_FILE", DEFAULT_README),
        git_username=_text(env, "GITHUB_ACTOR", DEFAULT_GIT_USERNAME),
        commit_message=_text(env, "INPUT_COMMIT_MESSAGE", DEFAULT_COMMIT_MESSAGE),
        graph_width=parse_width(env.get("INPUT_GRAPH_WIDTH")),
        show_title=parse_bool(env.get("INPUT_SHOW_TITLE")),
        show_link=parse_bool(env.get("INPUT_SHOW_LINK")),
        debug=parse_bool(env.get("INPUT_DEBUG")),
        commit=parse_bool(env.get("INPUT_COMMIT"), default=True),
        commit_on_write_failure=parse_bool(env.get("INPUT_COMMIT_ON_WRITE_FAILURE"), default=True),
    )
