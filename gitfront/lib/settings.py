"""
gitfront settings.

Optional YAML file with defaults for command flags. Looked up in order,
first existing file wins:

    <repo root>/.gitfront.yaml
    ~/.config/gitfront/config.yaml

Example:

    push:
      create: false
    mail:
      reviewers: [alice@example.com]
      notify: OWNER_REVIEWERS
      publish_comments: true

If no file exists, defaults are used. Git's own configuration
(remotes, branch tracking) is always read from git, never from here.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from gitfront.lib import validate
from gitfront.lib.errors import SettingsError

logger = logging.getLogger(__name__)

REPO_SETTINGS_FILE = ".gitfront.yaml"
USER_SETTINGS_FILE = Path("~/.config/gitfront/config.yaml")


@dataclass
class MailDefaults:
    reviewers: list[str] = field(default_factory=list)
    cc: list[str] = field(default_factory=list)
    notify: str | None = None
    publish_comments: bool = False
    topic: str | None = None


@dataclass
class Settings:
    push_create: bool = False
    mail: MailDefaults = field(default_factory=MailDefaults)
    path: Path | None = None  # File the settings came from, if any


def settings_paths(repo_root: Path | None) -> list[Path]:
    paths = []
    if repo_root is not None:
        paths.append(repo_root / REPO_SETTINGS_FILE)
    paths.append(USER_SETTINGS_FILE.expanduser())
    return paths


def parse_settings(data: dict | None, path: Path | None = None) -> Settings:
    """
    Build Settings from loaded YAML data.

    Raises:
        SettingsError: data doesn't match the settings schema
    """
    if data is None:
        return Settings(path=path)
    if not isinstance(data, dict):
        raise SettingsError(f"{path}: expected a mapping at top level")
    try:
        validate.validate(data, "settings")
    except validate.SchemaError as e:
        raise SettingsError(f"{path}: {e}") from None

    push = data.get("push", {})
    mail = data.get("mail", {})
    return Settings(
        push_create=push.get("create", False),
        mail=MailDefaults(
            reviewers=mail.get("reviewers", []),
            cc=mail.get("cc", []),
            notify=mail.get("notify"),
            publish_comments=mail.get("publish_comments", False),
            topic=mail.get("topic"),
        ),
        path=path,
    )


def load_settings(repo_root: Path | None) -> Settings:
    """Load the first settings file found, or defaults if there is none.

    A file that isn't valid YAML is logged and ignored.
    """
    for path in settings_paths(repo_root):
        if not path.exists():
            continue
        try:
            data = yaml.safe_load(path.read_text())
        except (yaml.YAMLError, OSError) as e:
            logger.warning(f"Failed to read {path}: {e}")
            return Settings()
        logger.debug(f"settings from {path}")
        return parse_settings(data, path)
    return Settings()
