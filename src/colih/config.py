"""Configuration management for Colih."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .core.errors import MalformedStorage, UnknownUser
from .core.records import Group, Role, User

logger = logging.getLogger(__name__)

COLIH_HOME = Path(os.environ.get("COLIH_HOME", Path.home() / "colih"))
CONFIG_FILE = COLIH_HOME / "config" / "colih.conf"
DATA_DIR = COLIH_HOME / "data"
SESSION_DIR = COLIH_HOME / "session"


def default_users() -> list[User]:
    """Demo user directory: one manager and three group members."""
    return [
        User(id="mgr1", name="Gestor Geral", role=Role.MANAGER),
        User(id="usr1", name="Membro Grupo A", role=Role.MEMBER, group=Group.GRUPO_A),
        User(id="usr2", name="Membro Grupo B", role=Role.MEMBER, group=Group.GRUPO_B),
        User(id="usr3", name="Membro Camaçari", role=Role.MEMBER, group=Group.CAMACARI),
    ]


@dataclass
class Config:
    """Colih configuration."""

    data_dir: str = ""
    session_dir: str = ""
    users: list[User] = field(default_factory=default_users)

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir).expanduser() if self.data_dir else DATA_DIR

    @property
    def session_path(self) -> Path:
        return Path(self.session_dir).expanduser() if self.session_dir else SESSION_DIR

    def find_user(self, user_id: str) -> User:
        """Look up a user in the directory."""
        for user in self.users:
            if user.id == user_id:
                return user
        raise UnknownUser(f"Unknown user: {user_id}")


def parse_users(value: str) -> list[User]:
    """
    Parse the USERS setting.

    JSON format: [{"id": "...", "name": "...", "role": "Member", "group": "Grupo A"}]
    Simple format: "id:name[:group],..." - entries with a group are members,
    entries without are managers.
    """
    users = []
    if value.startswith("["):
        try:
            for item in json.loads(value):
                users.append(User.from_dict(item))
        except (json.JSONDecodeError, TypeError, MalformedStorage) as e:
            logger.warning(f"Failed to parse USERS JSON: {e}")
            return []
        return users

    for entry in value.split(","):
        entry = entry.strip()
        if not entry:
            continue
        parts = [p.strip() for p in entry.split(":", 2)]
        if len(parts) < 2:
            logger.warning(f"Skipping USERS entry without a name: {entry}")
            continue
        if len(parts) == 3 and parts[2]:
            try:
                group = Group(parts[2])
            except ValueError:
                logger.warning(f"Skipping USERS entry with unknown group: {entry}")
                continue
            users.append(User(id=parts[0], name=parts[1], role=Role.MEMBER, group=group))
        else:
            users.append(User(id=parts[0], name=parts[1], role=Role.MANAGER))
    return users


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from colih.conf file."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = value.strip()

        # Handle quoted values with inline comments: "value" # comment
        if value[:1] in ('"', "'"):
            quote = value[0]
            end_quote = value.find(quote, 1)
            value = value[1:end_quote] if end_quote != -1 else value[1:]
        elif not value.startswith("["):
            # Unquoted: strip inline comments
            if "#" in value:
                value = value.split("#")[0].strip()

        match key:
            case "data_dir":
                config.data_dir = value
            case "session_dir":
                config.session_dir = value
            case "users":
                users = parse_users(value)
                if users:
                    config.users = users
                else:
                    logger.warning("USERS setting produced no users, keeping defaults")
            case _:
                logger.debug(f"Ignoring unknown config key: {key}")

    return config
