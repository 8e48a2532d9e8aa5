from __future__ import annotations

import os
from abc import ABC
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .exceptions import CompassConfigurationError


@dataclass
class Credentials(ABC):
    username: str = field(default=None)
    password: str = field(default=None, repr=False)
    hostname: str = field(default=None)

    other_info: dict | None = None

    def validate(self) -> None:
        self.username = (self.username or "").strip()
        self.password = self.password or ""
        self.hostname = (self.hostname or "").strip().rstrip("/")

        error = []
        if not self.username:
            error.append("username")
        if not self.password:
            error.append("password")
        if not self.hostname:
            error.append("hostname")

        if error:
            raise CompassConfigurationError(f"Please verify and correct these attributes: {error}")


@dataclass
class PathCredentials(Credentials):
    filename: str | Path = field(default_factory=lambda: Path.cwd().joinpath("credentials.yml"))

    def __post_init__(self):
        self.filename = Path(self.filename)

        try:
            cred_file: dict = yaml.safe_load(self.filename.read_text(encoding="utf8")) or {}
        except FileNotFoundError as e:
            raise CompassConfigurationError(f"Credentials file not found: {self.filename}") from e
        except yaml.YAMLError as e:
            raise CompassConfigurationError(f"Could not parse credentials file {self.filename}: {e}") from e

        if not isinstance(cred_file, dict):
            raise CompassConfigurationError(f"Credentials file {self.filename} must contain a mapping")

        self.username = cred_file.pop("username", None)
        self.password = cred_file.pop("password", None)
        self.hostname = cred_file.pop("hostname", None)

        self.other_info = cred_file


@dataclass
class EnvCredentials(Credentials):
    def __post_init__(self):
        self.username = os.getenv("COMPASS_USERNAME")
        self.password = os.getenv("COMPASS_PASSWORD")
        self.hostname = os.getenv("COMPASS_HOSTNAME")


@dataclass
class AppCredentials(Credentials):
    def __init__(self, username, password, hostname):
        self.username = username
        self.password = password
        self.hostname = hostname
        self.other_info = None
