"""The configuration file and the API client settings derived from it."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

import platformdirs
import tomli_w

from fpcli.manifest import Manifest

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.toml"


def default_config_file_path() -> Path:
    """The platform's configuration directory for this program, with config.toml."""
    return Path(platformdirs.user_config_dir("fiberplane-cli", "Fiberplane")) / CONFIG_FILE_NAME


def path_or_default(path: str | Path | None) -> Path:
    """Use the given path, putting config.toml in place of a directory; else the default."""
    if path is None:
        return default_config_file_path()
    path = Path(path)
    if path.is_dir():
        return path.with_name(CONFIG_FILE_NAME)
    return path


@dataclass
class Config:
    """The settings kept in the configuration file."""

    path: Path
    api_token: str | None = None

    @classmethod
    def load(cls, path: str | Path | None) -> Config:
        """Read the configuration, or start an empty one if the file does not exist."""
        path = path_or_default(path)
        logger.debug("loading config from: %s", path)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("no config file found, using default config")
            return cls(path=path)
        data = tomllib.loads(text)
        token = data.get("api_token")
        if token is not None and not isinstance(token, str):
            raise ValueError(f"api_token in {path} must be a string")
        return cls(path=path, api_token=token)

    def save(self) -> None:
        """Write the configuration, creating its directory if needed."""
        data = {"api_token": self.api_token} if self.api_token is not None else {}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(tomli_w.dumps(data), encoding="utf-8")
        logger.debug("saved config to: %s", self.path)


@dataclass(frozen=True)
class ApiClient:
    """Where to reach the API and what to send with every request."""

    server: str
    user_agent: str
    headers: dict[str, str] = field(default_factory=dict)


def _check_header_value(value: str) -> None:
    for byte in value.encode("utf-8"):
        if not (byte == 0x09 or (byte >= 0x20 and byte != 0x7F)):
            raise ValueError("invalid character in header value")


def api_client_configuration_from_token(token: str, base_url: str) -> ApiClient:
    """Build the API client settings that authenticate with the given token."""
    authorization = f"Bearer {token}"
    _check_header_value(authorization)
    return ApiClient(
        server=str(base_url),
        user_agent=f"fp {Manifest.from_env().build_version}",
        headers={"Authorization": authorization},
    )


def api_client_configuration(config_path: str | Path | None, base_url: str) -> ApiClient:
    """Build the API client settings from the token in the configuration file."""
    token = Config.load(config_path).api_token
    if token is None:
        raise RuntimeError("Must be logged in to run this command. Please run `fp login` first.")
    return api_client_configuration_from_token(token, base_url)