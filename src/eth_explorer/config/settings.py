# File: src/eth_explorer/config/settings.py

import copy
import os
from typing import Any, Callable, Dict, Mapping, Optional, Tuple
from urllib.parse import urlsplit

import yaml
from dotenv import find_dotenv, load_dotenv

DEFAULT_ETHERSCAN_URL = "https://api.etherscan.io/v2/api"

DEFAULTS: Dict[str, Any] = {
    "server": {
        "host": "0.0.0.0",
        "port": 8080,
    },
    "node": {
        "url": "",
        "timeout": 10,
    },
    "etherscan": {
        "api_key": "",
        "base_url": DEFAULT_ETHERSCAN_URL,
        "chain_id": "1",
        "timeout": 10,
    },
    "logging": {
        "level": "INFO",
        "dir": None,
    },
}

# env var -> (dotted key, converter)
ENV_OVERRIDES: Dict[str, Tuple[str, Callable[[str], Any]]] = {
    "HOST": ("server.host", str),
    "PORT": ("server.port", int),
    "ETH_NODE_URL": ("node.url", str),
    "NODE_TIMEOUT": ("node.timeout", float),
    "ETHERSCAN_API_KEY": ("etherscan.api_key", str),
    "ETHERSCAN_BASE_URL": ("etherscan.base_url", str),
    "ETHERSCAN_CHAIN_ID": ("etherscan.chain_id", str),
    "ETHERSCAN_TIMEOUT": ("etherscan.timeout", float),
    "LOG_LEVEL": ("logging.level", str),
    "LOG_DIR": ("logging.dir", str),
}


class AppConfig:
    """Layered configuration: defaults, then an optional YAML file, then the environment."""

    def __init__(
        self,
        config_path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None
    ):
        self.config_path = config_path
        self.config = copy.deepcopy(DEFAULTS)

        if config_path:
            self._merge(self.config, self._load_file(config_path))

        self._apply_env(os.environ if environ is None else environ)

    def _load_file(self, path: str) -> Dict[str, Any]:
        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, 'r') as f:
            return yaml.safe_load(f) or {}

    def _merge(self, base: Dict[str, Any], overrides: Dict[str, Any]):
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                self._merge(base[key], value)
            else:
                base[key] = value

    def _apply_env(self, environ: Mapping[str, str]):
        for env_name, (key, convert) in ENV_OVERRIDES.items():
            raw = environ.get(env_name)
            if raw is None or raw == "":
                continue
            try:
                self.update(key, convert(raw))
            except ValueError as e:
                raise ValueError(f"Invalid value for {env_name}: {raw!r}") from e

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        try:
            keys = key.split('.')
            value = self.config
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def update(self, key: str, value: Any):
        """Update configuration value (in memory only)."""
        keys = key.split('.')
        config = self.config
        for k in keys[:-1]:
            config = config.setdefault(k, {})
        config[keys[-1]] = value

    @property
    def host(self) -> str:
        return self.get("server.host")

    @property
    def port(self) -> int:
        return int(self.get("server.port"))

    @property
    def eth_node_url(self) -> str:
        return self.get("node.url") or ""

    @property
    def etherscan_api_key(self) -> str:
        return self.get("etherscan.api_key") or ""

    def masked(self) -> Dict[str, Any]:
        """Copy of the configuration that is safe to print or log."""
        safe = copy.deepcopy(self.config)
        if safe["etherscan"].get("api_key"):
            safe["etherscan"]["api_key"] = "***"
        if safe["node"].get("url"):
            safe["node"]["url"] = redact_url(safe["node"]["url"])
        return safe


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load configuration, reading a .env file from the working directory first."""
    load_dotenv(find_dotenv(usecwd=True))
    return AppConfig(config_path or os.getenv("CONFIG_FILE"))


def redact_url(url: str) -> str:
    """Scheme and host of a URL; hosted node URLs carry the project key in the path or query."""
    if not url:
        return url
    parts = urlsplit(url)
    if not parts.scheme or not parts.hostname:
        return "***"
    host = parts.hostname
    if parts.port:
        host = f"{host}:{parts.port}"
    return f"{parts.scheme}://{host}"
