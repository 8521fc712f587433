"""
invokerpc — Server configuration

Settings come from keyword arguments, optionally loaded from a JSON
file, with ``INVOKERPC_HOST``, ``INVOKERPC_PORT`` and
``INVOKERPC_LOG_LEVEL`` taking precedence.  Example file::

    {
      "host": "127.0.0.1",
      "port": 10332,
      "address_version": 23,
      "contracts": {
        "0x<40 hex digits>": ["String", "Integer", "Array"]
      }
    }
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Union

from .keys import DEFAULT_ADDRESS_VERSION


class RPCConfig:
    """Configuration for the invocation RPC server."""

    def __init__(self, **kwargs):
        self.host: str = kwargs.get("host", "127.0.0.1")
        self.port: int = int(kwargs.get("port", 10332))
        self.cors_origins: str = kwargs.get("cors_origins", "*")
        self.max_request_size: int = kwargs.get("max_request_size", 1024 * 1024)
        self.rate_limit: int = kwargs.get("rate_limit", 100)
        self.address_version: int = kwargs.get("address_version", DEFAULT_ADDRESS_VERSION)
        self.contracts: Dict[str, List[str]] = kwargs.get("contracts", {})
        self.log_level: str = kwargs.get("log_level", "INFO")
        self._apply_env()

    def _apply_env(self):
        if os.environ.get("INVOKERPC_HOST"):
            self.host = os.environ["INVOKERPC_HOST"]
        if os.environ.get("INVOKERPC_PORT"):
            self.port = int(os.environ["INVOKERPC_PORT"])
        if os.environ.get("INVOKERPC_LOG_LEVEL"):
            self.log_level = os.environ["INVOKERPC_LOG_LEVEL"]

    @classmethod
    def load(cls, path: Union[str, Path]) -> "RPCConfig":
        """Read settings from a JSON file."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"config file {path} must hold a JSON object")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "host": self.host,
            "port": self.port,
            "cors_origins": self.cors_origins,
            "max_request_size": self.max_request_size,
            "rate_limit": self.rate_limit,
            "address_version": self.address_version,
            "contracts": dict(self.contracts),
            "log_level": self.log_level,
        }
