"""
godecls configuration

Handles configuration from environment variables. Configuration never
changes the classification output, only the default input file and the
diagnostic log level.
"""

import os
from dataclasses import dataclass

DEFAULT_FILE = "main.go"


@dataclass
class Config:
    """godecls configuration"""

    # File parsed by the default-path variant when no argument is given
    default_file: str = DEFAULT_FILE

    # Diagnostics go to stderr through loguru
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables"""
        return cls(
            default_file=os.environ.get("GODECLS_DEFAULT_FILE") or DEFAULT_FILE,
            log_level=os.environ.get("GODECLS_LOG_LEVEL", "WARNING").upper(),
        )
