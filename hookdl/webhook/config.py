"""Configuration for the webhook server."""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

from ..errors import ConfigurationError

# Load environment variables from .env file
load_dotenv()


@dataclass
class ServerOpts:
    """Options used to configure the webhook server."""

    listen_address: str = ":8080"

    # TLS is used only when both are set
    tls_cert: str = ""
    tls_key: str = ""

    # Logging
    log_dir: Optional[str] = None

    @property
    def tls_enabled(self) -> bool:
        return bool(self.tls_cert) and bool(self.tls_key)

    @property
    def tls_partially_configured(self) -> bool:
        return bool(self.tls_cert) != bool(self.tls_key)

    @property
    def host(self) -> str:
        return self._split_address()[0]

    @property
    def port(self) -> int:
        return self._split_address()[1]

    def _split_address(self) -> Tuple[str, int]:
        """Split ``host:port``; an empty host means every interface."""
        host, sep, port = self.listen_address.rpartition(":")
        if not sep:
            raise ConfigurationError(f"missing port in listen address {self.listen_address!r}")
        if host.startswith("[") and host.endswith("]"):
            host = host[1:-1]
        try:
            port_number = int(port)
        except ValueError:
            raise ConfigurationError(
                f"invalid port {port!r} in listen address {self.listen_address!r}"
            ) from None
        if not 0 <= port_number <= 65535:
            raise ConfigurationError(f"port out of range in listen address {self.listen_address!r}")
        return host or "0.0.0.0", port_number

    @classmethod
    def from_env(cls) -> "ServerOpts":
        """Create configuration from environment variables."""
        return cls(
            listen_address=os.getenv("HOOKDL_LISTEN_ADDRESS", ":8080"),
            tls_cert=os.getenv("HOOKDL_TLS_CERT", ""),
            tls_key=os.getenv("HOOKDL_TLS_KEY", ""),
            log_dir=os.getenv("HOOKDL_LOG_DIR", "logs"),
        )
