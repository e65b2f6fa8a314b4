"""
Configuration for the projector client.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from adb_projector.core.protocol import ADB_HOST, ADB_PORT
from adb_projector.core.socket import SocketConfig


@dataclass
class ProjectorConfig:
    """
    Configuration for the projector client.
    """
    # ADB daemon
    host: str = ADB_HOST
    port: int = ADB_PORT
    wait_time: float = 0.005  # Sleep while the socket is not ready (seconds)
    io_timeout: Optional[float] = None  # None = wait for the daemon forever
    strict_response: bool = False  # Require exactly "OKAY" instead of O..Y

    # Daemon respawn at startup
    adb_path: Optional[str] = None  # None = auto-detect
    restart_adb: bool = True
    adb_retry_attempts: int = 3

    # Window
    window_title: str = "Android Projector"
    window_size: Tuple[int, int] = (428, 240)
    landscape: bool = False
    scale_to_window: bool = True

    def socket_config(self) -> SocketConfig:
        """Socket settings derived from this configuration."""
        return SocketConfig(
            host=self.host,
            port=self.port,
            wait_time=self.wait_time,
            io_timeout=self.io_timeout,
        )


__all__ = [
    "ProjectorConfig",
]
