"""
Projector client.

Wires the window, the ADB daemon respawn logic and the capture loop
together, and provides the ``adb-projector`` console entry point.
"""

import logging
import sys
from typing import Optional

from adb_projector.client.config import ProjectorConfig
from adb_projector.core.adb import ADBError, ADBManager
from adb_projector.core.capture import CaptureLoop, DisplaySurface
from adb_projector.core.framebuffer import FramebufferService
from adb_projector.core.socket import ADBSocket, SocketError

logger = logging.getLogger(__name__)

CONNECT_ERROR_TITLE = "Failed to connect to device"
CONNECT_ERROR_MESSAGE = (
    "Make sure your device is plugged in and 'USB debugging' is enabled "
    "in Settings -> Developer options."
)


class ProjectorClient:
    """
    Screen projector for a USB-attached Android device.

    Example:
        >>> client = ProjectorClient(ProjectorConfig(landscape=True))
        >>> sys.exit(client.run())
    """

    def __init__(
        self,
        config: Optional[ProjectorConfig] = None,
        surface: Optional[DisplaySurface] = None,
        adb: Optional[ADBManager] = None,
    ):
        """
        Args:
            config: Client configuration (defaults if None)
            surface: Display surface (a ProjectorWindow is created if None)
            adb: ADB executable wrapper (created on first restart if None)
        """
        self.config = config or ProjectorConfig()
        self.surface = surface
        self._adb = adb
        self.service = FramebufferService(strict_response=self.config.strict_response)

    @property
    def adb(self) -> ADBManager:
        if self._adb is None:
            self._adb = ADBManager(adb_path=self.config.adb_path)
        return self._adb

    def probe(self) -> bool:
        """
        Check that the daemon answers and a USB device can be selected.

        Raises:
            SocketError: If the daemon is unreachable
        """
        with ADBSocket(self.config.socket_config()) as sock:
            sock.connect()
            return self.service.select_target(sock)

    def init_adb(self) -> bool:
        """
        Make sure the daemon is running and sees a device.

        Restarts the daemon before each probe when ``restart_adb`` is set,
        for up to ``adb_retry_attempts`` retries after the first attempt.

        Returns:
            True once a probe succeeds, False after the last attempt fails
        """
        retries = self.config.adb_retry_attempts
        for attempt in range(1, retries + 2):
            try:
                if self.config.restart_adb:
                    devices = self.adb.restart_server()
                    ready = [d for d in devices if d.is_ready()]
                    logger.info(f"ADB daemon sees {len(ready)} of {len(devices)} device(s) ready")
                if self.probe():
                    logger.info("Connected to ADB daemon")
                    return True
                logger.warning("ADB daemon has no USB device")
            except (ADBError, SocketError) as e:
                logger.warning(f"ADB not ready: {e}")

            logger.warning(f"Failed attempt: {attempt} of {retries + 1}")

        return False

    def _create_surface(self) -> Optional[DisplaySurface]:
        from adb_projector.core.player import create_projector_window

        window = create_projector_window(
            title=self.config.window_title,
            size=self.config.window_size,
            landscape=self.config.landscape,
        )
        if window is not None:
            window.show()
        return window

    def run(self) -> int:
        """
        Open the window and mirror the device until it is closed.

        Returns:
            Process exit status
        """
        if self.surface is None:
            self.surface = self._create_surface()
            if self.surface is None:
                return 1

        if not self.init_adb():
            self.surface.show_error(CONNECT_ERROR_TITLE, CONNECT_ERROR_MESSAGE)
            return 1

        loop = CaptureLoop(
            self.config.socket_config(),
            self.surface,
            service=self.service,
            scale_to_window=self.config.scale_to_window,
        )
        loop.run()
        return 0


def main():
    """Console entry point for the adb-projector command."""
    import argparse

    parser = argparse.ArgumentParser(
        description="adb-projector - Mirror an Android device screen over ADB"
    )
    parser.add_argument("--host", default="127.0.0.1", help="ADB daemon host")
    parser.add_argument("--port", type=int, default=5037, help="ADB daemon port")
    parser.add_argument("--adb", help="Path to the adb executable")
    parser.add_argument(
        "--landscape", action="store_true", help="Start in landscape orientation"
    )
    parser.add_argument(
        "--no-scale", action="store_true", help="Show frames at device resolution"
    )
    parser.add_argument(
        "--no-restart", action="store_true", help="Do not restart the ADB daemon"
    )
    parser.add_argument(
        "--strict", action="store_true", help="Require exact OKAY responses"
    )
    parser.add_argument(
        "--timeout", type=float, default=None, help="I/O timeout in seconds"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = ProjectorConfig(
        host=args.host,
        port=args.port,
        adb_path=args.adb,
        landscape=args.landscape,
        scale_to_window=not args.no_scale,
        restart_adb=not args.no_restart,
        strict_response=args.strict,
        io_timeout=args.timeout,
    )

    try:
        sys.exit(ProjectorClient(config).run())
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(0)


__all__ = [
    "ProjectorClient",
    "main",
]
