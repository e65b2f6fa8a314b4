"""
ADB Daemon Management Module

This module wraps the ``adb`` executable for the few host commands the
projector needs around its socket client: locating adb, restarting the
daemon, and listing attached devices.

It also defines the ADB exception hierarchy shared by the request codec
and the capture loop.
"""

import os
import shutil
import subprocess
import logging
from typing import Optional, List
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class ADBDevice:
    """
    Represents a device known to the ADB daemon

    Attributes:
        serial: Device serial number or IP:port
        state: Device connection state as reported by ``adb devices``
    """

    serial: str
    state: str

    def is_ready(self) -> bool:
        """Check if device is ready for connection"""
        return self.state == "device"


class ADBError(Exception):
    """Base exception for ADB operations"""

    pass


class ADBCommandError(ADBError):
    """Exception raised when ADB command fails"""

    pass


class ADBProtocolError(ADBError):
    """Exception raised when the daemon answers a request unexpectedly"""

    pass


class ADBTargetRejectedError(ADBProtocolError):
    """Exception raised when the daemon refuses a transport or service request"""

    pass


class ADBManager:
    """
    ADB executable wrapper

    Example:
        >>> adb = ADBManager()
        >>> adb.restart_server()
        >>> devices = adb.list_devices()
    """

    def __init__(self, adb_path: Optional[str] = None, timeout: float = 30.0):
        """
        Initialize ADB manager

        Args:
            adb_path: Path to adb executable (default: auto-detect)
            timeout: Default timeout for ADB commands
        """
        self.adb_path = adb_path or self._find_adb_executable()
        self.timeout = timeout

    def _find_adb_executable(self) -> str:
        """
        Locate adb: the ``ADB`` variable, then PATH, then the SDK named by
        ``ANDROID_HOME``/``ANDROID_SDK_ROOT``.

        Raises:
            ADBError: If adb not found
        """
        candidates = [os.environ.get("ADB")]
        candidates.append(shutil.which("adb"))
        for sdk_var in ("ANDROID_HOME", "ANDROID_SDK_ROOT"):
            sdk = os.environ.get(sdk_var)
            if sdk:
                name = "adb.exe" if os.name == "nt" else "adb"
                candidates.append(os.path.join(sdk, "platform-tools", name))

        for path in candidates:
            if path and os.path.isfile(path):
                logger.debug(f"Using adb: {path}")
                return path

        raise ADBError(
            "adb not found; install Android Platform Tools or set ADB"
        )

    def _run(self, command: str) -> str:
        """
        Run ``adb <command>`` and return its stdout.

        Raises:
            ADBCommandError: Non-zero exit or timeout
            ADBError: adb could not be started
        """
        cmd = [self.adb_path, command]
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=self.timeout
            )
        except subprocess.TimeoutExpired as e:
            raise ADBCommandError(f"adb {command} timed out after {self.timeout}s") from e
        except OSError as e:
            raise ADBError(f"Cannot run {self.adb_path}: {e}") from e

        if result.returncode != 0:
            raise ADBCommandError(
                f"adb {command} exited with {result.returncode}: {result.stderr.strip()}"
            )
        return result.stdout

    def kill_server(self) -> None:
        """Stop the ADB daemon."""
        self._run("kill-server")

    def list_devices(self) -> List[ADBDevice]:
        """
        List devices known to the daemon.

        Starts the daemon if it is not running.

        Returns:
            List of ADBDevice objects

        Raises:
            ADBCommandError: If command fails
        """
        devices = []
        for line in self._run("devices").splitlines():
            parts = line.split()
            # Skip the banner and "* daemon started" lines
            if len(parts) != 2 or line.startswith(("List of devices", "*")):
                continue

            devices.append(ADBDevice(serial=parts[0], state=parts[1]))
            logger.debug(f"Found device: {parts[0]} ({parts[1]})")

        return devices

    def restart_server(self) -> List[ADBDevice]:
        """
        Kill and respawn the ADB daemon.

        A fresh daemon is sometimes required before the framebuffer
        service answers again.

        Returns:
            Devices reported by the respawned daemon
        """
        logger.info("Restarting ADB daemon")
        self.kill_server()
        return self.list_devices()
