"""
Capture loop.

Each cycle opens a new daemon connection, pulls one framebuffer,
converts it and hands the image to the display surface. The connection
is closed on every exit path, and a failed cycle is logged and skipped
so the next one can run.
"""

import logging
from typing import Optional, Protocol, Tuple

from adb_projector.core.adb import ADBProtocolError, ADBTargetRejectedError
from adb_projector.core.framebuffer import FramebufferError, FramebufferService
from adb_projector.core.image import (
    DisplayImage,
    rotate90,
    scale_to_fit,
    to_display_image,
)
from adb_projector.core.socket import ADBSocket, SocketConfig, SocketError

logger = logging.getLogger(__name__)


class DisplaySurface(Protocol):
    """What the capture loop needs from the window."""

    def is_closed(self) -> bool:
        ...

    def read_and_dispatch(self) -> bool:
        """Dispatch pending UI events; True if any were handled."""
        ...

    def viewport_size(self) -> Tuple[int, int]:
        ...

    def is_landscape(self) -> bool:
        ...

    def show_image(self, image: DisplayImage) -> None:
        ...

    def show_error(self, title: str, message: str) -> None:
        ...


class CaptureLoop:
    """
    Pull-and-display loop driven by the surface's event polling.

    Example:
        >>> loop = CaptureLoop(SocketConfig(), window)
        >>> loop.run()  # Returns when the window is closed
    """

    def __init__(
        self,
        socket_config: SocketConfig,
        surface: DisplaySurface,
        service: Optional[FramebufferService] = None,
        scale_to_window: bool = True,
    ):
        """
        Args:
            socket_config: Daemon address and I/O settings
            surface: Window receiving the images
            service: Framebuffer protocol client (default layouts if None)
            scale_to_window: Fit each image to the surface viewport
        """
        self.socket_config = socket_config
        self.surface = surface
        self.service = service or FramebufferService()
        self.scale_to_window = scale_to_window
        self.frames_shown = 0
        self.failed_cycles = 0

    def capture_once(
        self, landscape: bool = False, viewport: Optional[Tuple[int, int]] = None
    ) -> DisplayImage:
        """
        Run one capture on a fresh connection.

        Args:
            landscape: Rotate the image 90 degrees
            viewport: Box to fit the image into, or None to keep device size

        Returns:
            Converted image

        Raises:
            SocketError: Daemon unreachable or connection lost
            ADBTargetRejectedError: Daemon refused the device or the service
            FramebufferError: Unknown header version or undecodable payload
        """
        sock = ADBSocket(self.socket_config)
        try:
            sock.connect()
            if not self.service.select_target(sock):
                raise ADBTargetRejectedError("No USB device available")

            header = self.service.request_framebuffer(sock)
            if header is None:
                raise ADBTargetRejectedError("Framebuffer service refused")

            frame = self.service.read_payload(sock, header)
        finally:
            sock.close()

        image = to_display_image(frame)
        if landscape:
            image = rotate90(image)
        if viewport is not None:
            image = scale_to_fit(image, *viewport)
        return image

    def run_cycle(self) -> bool:
        """
        Capture one frame and show it.

        Returns:
            True if a frame was shown
        """
        landscape = self.surface.is_landscape()
        viewport: Optional[Tuple[int, int]] = None
        if self.scale_to_window:
            width, height = self.surface.viewport_size()
            if width > 0 and height > 0:
                viewport = (width, height)

        try:
            image = self.capture_once(landscape, viewport)
        except ADBProtocolError as e:
            logger.warning(f"Capture rejected: {e}")
        except SocketError as e:
            logger.warning(f"Capture failed: {e}")
        except FramebufferError as e:
            logger.error(f"Cannot decode framebuffer: {e}")
        else:
            self.surface.show_image(image)
            self.frames_shown += 1
            return True

        self.failed_cycles += 1
        return False

    def run(self) -> None:
        """Capture whenever the surface is idle until it is closed."""
        logger.info("Capture loop started")
        while not self.surface.is_closed():
            if not self.surface.read_and_dispatch():
                self.run_cycle()
        logger.info(
            f"Capture loop stopped ({self.frames_shown} frames, "
            f"{self.failed_cycles} failed cycles)"
        )
