"""
Projector window for displaying captured device frames.

This module provides the main window that shows the latest frame in a
label, offers a View menu to switch between portrait and landscape, and
lets the capture loop poll Qt for pending events.
"""

import logging
from typing import Optional, Tuple

try:
    from PySide6.QtWidgets import QApplication, QLabel, QMainWindow, QMessageBox, QSizePolicy
    from PySide6.QtCore import QAbstractEventDispatcher, QEventLoop, Qt
    from PySide6.QtGui import QAction, QActionGroup, QImage, QPixmap
except ImportError:
    QApplication = None
    QLabel = None
    QMainWindow = None
    QMessageBox = None
    QSizePolicy = None
    QAbstractEventDispatcher = None
    QEventLoop = None
    Qt = None
    QAction = None
    QActionGroup = None
    QImage = None
    QPixmap = None

from adb_projector.core.image import DisplayImage

logger = logging.getLogger(__name__)


class ProjectorWindow(QMainWindow if QMainWindow else object):
    """
    Main window showing the mirrored device screen.

    The orientation is only read by the capture loop at the start of
    each cycle; the menu callbacks just record the choice.
    """

    def __init__(
        self,
        title: str = "Android Projector",
        size: Tuple[int, int] = (428, 240),
        landscape: bool = False,
        parent=None,
    ):
        """Initialize projector window."""
        if QMainWindow is None:
            raise RuntimeError("PySide6 is not available")

        super().__init__(parent)

        self._closed = False
        self._landscape = landscape

        self._image_label = QLabel()
        self._image_label.setAlignment(Qt.AlignCenter)
        self._image_label.setStyleSheet("background-color: black;")
        # Let the window shrink below the current pixmap size
        self._image_label.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        self.setCentralWidget(self._image_label)

        self._create_menu()

        self.setWindowTitle(title)
        self.resize(*size)

    def _create_menu(self) -> None:
        view_menu = self.menuBar().addMenu("&View")

        group = QActionGroup(self)
        group.setExclusive(True)

        self._portrait_action = QAction("Portrait", self, checkable=True)
        self._landscape_action = QAction("Landscape", self, checkable=True)
        self._portrait_action.setChecked(not self._landscape)
        self._landscape_action.setChecked(self._landscape)

        self._portrait_action.triggered.connect(lambda: self._set_landscape(False))
        self._landscape_action.triggered.connect(lambda: self._set_landscape(True))

        for action in (self._portrait_action, self._landscape_action):
            group.addAction(action)
            view_menu.addAction(action)

    def _set_landscape(self, landscape: bool) -> None:
        self._landscape = landscape
        logger.debug(f"Orientation set to {'landscape' if landscape else 'portrait'}")

    # ========================================================================
    # Display surface interface
    # ========================================================================

    def is_closed(self) -> bool:
        return self._closed

    def is_landscape(self) -> bool:
        return self._landscape

    def read_and_dispatch(self) -> bool:
        """
        Dispatch pending Qt events without blocking.

        Returns:
            True if any event was processed
        """
        dispatcher = QAbstractEventDispatcher.instance()
        if dispatcher is None:
            QApplication.processEvents()
            return False
        return dispatcher.processEvents(QEventLoop.ProcessEventsFlag.AllEvents)

    def viewport_size(self) -> Tuple[int, int]:
        """Size of the area available for the image."""
        return self._image_label.width(), self._image_label.height()

    def show_image(self, image: DisplayImage) -> None:
        """
        Display a frame.

        Args:
            image: RGB frame
        """
        qimage = QImage(
            image.pixels.tobytes(),
            image.width,
            image.height,
            image.width * 3,
            QImage.Format.Format_RGB888,
        ).copy()

        self._image_label.setPixmap(QPixmap.fromImage(qimage))

    def show_error(self, title: str, message: str) -> None:
        """Show a modal error dialog."""
        logger.error(f"{title}: {message}")
        QMessageBox.critical(self, title, message)

    def closeEvent(self, event) -> None:
        """Mark the surface closed so the capture loop stops."""
        self._closed = True
        logger.info("Projector window closed")
        super().closeEvent(event)


def create_projector_window(
    title: str = "Android Projector",
    size: Tuple[int, int] = (428, 240),
    landscape: bool = False,
) -> Optional[ProjectorWindow]:
    """
    Create the projector window, creating the QApplication if needed.

    Returns:
        ProjectorWindow instance, or None if PySide6 is not available
    """
    if QApplication is None:
        logger.error("PySide6 is not installed. Install with: pip install 'adb-projector[gui]'")
        return None

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
        app.setApplicationName(title)

    return ProjectorWindow(title=title, size=size, landscape=landscape)


__all__ = [
    "ProjectorWindow",
    "create_projector_window",
]
