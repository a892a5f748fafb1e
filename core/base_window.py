from PyQt6.QtWidgets import QMainWindow, QApplication
from PyQt6.QtCore import Qt, QPoint, QRect

MIN_SIZE = 200

# Mouse button held together with Shift -> drag action
DRAG_ACTIONS = {
    Qt.MouseButton.LeftButton: 'move',
    Qt.MouseButton.RightButton: 'resize',
}


class OverlayWindow(QMainWindow):
    """Frameless window: Shift+left drag moves it, Shift+right drag resizes it keeping proportions."""

    def __init__(self, overlay_mode=True):
        super().__init__()

        self._action = None
        self._start_pos = QPoint()
        self._start_frame = QRect()
        self._aspect_ratio = 1.0
        self.overlay_mode = overlay_mode

        # Keep the window from collapsing to nothing
        self.setMinimumSize(MIN_SIZE, MIN_SIZE)
        self.setWindowFlags(self._window_flags(overlay_mode))
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)

    @staticmethod
    def _window_flags(on_top):
        flags = Qt.WindowType.FramelessWindowHint
        if on_top:
            # Above other windows, no taskbar entry
            flags |= Qt.WindowType.WindowStaysOnTopHint | Qt.WindowType.Tool
        return flags

    def set_always_on_top(self, enabled):
        if enabled == self.overlay_mode:
            return
        self.overlay_mode = enabled
        was_visible = self.isVisible()
        self.setWindowFlags(self._window_flags(enabled))
        # Changing flags hides the window
        if was_visible:
            self.show()

    def mousePressEvent(self, event):
        self._action = None
        if QApplication.keyboardModifiers() == Qt.KeyboardModifier.ShiftModifier:
            self._action = DRAG_ACTIONS.get(event.button())

        if self._action is None:
            super().mousePressEvent(event)
            return

        self._start_pos = event.globalPosition().toPoint()
        self._start_frame = self.frameGeometry()
        if self._action == 'resize':
            h = self._start_frame.height()
            self._aspect_ratio = self._start_frame.width() / h if h > 0 else 1.0
        event.accept()

    def mouseMoveEvent(self, event):
        if self._action is None:
            super().mouseMoveEvent(event)
            return

        delta = event.globalPosition().toPoint() - self._start_pos

        if self._action == 'move':
            self.move(self._start_frame.topLeft() + delta)
            return

        # Follow the dominant axis so the drag feels smooth
        if abs(delta.x()) > abs(delta.y()):
            new_width = self._start_frame.width() + delta.x()
            new_height = int(new_width / self._aspect_ratio)
        else:
            new_height = self._start_frame.height() + delta.y()
            new_width = int(new_height * self._aspect_ratio)

        # Min size checked by hand so the proportions survive
        if new_width >= MIN_SIZE and new_height >= MIN_SIZE:
            self.resize(new_width, new_height)

    def mouseReleaseEvent(self, event):
        self._action = None
        super().mouseReleaseEvent(event)
