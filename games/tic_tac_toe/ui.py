import logging

from PyQt6.QtWidgets import QWidget, QLabel, QGridLayout, QVBoxLayout, QHBoxLayout, QPushButton
from PyQt6.QtGui import QPixmap, QPainter, QPen, QColor, QFont
from PyQt6.QtCore import Qt, QTimer, QRect

from core.base_window import OverlayWindow
from core.settings import SettingsManager
from core.settings_panel import SettingsPanel
from core.sound_manager import SoundManager
from games.tic_tac_toe.logic import TicTacToeLogic, Mark, Outcome

logger = logging.getLogger(__name__)

MARK_COLORS = {
    Mark.X: "#4FC3F7",
    Mark.O: "#FF5252",
}
DRAW_COLOR = "yellow"
WIN_HIGHLIGHT = QColor(0, 255, 0, 50)

BUTTON_STYLE = (
    "QPushButton { background-color: rgba(0, 0, 0, 150); color: white; border-radius: 8px; padding: 6px 12px; }"
    "QPushButton:hover { background-color: rgba(0, 0, 0, 200); }"
)


def paint_mark(painter, mark, w, h, progress=1.0):
    """Draw X as two strokes or O as a circle; ``progress`` 0..1 draws part of it."""
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    pen_width = max(3, min(w, h) // 15)
    margin = int(min(w, h) * 0.25)

    if mark is Mark.X:
        pen = QPen(QColor(MARK_COLORS[Mark.X]))
        pen.setWidth(pen_width)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        painter.setPen(pen)

        # First stroke \ takes 0.0-0.5, second / takes 0.5-1.0
        p1 = min(progress * 2, 1.0)
        if p1 > 0:
            x2 = margin + (w - 2 * margin) * p1
            y2 = margin + (h - 2 * margin) * p1
            painter.drawLine(margin, margin, int(x2), int(y2))
        if progress > 0.5:
            p2 = (progress - 0.5) * 2
            x2 = (w - margin) - (w - 2 * margin) * p2
            y2 = margin + (h - 2 * margin) * p2
            painter.drawLine(w - margin, margin, int(x2), int(y2))

    elif mark is Mark.O:
        pen = QPen(QColor(MARK_COLORS[Mark.O]))
        pen.setWidth(pen_width)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)

        # Angles in 1/16 degree, full circle = 5760; start at the top
        span_angle = int(5760 * progress)
        rect = QRect(margin, margin, w - 2 * margin, h - 2 * margin)
        painter.drawArc(rect, 90 * 16, -span_angle)


class DrawingAnimation(QWidget):
    def __init__(self, parent, rect, mark, on_finish):
        super().__init__(parent)
        self.setGeometry(rect)
        self.mark = mark
        self.on_finish = on_finish
        self.progress = 0.0
        self.show()

        self.timer = QTimer(self)
        self.timer.timeout.connect(self.animate)
        self.timer.start(16)  # ~60 FPS

    def animate(self):
        self.progress += 0.05
        if self.progress >= 1.0:
            self.progress = 1.0
            self.timer.stop()
            self.on_finish(self)
            self.deleteLater()
        self.update()

    def cancel(self):
        """Stop without calling on_finish."""
        self.timer.stop()
        self.hide()
        self.deleteLater()

    def paintEvent(self, event):
        painter = QPainter(self)
        paint_mark(painter, self.mark, self.width(), self.height(), self.progress)
        painter.end()


class TicTacToeGame(OverlayWindow):
    """Hot-seat game window. Every command goes to the model, then the whole view is redrawn from it."""

    def __init__(self, logic=None, overlay_mode=True):
        super().__init__(overlay_mode=overlay_mode)
        self.logic = logic or TicTacToeLogic()
        self.settings = SettingsManager()
        self.sound = SoundManager()
        self.resize(400, 520)
        self.setWindowTitle("Tic-Tac-Toe")
        self.setWindowOpacity(self.settings.get("window_opacity"))

        self.hidden_cell = None  # Cell being drawn by DrawingAnimation
        self.animations = []

        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        root_layout = QHBoxLayout(self.central_widget)
        root_layout.setContentsMargins(0, 0, 0, 0)

        game_column = QWidget()
        self.main_layout = QVBoxLayout(game_column)
        self.main_layout.setContentsMargins(20, 20, 20, 20)
        root_layout.addWidget(game_column, stretch=1)

        # Status + settings button
        self.status_label = QLabel()
        self.status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.status_label.setFont(QFont("Arial", 16, QFont.Weight.Bold))
        self.status_label.setFixedHeight(40)

        self.settings_btn = QPushButton("⚙")
        self.settings_btn.setFixedSize(40, 40)
        self.settings_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self.settings_btn.setStyleSheet(
            "QPushButton { background: transparent; font-size: 20px; border: none; color: #aaa; } QPushButton:hover { color: white; }")

        header_layout = QHBoxLayout()
        header_layout.addWidget(self.status_label, stretch=1)
        header_layout.addWidget(self.settings_btn)
        self.main_layout.addLayout(header_layout)

        self.score_label = QLabel()
        self.score_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.score_label.setFont(QFont("Arial", 12, QFont.Weight.Bold))
        self.score_label.setStyleSheet("color: white; background-color: rgba(0, 0, 0, 120); border-radius: 8px; padding: 3px;")
        self.main_layout.addWidget(self.score_label)

        # Board
        self.board_container = QWidget()
        self.main_layout.addWidget(self.board_container, stretch=1)

        self.grid_layout = QGridLayout(self.board_container)
        self.grid_layout.setSpacing(0)
        self.grid_layout.setContentsMargins(0, 0, 0, 0)

        self.cells = []
        self._init_board_ui()

        # Round / match controls
        self.play_again_btn = QPushButton("Play again")
        self.new_match_btn = QPushButton("New match")
        buttons_layout = QHBoxLayout()
        for btn in (self.play_again_btn, self.new_match_btn):
            btn.setCursor(Qt.CursorShape.PointingHandCursor)
            btn.setStyleSheet(BUTTON_STYLE)
            buttons_layout.addWidget(btn)
        self.main_layout.addLayout(buttons_layout)

        self.settings_panel = SettingsPanel(self.central_widget)
        root_layout.addWidget(self.settings_panel)

        self.play_again_btn.clicked.connect(self.on_play_again)
        self.new_match_btn.clicked.connect(self.on_new_match)
        self.settings_btn.clicked.connect(self.on_settings_clicked)
        self.settings_panel.opacity_changed.connect(self.setWindowOpacity)
        self.settings_panel.always_on_top_changed.connect(self.set_always_on_top)

        self._update_ui()

    def _init_board_ui(self):
        for index in range(9):
            label = QLabel()
            label.setAlignment(Qt.AlignmentFlag.AlignCenter)
            label.setScaledContents(True)
            # Translucent black so the grid lines stay visible
            label.setStyleSheet("background-color: rgba(0, 0, 0, 50); border: 2px solid rgba(255, 255, 255, 100);")
            self.grid_layout.addWidget(label, index // 3, index % 3)
            self.cells.append(label)

    def showEvent(self, event):
        super().showEvent(event)
        self._update_ui()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._update_ui()

    def mousePressEvent(self, event):
        super().mousePressEvent(event)
        if self._action is not None:
            return  # Shift-drag of the window

        if event.button() == Qt.MouseButton.LeftButton:
            index = self._cell_at(event.position().toPoint())
            if index is not None:
                self.on_cell_clicked(index)

    def _cell_at(self, window_pos):
        board_pos = self.board_container.mapFrom(self, window_pos)
        w = self.board_container.width()
        h = self.board_container.height()
        if w < 3 or h < 3:
            return None
        if board_pos.x() < 0 or board_pos.y() < 0 or board_pos.x() >= w or board_pos.y() >= h:
            return None

        col = int(board_pos.x() // (w / 3))
        row = int(board_pos.y() // (h / 3))
        if 0 <= row < 3 and 0 <= col < 3:
            return row * 3 + col
        return None

    # --- commands ---

    def on_cell_clicked(self, index):
        if self.logic.is_game_over():
            return False

        mark = self.logic.get_current_player()
        if not self.logic.make_move(index):
            return False

        outcome = self.logic.get_outcome()
        if outcome is Outcome.WIN:
            self.sound.play("win")
        elif outcome is Outcome.DRAW:
            self.sound.play("draw")
        else:
            self.sound.play("move")

        self.start_animation(index, mark)
        return True

    def on_play_again(self):
        self.sound.play("click")
        self._cancel_animations()
        self.logic.reset_game()
        logger.info("New round, score X %d : O %d", *self.logic.get_scores())
        self._update_ui()

    def on_new_match(self):
        self.sound.play("click")
        self._cancel_animations()
        self.logic.reset_all()
        self._update_ui()

    def on_settings_clicked(self):
        self.sound.play("click")
        self.settings_panel.toggle()

    # --- rendering ---

    def status_text(self):
        """Status line text and its colour, read from the model."""
        if self.logic.is_draw():
            return "Draw!", DRAW_COLOR
        winner = self.logic.get_winner()
        if winner is not None:
            return f"Player {winner.value} wins!", MARK_COLORS[winner]
        player = self.logic.get_current_player()
        return f"Turn: {player.value}", MARK_COLORS[player]

    def _update_ui(self):
        game_over = self.logic.is_game_over()

        text, color = self.status_text()
        alpha = 180 if game_over else 150
        self.status_label.setText(text)
        self.status_label.setStyleSheet(
            f"color: {color}; background-color: rgba(0, 0, 0, {alpha}); border-radius: 10px; padding: 5px;")

        x_wins, o_wins = self.logic.get_scores()
        self.score_label.setText(f"X: {x_wins}  |  O: {o_wins}")

        self.play_again_btn.setVisible(game_over)

        cell_w = max(1, self.board_container.width() // 3)
        cell_h = max(1, self.board_container.height() // 3)
        winning_line = self.logic.get_winning_line()

        for index, label in enumerate(self.cells):
            pixmap = QPixmap(cell_w, cell_h)
            pixmap.fill(Qt.GlobalColor.transparent)

            painter = QPainter(pixmap)
            if index in winning_line:
                painter.fillRect(0, 0, cell_w, cell_h, WIN_HIGHLIGHT)
            if index != self.hidden_cell:
                paint_mark(painter, self.logic.get_player_at(index), cell_w, cell_h)
            painter.end()

            label.setPixmap(pixmap)
            label.setEnabled(not game_over)

    def start_animation(self, index, mark):
        # Hide the real cell while the stroke is drawn over it
        self.hidden_cell = index
        self._update_ui()

        label = self.cells[index]
        rect = label.geometry()
        offset = self.board_container.pos()
        final_rect = QRect(rect.topLeft() + offset, rect.size())

        anim = DrawingAnimation(self.board_container.parentWidget(), final_rect, mark, self.finish_animation)
        self.animations.append(anim)

    def finish_animation(self, anim):
        if anim in self.animations:
            self.animations.remove(anim)
        if not self.animations:
            self.hidden_cell = None
        self._update_ui()

    def _cancel_animations(self):
        # Strokes still running would paint over the cleared board
        for anim in self.animations:
            anim.cancel()
        self.animations = []
        self.hidden_cell = None
