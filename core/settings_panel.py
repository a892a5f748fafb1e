from PyQt6.QtWidgets import (QFrame, QVBoxLayout, QLabel, QSlider, QCheckBox,
                             QPushButton, QHBoxLayout)
from PyQt6.QtCore import Qt, QPropertyAnimation, QEasingCurve, pyqtSignal
from PyQt6.QtGui import QFont

from core.settings import SettingsManager
from core.sound_manager import SoundManager

PANEL_WIDTH = 220


class SettingsPanel(QFrame):
    # The game window applies these live
    opacity_changed = pyqtSignal(float)
    always_on_top_changed = pyqtSignal(bool)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.settings = SettingsManager()
        self.sound = SoundManager()

        # Collapsed until toggled
        self.setMaximumWidth(0)
        self.setStyleSheet("""
            QFrame {
                background-color: rgba(44, 62, 80, 230);
                border-radius: 10px;
            }
            QLabel { color: white; font-weight: bold; font-size: 13px; border: none; background: transparent; }
            QCheckBox { color: white; border: none; background: transparent; }
            QSlider::handle:horizontal {
                background: #3498db; width: 16px; margin: -5px 0; border-radius: 8px;
            }
        """)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(15, 15, 15, 15)
        layout.setSpacing(15)

        header_layout = QHBoxLayout()
        lbl_title = QLabel("Settings")
        lbl_title.setFont(QFont("Arial", 14, QFont.Weight.Bold))
        header_layout.addWidget(lbl_title)

        btn_close = QPushButton("✕")
        btn_close.setCursor(Qt.CursorShape.PointingHandCursor)
        btn_close.setFixedSize(26, 26)
        btn_close.setStyleSheet("background: transparent; color: #aaa; border: none; font-size: 16px;")
        btn_close.clicked.connect(self.toggle)
        header_layout.addWidget(btn_close)
        layout.addLayout(header_layout)

        # --- Sound ---
        layout.addWidget(QLabel("Volume"))
        self.slider_vol = QSlider(Qt.Orientation.Horizontal)
        self.slider_vol.setRange(0, 100)
        self.slider_vol.setValue(int(self.settings.get("volume") * 100))
        self.slider_vol.valueChanged.connect(self.update_volume)
        layout.addWidget(self.slider_vol)

        self.check_mute = QCheckBox("Mute")
        self.check_mute.setChecked(bool(self.settings.get("mute")))
        self.check_mute.toggled.connect(self.update_mute)
        layout.addWidget(self.check_mute)

        # --- Window ---
        layout.addWidget(QLabel("Window opacity"))
        self.slider_opacity = QSlider(Qt.Orientation.Horizontal)
        self.slider_opacity.setRange(20, 100)
        self.slider_opacity.setValue(int(self.settings.get("window_opacity") * 100))
        self.slider_opacity.valueChanged.connect(self.update_opacity)
        layout.addWidget(self.slider_opacity)

        self.check_on_top = QCheckBox("Always on top")
        self.check_on_top.setChecked(bool(self.settings.get("always_on_top")))
        self.check_on_top.toggled.connect(self.update_on_top)
        layout.addWidget(self.check_on_top)

        layout.addStretch()

        self.anim = QPropertyAnimation(self, b"maximumWidth")
        self.anim.setDuration(300)
        self.anim.setEasingCurve(QEasingCurve.Type.OutCubic)

        self.is_open = False

    def toggle(self):
        if self.is_open:
            self.anim.setStartValue(PANEL_WIDTH)
            self.anim.setEndValue(0)
        else:
            self.anim.setStartValue(0)
            self.anim.setEndValue(PANEL_WIDTH)
        self.is_open = not self.is_open
        self.anim.start()

    def update_volume(self, val):
        vol = val / 100.0
        self.settings.set("volume", vol)
        self.sound.set_volume(vol)

    def update_mute(self, checked):
        self.settings.set("mute", checked)
        self.sound.muted = checked

    def update_opacity(self, val):
        opacity = val / 100.0
        self.settings.set("window_opacity", opacity)
        self.opacity_changed.emit(opacity)

    def update_on_top(self, checked):
        self.settings.set("always_on_top", checked)
        self.always_on_top_changed.emit(checked)
