import logging
import os
import sys
from PyQt6.QtMultimedia import QSoundEffect
from PyQt6.QtCore import QUrl

logger = logging.getLogger(__name__)

# Sound name -> file in assets/sounds/
SOUND_FILES = {
    "click": "click.wav",  # Buttons
    "move": "move.wav",  # Mark placed
    "win": "win.wav",
    "draw": "draw.wav",
}


class SoundManager:
    _instance = None  # Singleton

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(SoundManager, cls).__new__(cls)
            cls._instance.sounds = {}
            cls._instance.muted = False
            cls._instance.volume = 0.5  # 0.0 to 1.0
            cls._instance.load_sounds()
        return cls._instance

    def resource_path(self, relative_path):
        """Path to a resource inside a frozen bundle or the project folder."""
        base_path = getattr(sys, "_MEIPASS", os.path.abspath("."))
        return os.path.join(base_path, relative_path)

    def load_sounds(self):
        for name, filename in SOUND_FILES.items():
            full_path = self.resource_path(os.path.join("assets", "sounds", filename))

            if os.path.exists(full_path):
                effect = QSoundEffect()
                effect.setSource(QUrl.fromLocalFile(full_path))
                effect.setVolume(self.volume)
                self.sounds[name] = effect
            else:
                logger.warning("Sound not found: %s", full_path)

    def play(self, name):
        if self.muted:
            return
        effect = self.sounds.get(name)
        if effect is None:
            return
        # Restart if still playing (fast clicks)
        if effect.isPlaying():
            effect.stop()
        effect.play()

    def set_volume(self, vol):
        """vol: 0.0 to 1.0"""
        self.volume = vol
        for effect in self.sounds.values():
            effect.setVolume(vol)

    def toggle_mute(self):
        self.muted = not self.muted
