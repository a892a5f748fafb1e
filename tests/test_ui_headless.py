import json
import os
import tempfile
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from core.settings import SettingsManager, SETTINGS_PATH_ENV  # noqa: E402
from games.tic_tac_toe.logic import Mark, TicTacToeLogic  # noqa: E402

try:
    from PyQt6.QtWidgets import QApplication
    from games.tic_tac_toe import ui
except ImportError as exc:  # Qt libraries missing on the host
    QApplication = None
    ui = None
    _import_error = exc


class TestGameWindowHeadless(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        if QApplication is None:
            raise unittest.SkipTest(f"PyQt6 unavailable: {_import_error}")
        cls.app = QApplication.instance() or QApplication([])

    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self._old_env = os.environ.get(SETTINGS_PATH_ENV)
        os.environ[SETTINGS_PATH_ENV] = os.path.join(self.temp_dir.name, "settings.json")
        SettingsManager._instance = None

        self.logic = TicTacToeLogic()
        self.window = ui.TicTacToeGame(logic=self.logic, overlay_mode=False)
        self.window.sound.muted = True

    def tearDown(self) -> None:
        self.window.close()
        self.window.deleteLater()
        SettingsManager._instance = None
        if self._old_env is None:
            os.environ.pop(SETTINGS_PATH_ENV, None)
        else:
            os.environ[SETTINGS_PATH_ENV] = self._old_env
        self.temp_dir.cleanup()

    def test_initial_view(self) -> None:
        self.assertEqual(self.window.status_label.text(), "Turn: X")
        self.assertEqual(self.window.score_label.text(), "X: 0  |  O: 0")
        self.assertTrue(self.window.play_again_btn.isHidden())
        self.assertFalse(self.window.new_match_btn.isHidden())

    def test_click_places_mark_and_switches_turn(self) -> None:
        self.assertTrue(self.window.on_cell_clicked(4))
        self.assertEqual(self.logic.get_player_at(4), Mark.X)
        self.assertEqual(self.window.status_label.text(), "Turn: O")
        self.assertFalse(self.window.on_cell_clicked(4))

    def test_win_shows_result_score_and_play_again(self) -> None:
        for pos in (0, 4, 1, 5, 2):
            self.window.on_cell_clicked(pos)

        self.assertEqual(self.window.status_label.text(), "Player X wins!")
        self.assertEqual(self.window.score_label.text(), "X: 1  |  O: 0")
        self.assertFalse(self.window.play_again_btn.isHidden())
        self.assertFalse(any(cell.isEnabled() for cell in self.window.cells))
        self.assertFalse(self.window.on_cell_clicked(8))

    def test_draw_status(self) -> None:
        for pos in (0, 1, 2, 4, 3, 5, 7, 6, 8):
            self.window.on_cell_clicked(pos)
        self.assertEqual(self.window.status_text(), ("Draw!", ui.DRAW_COLOR))

    def test_play_again_keeps_scores_and_new_match_clears_them(self) -> None:
        for pos in (0, 4, 1, 5, 2):
            self.window.on_cell_clicked(pos)

        self.window.play_again_btn.click()
        self.assertEqual(self.logic.get_board(), (Mark.EMPTY,) * 9)
        self.assertEqual(self.window.status_label.text(), "Turn: X")
        self.assertEqual(self.window.score_label.text(), "X: 1  |  O: 0")
        self.assertTrue(self.window.play_again_btn.isHidden())
        self.assertTrue(all(cell.isEnabled() for cell in self.window.cells))

        self.window.new_match_btn.click()
        self.assertEqual(self.logic.get_scores(), (0, 0))
        self.assertEqual(self.window.score_label.text(), "X: 0  |  O: 0")

    def test_reset_stops_running_stroke_animation(self) -> None:
        for reset_btn in (self.window.play_again_btn, self.window.new_match_btn):
            self.window.on_cell_clicked(4)
            anim = self.window.animations[-1]
            self.assertTrue(anim.timer.isActive())

            reset_btn.setVisible(True)
            reset_btn.click()
            self.assertEqual(self.window.animations, [])
            self.assertFalse(anim.timer.isActive())
            self.assertTrue(anim.isHidden())
            self.assertIsNone(self.window.hidden_cell)

    def test_windowed_mode_is_frameless_but_not_on_top(self) -> None:
        from PyQt6.QtCore import Qt

        flags = self.window.windowFlags()
        self.assertTrue(flags & Qt.WindowType.FramelessWindowHint)
        self.assertFalse(flags & Qt.WindowType.WindowStaysOnTopHint)
        self.assertFalse(self.window.overlay_mode)

    def test_entry_point_flags_and_logger(self) -> None:
        import main

        self.assertEqual(main.logger.name, main.__name__)
        self.assertTrue(main.parse_args(["--windowed"]).windowed)
        args = main.parse_args([])
        self.assertFalse(args.windowed)
        self.assertEqual(args.log_level, "INFO")

    def test_wrong_typed_settings_do_not_break_startup(self) -> None:
        with open(os.environ[SETTINGS_PATH_ENV], "w", encoding="utf-8") as f:
            json.dump({"window_opacity": "0.5", "volume": "loud"}, f)
        SettingsManager._instance = None

        window = ui.TicTacToeGame(overlay_mode=False)
        try:
            self.assertAlmostEqual(window.windowOpacity(), 1.0, places=2)
            self.assertEqual(window.settings_panel.slider_opacity.value(), 100)
            self.assertEqual(window.settings_panel.slider_vol.value(), 50)
        finally:
            window.close()
            window.deleteLater()

    def test_always_on_top_toggle_updates_window_flags(self) -> None:
        from PyQt6.QtCore import Qt

        self.assertFalse(self.window.windowFlags() & Qt.WindowType.WindowStaysOnTopHint)
        self.window.settings_panel.check_on_top.setChecked(False)
        self.window.settings_panel.check_on_top.setChecked(True)
        self.assertTrue(self.window.windowFlags() & Qt.WindowType.WindowStaysOnTopHint)
        self.assertTrue(SettingsManager().get("always_on_top"))

    def test_opacity_slider_updates_window_and_settings(self) -> None:
        self.window.settings_panel.slider_opacity.setValue(50)
        self.assertAlmostEqual(self.window.windowOpacity(), 0.5, places=2)
        self.assertEqual(SettingsManager().get("window_opacity"), 0.5)


if __name__ == "__main__":
    unittest.main()
