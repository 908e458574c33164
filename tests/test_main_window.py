"""
Smoke tests for the window wiring; rendering itself is not checked.
"""

import pytest
from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QPalette
from PySide6.QtTest import QTest

from conftest import FixedRng, wait_ms
from neon_ttt.game_logic import Mark, Outcome
from neon_ttt.session import GameMode, GameSession
from neon_ttt.stats import StatsStore
from neon_ttt.ui.main_window import TicTacToeWindow


@pytest.fixture
def window(qapp, tmp_path):
    session = GameSession(computer_delay_ms=0, rng=FixedRng())
    w = TicTacToeWindow(session, StatsStore(tmp_path / "stats.ini"), result_delay_ms=10)
    yield w
    w.close()


class TestWindow:

    def test_starts_on_mode_picker(self, window):
        assert not window.mode_group.isHidden()
        assert window.board_widget.isHidden()

    def test_select_mode_shows_board(self, window):
        window.select_mode(GameMode.PVC)
        assert window.mode_group.isHidden()
        assert not window.board_widget.isHidden()
        assert window.mode_label.text() == "PLAYER VS COMPUTER"
        assert window.turn_label.text() == "TURN: X"

    def test_cell_click_plays_for_current_player(self, window):
        window.select_mode(GameMode.PVP)
        window.board_widget.cell_clicked.emit(4)
        assert window.session.board[4] is Mark.X
        assert window.turn_label.text() == "TURN: O"

    def test_rejection_shows_in_status(self, window):
        window.select_mode(GameMode.PVP)
        window.board_widget.cell_clicked.emit(4)
        window.board_widget.cell_clicked.emit(4)
        assert "already taken" in window.message_label.text()

    def test_finished_game_is_recorded_and_dialog_shown(self, window):
        window.select_mode(GameMode.PVP)
        for i in (0, 3, 1, 4, 2):
            window.board_widget.cell_clicked.emit(i)
        assert window.stats.snapshot()["wins"]["X"] == 1
        assert window.message_label.text() == "Player X Wins!"
        wait_ms(100)
        assert window.result_box is not None
        window.reset_game()
        assert window.result_box is None
        assert window.session.is_active

    def test_computer_win_is_named(self, window):
        window.select_mode(GameMode.PVC)
        title, message = window.result_text(Outcome.win(Mark.O, (2, 4, 6)))
        assert title == "COMPUTER WINS"
        assert message == "Computer Wins!"

    def test_draw_text(self, window):
        assert window.result_text(Outcome.draw()) == ("DRAW GAME", "It's a Draw!")

    def test_cell_at_maps_coordinates(self, window):
        board = window.board_widget
        board.resize(300, 300)
        assert board.cell_at(10, 10) == 0
        assert board.cell_at(150, 150) == 4
        assert board.cell_at(290, 290) == 8
        assert board.cell_at(-5, 10) is None


@pytest.fixture
def make_window(qapp, tmp_path):
    """Shown window factory so real key/mouse events reach the widgets."""
    windows = []

    def factory(delay=0):
        session = GameSession(computer_delay_ms=delay, rng=FixedRng())
        w = TicTacToeWindow(session, StatsStore(tmp_path / "stats.ini"), result_delay_ms=10)
        w.resize(400, 500)
        w.show()
        QTest.qWaitForWindowExposed(w)
        windows.append(w)
        return w

    yield factory
    for w in windows:
        w.close()


def click_cell(window, index):
    board = window.board_widget
    QTest.mouseClick(board, Qt.LeftButton, Qt.NoModifier,
                     board._cell_rect(index).center().toPoint())


def result_button(window, text):
    return next(b for b in window.result_box.buttons() if b.text() == text)


class TestKeyboard:

    def test_digit_keys_play_cells(self, make_window):
        w = make_window()
        w.select_mode(GameMode.PVP)
        QTest.keyClick(w, Qt.Key_5)
        QTest.keyClick(w, Qt.Key_1)
        assert w.session.board[4] is Mark.X
        assert w.session.board[0] is Mark.O

    def test_digit_keys_ignored_on_mode_picker(self, make_window):
        w = make_window()
        QTest.keyClick(w, Qt.Key_5)
        assert w.session.board[4] is Mark.EMPTY

    def test_r_resets(self, make_window):
        w = make_window()
        w.select_mode(GameMode.PVP)
        QTest.keyClick(w, Qt.Key_9)
        QTest.keyClick(w, Qt.Key_R)
        assert w.session.board == tuple([Mark.EMPTY] * 9)
        assert w.session.current_player is Mark.X

    def test_escape_returns_to_mode_picker(self, make_window):
        w = make_window()
        w.select_mode(GameMode.PVP)
        QTest.keyClick(w, Qt.Key_Escape)
        assert not w.mode_group.isHidden()
        assert w.board_widget.isHidden()

    def test_escape_closes_result_dialog_first(self, make_window):
        w = make_window()
        w.select_mode(GameMode.PVP)
        for key in (Qt.Key_1, Qt.Key_4, Qt.Key_2, Qt.Key_5, Qt.Key_3):
            QTest.keyClick(w, key)
        wait_ms(100)
        assert w.result_box is not None
        QTest.keyClick(w, Qt.Key_Escape)
        assert w.result_box is None
        assert not w.board_widget.isHidden()


class TestMouse:

    def test_click_plays_cell(self, make_window):
        w = make_window()
        w.select_mode(GameMode.PVP)
        click_cell(w, 7)
        assert w.session.board[7] is Mark.X

    def test_click_ignored_while_computer_thinks(self, make_window):
        w = make_window(delay=50)
        w.select_mode(GameMode.PVC)
        click_cell(w, 0)
        assert w.session.is_locked
        click_cell(w, 1)
        assert w.session.board[1] is Mark.EMPTY
        assert w.message_label.text() == "Computer is thinking..."
        wait_ms(200)
        assert w.session.board[4] is Mark.O
        click_cell(w, 1)
        assert w.session.board[1] is Mark.X

    def test_click_ignored_after_game_over(self, make_window):
        w = make_window()
        w.select_mode(GameMode.PVP)
        for i in (0, 3, 1, 4, 2):
            click_cell(w, i)
        assert not w.session.is_active
        before = w.session.board
        click_cell(w, 8)
        assert w.session.board == before
        assert w.message_label.text() == "Player X Wins!"


class TestResultDialog:

    def _finish_game(self, w):
        w.select_mode(GameMode.PVP)
        for i in (0, 3, 1, 4, 2):
            w.session.submit_move(i, w.session.current_player)
        wait_ms(100)
        assert w.result_box is not None

    def test_play_again_restarts_same_mode(self, make_window):
        w = make_window()
        self._finish_game(w)
        result_button(w, "Play Again").click()
        assert w.result_box is None
        assert w.session.is_active
        assert w.session.board == tuple([Mark.EMPTY] * 9)
        assert w.session.mode is GameMode.PVP
        assert not w.board_widget.isHidden()

    def test_change_mode_returns_to_picker(self, make_window):
        w = make_window()
        self._finish_game(w)
        result_button(w, "Change Mode").click()
        assert w.result_box is None
        assert not w.mode_group.isHidden()
        assert w.board_widget.isHidden()


class TestResetAction:

    def test_reset_disabled_on_mode_picker(self, window):
        assert not window.reset_action.isEnabled()
        window.select_mode(GameMode.PVP)
        assert window.reset_action.isEnabled()
        window.show_mode_selection()
        assert not window.reset_action.isEnabled()

    def test_reset_behind_picker_is_a_noop(self, window):
        window.select_mode(GameMode.PVP)
        window.board_widget.cell_clicked.emit(4)
        window.show_mode_selection()
        window.reset_game()
        assert window.message_label.text() == "Select a game mode."
        assert window.session.board[4] is Mark.X


class TestPalette:

    def test_neon_roles_applied(self, qapp):
        import main
        palette = main.neon_palette()
        for role, color in main.NEON_ROLES.items():
            assert palette.color(role) == color
        assert palette.color(QPalette.Disabled, QPalette.ButtonText) == QColor("#5a5a6e")
