import logging

from ..game_logic import OutcomeKind
from ..session import GameMode, GameSession
from ..stats import StatsStore
from ..ui.board_widget import BoardWidget
from .. import config

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QLabel, QMenuBar, QMenu, QGroupBox,
    QMessageBox, QSizePolicy
)
from PySide6.QtGui import QAction, QFont
from PySide6.QtCore import Qt, QTimer, Slot

logger = logging.getLogger(__name__)

MODE_TITLES = {GameMode.PVP: "PLAYER VS PLAYER", GameMode.PVC: "PLAYER VS COMPUTER"}


class TicTacToeWindow(QMainWindow):
    """
    main window: mode picker, board, status line and result dialog
    """
    def __init__(self, session=None, stats=None, result_delay_ms=None):
        """
        init state, ui widgets, signals
        """
        super().__init__()
        self.session = session or GameSession()
        self.stats = stats or StatsStore()
        self.result_delay_ms = (config.RESULT_DELAY_MS
                                if result_delay_ms is None else result_delay_ms)
        self.board_widget = BoardWidget(self.session, parent=self)
        self.result_box = None
        # result dialog waits a beat so the final move is visible
        self._result_timer = QTimer(self)
        self._result_timer.setSingleShot(True)
        self._result_timer.timeout.connect(self._show_result)

        self._setup_ui()
        self._connect_session()
        self.show_mode_selection()

    def _setup_ui(self):
        '''window look + layout'''
        self.setWindowTitle("Neon Tic-Tac-Toe")
        self.setStyleSheet("""
            QMainWindow { background-color: #0d0d1a; }
            QPushButton { padding: 6px 14px; }
        """)
        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.main_layout = QVBoxLayout(self.central_widget)

        self._create_menu_bar()            # top menu
        self._create_mode_controls()       # pvp / pvc picker
        self.main_layout.addWidget(self.mode_group)
        self._create_game_header()         # mode + whose turn
        self.main_layout.addWidget(self.header_widget)
        self.main_layout.addWidget(self.board_widget, 1)
        self.board_widget.cell_clicked.connect(self._on_cell_clicked)

        self._create_bottom_controls()     # status + buttons
        self.main_layout.addWidget(self.controls_bottom_widget)

    def _create_menu_bar(self):
        '''game menu actions'''
        menu_bar = QMenuBar()
        game_menu = QMenu("Game", self)
        self.reset_action = QAction("Reset", self)
        self.reset_action.triggered.connect(self.reset_game)
        mode_action = QAction("Change Mode", self)
        mode_action.triggered.connect(self.show_mode_selection)
        clear_action = QAction("Clear Statistics", self)
        clear_action.triggered.connect(self._clear_stats)
        quit_action = QAction("Quit", self)
        quit_action.triggered.connect(self.close)
        for act in (self.reset_action, mode_action, clear_action): game_menu.addAction(act)
        game_menu.addSeparator(); game_menu.addAction(quit_action)
        menu_bar.addMenu(game_menu)
        self.setMenuBar(menu_bar)

    def _create_mode_controls(self):
        '''mode selection group'''
        self.mode_group = QGroupBox("Select Game Mode")
        layout = QHBoxLayout()
        self.pvp_button = QPushButton("Player vs Player")
        self.pvp_button.clicked.connect(lambda: self.select_mode(GameMode.PVP))
        self.pvc_button = QPushButton("Player vs Computer")
        self.pvc_button.clicked.connect(lambda: self.select_mode(GameMode.PVC))
        layout.addWidget(self.pvp_button); layout.addWidget(self.pvc_button)
        self.mode_group.setLayout(layout)

    def _create_game_header(self):
        self.header_widget = QWidget()
        hl = QHBoxLayout(self.header_widget)
        self.mode_label = QLabel("")
        self.turn_label = QLabel("")
        f = QFont(); f.setPointSize(13); f.setBold(True)
        for w in (self.mode_label, self.turn_label): w.setFont(f)
        hl.addWidget(self.mode_label); hl.addStretch(1); hl.addWidget(self.turn_label)

    def _create_bottom_controls(self):
        # status + stats + reset/change mode buttons
        self.controls_bottom_widget = QWidget()
        vl = QVBoxLayout(self.controls_bottom_widget)
        self.controls_bottom_widget.setStyleSheet("background: transparent;")
        hl = QHBoxLayout()
        self.message_label = QLabel("")
        f = QFont(); f.setPointSize(12); self.message_label.setFont(f)
        self.message_label.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)
        self.message_label.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        self.message_label.setWordWrap(True)
        self.reset_button = QPushButton("Reset"); self.reset_button.clicked.connect(self.reset_game)
        self.change_mode_button = QPushButton("Change Mode")
        self.change_mode_button.clicked.connect(self.show_mode_selection)
        for w in (self.message_label, None, self.change_mode_button, self.reset_button):
            if w: hl.addWidget(w)
            else: hl.addStretch(1)
        vl.addLayout(hl)
        self.stats_label = QLabel("")
        self.stats_label.setStyleSheet("color: #888;")
        vl.addWidget(self.stats_label)
        self._update_stats_label()

    def _connect_session(self):
        s = self.session
        s.move_applied.connect(self._on_move_applied)
        s.turn_changed.connect(self._on_turn_changed)
        s.game_ended.connect(self._on_game_ended)
        s.move_rejected.connect(self._on_move_rejected)
        s.session_started.connect(self._on_session_started)

    @Slot(str)
    def _update_message(self, text, is_error=False,
                         is_success=False, is_turn=False):
        # set message text + style
        style = "color: #eee;"
        if is_error:   style = "color: #ff2e88; font-weight: bold;"
        elif is_success: style = "color: #b967ff; font-weight: bold;"
        elif is_turn:    style = "color: #00f5ff; font-weight: bold;"
        self.message_label.setStyleSheet(style)
        self.message_label.setText(text)

    def _update_stats_label(self):
        st = self.stats.snapshot()
        w = st["wins"]
        self.stats_label.setText(
            f"games {st['gamesPlayed']}  |  X {w['X']}  O {w['O']}  draws {w['draws']}"
        )

    def _player_name(self, mark):
        if mark is self.session.computer_mark:
            return "Computer"
        return f"Player {mark.value}"

    # ------------------------------------------------------------------
    # mode / reset
    # ------------------------------------------------------------------

    @Slot()
    def show_mode_selection(self):
        # back to the picker, stop anything in flight
        self._close_result()
        self.session.cancel_pending_move()
        self.mode_group.setVisible(True)
        self.header_widget.setVisible(False)
        self.board_widget.setVisible(False)
        self.controls_bottom_widget.setVisible(False)
        self.reset_action.setEnabled(False)
        self._update_message("Select a game mode.")

    def select_mode(self, mode):
        self.mode_group.setVisible(False)
        self.header_widget.setVisible(True)
        self.board_widget.setVisible(True)
        self.controls_bottom_widget.setVisible(True)
        self.reset_action.setEnabled(True)
        self._close_result()
        self.session.start_session(mode)
        self.board_widget.update()

    @Slot()
    def reset_game(self):
        # same mode, fresh board; nothing to reset behind the mode picker
        if self.board_widget.isHidden():
            return
        self._close_result()
        self.session.reset_session()
        self.board_widget.update()

    def _close_result(self):
        self._result_timer.stop()
        if self.result_box is not None:
            self.result_box.close()
            self.result_box = None

    # ------------------------------------------------------------------
    # session events
    # ------------------------------------------------------------------

    @Slot(int)
    def _on_cell_clicked(self, index):
        # the window always speaks for whoever is to move
        self.session.submit_move(index, self.session.current_player)

    @Slot(object)
    def _on_session_started(self, mode):
        self.mode_label.setText(MODE_TITLES[mode])

    @Slot(int, object)
    def _on_move_applied(self, index, mark):
        self.board_widget.update()

    @Slot(object)
    def _on_turn_changed(self, mark):
        self.turn_label.setText(f"TURN: {mark.value}")
        if mark is self.session.computer_mark:
            self._update_message("Computer is thinking...")
        else:
            self._update_message(f"{self._player_name(mark)}'s turn", is_turn=True)

    @Slot(str)
    def _on_move_rejected(self, reason):
        self._update_message(reason, is_error=True)

    @Slot(object)
    def _on_game_ended(self, outcome):
        self.board_widget.update()
        self.stats.record(outcome, self.session.mode)
        self._update_stats_label()
        _, message = self.result_text(outcome)
        self._update_message(message, is_success=True)
        self._result_timer.start(self.result_delay_ms)

    def result_text(self, outcome):
        """
        (title, message) for the end-of-game dialog
        """
        if outcome.kind is OutcomeKind.DRAW:
            return "DRAW GAME", "It's a Draw!"
        name = self._player_name(outcome.mark)
        return f"{name.upper()} WINS", f"{name} Wins!"

    @Slot()
    def _show_result(self):
        outcome = self.session.outcome
        if not outcome.is_terminal:
            return
        title, message = self.result_text(outcome)
        box = QMessageBox(self)
        box.setWindowTitle(title)
        box.setText(message)
        again = box.addButton("Play Again", QMessageBox.AcceptRole)
        change = box.addButton("Change Mode", QMessageBox.ActionRole)
        again.clicked.connect(self.reset_game)
        change.clicked.connect(self.show_mode_selection)
        self.result_box = box
        box.open()

    @Slot()
    def _clear_stats(self):
        logger.info("statistics cleared")
        self.stats.clear()
        self._update_stats_label()

    # ------------------------------------------------------------------
    # keyboard: 1-9 cells, R reset, Esc mode picker
    # ------------------------------------------------------------------

    def keyPressEvent(self, event):
        key = int(event.key())
        in_game = not self.board_widget.isHidden()
        if in_game and int(Qt.Key_1) <= key <= int(Qt.Key_9):
            if self.session.is_active and not self.session.is_locked:
                self._on_cell_clicked(key - int(Qt.Key_1))
        elif in_game and key == Qt.Key_R:
            self.reset_game()
        elif key == Qt.Key_Escape:
            if self.result_box is not None:
                self._close_result()
            else:
                self.show_mode_selection()
        else:
            super().keyPressEvent(event)

    def closeEvent(self, event):
        # make sure no timer fires into a dead window
        self._close_result()
        self.session.cancel_pending_move()
        event.accept()
