import logging
from enum import Enum

from PySide6.QtCore import QObject, QTimer, Signal, Slot

from . import config
from .errors import GameError, NotYourTurn, SessionInactive
from .game_logic import GameLogic, Mark, Outcome
from .opponent import HeuristicPlayer

logger = logging.getLogger(__name__)


class GameMode(Enum):
    PVP = "pvp"    # two humans on one board
    PVC = "pvc"    # human X against the computer O


class GameSession(QObject):
    """
    turn order, mode and end-of-game reporting on top of GameLogic.

    every move, human or computer, goes through the same submit path. in PVC
    mode the computer's reply is scheduled on a single-shot timer; while it is
    pending the session is locked and human input is refused. starting or
    resetting a session drops any pending reply.
    """
    move_applied = Signal(int, object)    # index, Mark
    turn_changed = Signal(object)         # Mark now to move
    game_ended = Signal(object)           # Outcome
    move_rejected = Signal(str)           # reason, for status display
    session_started = Signal(object)      # GameMode

    def __init__(self, mode=GameMode.PVP, computer_delay_ms=None, rng=None, parent=None):
        super().__init__(parent)
        self.game_logic = GameLogic()
        self.computer = HeuristicPlayer(Mark.O, rng)
        self.computer_delay_ms = (config.COMPUTER_DELAY_MS
                                  if computer_delay_ms is None else computer_delay_ms)
        self._mode = mode
        self._current = Mark.X
        self._active = True
        self._outcome = Outcome.ongoing()
        self._computer_pending = False
        self._generation = 0              # bumped on every (re)start
        self._scheduled_generation = 0
        self._computer_timer = QTimer(self)
        self._computer_timer.setSingleShot(True)
        self._computer_timer.timeout.connect(self._on_computer_timer)

    # ------------------------------------------------------------------
    # accessors
    # ------------------------------------------------------------------

    @property
    def board(self):
        return self.game_logic.cells

    @property
    def current_player(self):
        return self._current

    @property
    def is_active(self):
        return self._active

    @property
    def is_locked(self):
        # true while the computer's reply is scheduled but not yet played
        return self._computer_pending

    @property
    def outcome(self):
        return self._outcome

    @property
    def mode(self):
        return self._mode

    @property
    def computer_mark(self):
        return self.computer.mark if self._mode is GameMode.PVC else None

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------

    def start_session(self, mode):
        """
        fresh board, X to move, given mode
        """
        self.cancel_pending_move()
        self._mode = GameMode(mode)
        self.game_logic.reset()
        self._current = Mark.X
        self._active = True
        self._outcome = Outcome.ongoing()
        logger.info("new %s session", self._mode.value)
        self.session_started.emit(self._mode)
        self.turn_changed.emit(self._current)

    @Slot()
    def reset_session(self):
        # play again with the same mode
        self.start_session(self._mode)

    def cancel_pending_move(self):
        """
        drop a scheduled computer reply; it will never be applied
        """
        self._generation += 1
        if self._computer_timer.isActive():
            logger.debug("discarding pending computer move")
        self._computer_timer.stop()
        self._computer_pending = False

    # ------------------------------------------------------------------
    # moves
    # ------------------------------------------------------------------

    def submit_move(self, index, actor):
        """
        play `index` for `actor`; returns False (and emits move_rejected)
        when the request is refused, in which case nothing changes
        """
        try:
            self._play(index, actor, from_computer=False)
        except GameError as e:
            logger.info("rejected move %r by %s: %s", index, getattr(actor, "value", actor), e)
            self.move_rejected.emit(str(e))
            return False
        return True

    def _check_turn(self, actor, from_computer):
        if not self._active:
            raise SessionInactive("game is over, start a new one")
        if actor is not self._current:
            raise NotYourTurn(f"it is {self._current.value}'s turn")
        if not from_computer:
            if self._computer_pending:
                raise NotYourTurn("computer is thinking")
            if actor is self.computer_mark:
                raise NotYourTurn(f"{actor.value} is played by the computer")

    def _play(self, index, actor, from_computer):
        self._check_turn(actor, from_computer)
        self.game_logic.apply_move(index, actor)

        # settle every piece of state before anyone is notified
        self._outcome = self.game_logic.evaluate()
        if self._outcome.is_terminal:
            self._active = False
            logger.info("game over: %s %s", self._outcome.kind.value,
                        self._outcome.mark.value if self._outcome.mark else "")
            self.move_applied.emit(index, actor)
            self.game_ended.emit(self._outcome)
            return

        self._current = self._current.opponent()
        computer_turn = self._current is self.computer_mark
        if computer_turn:
            self._computer_pending = True
            self._scheduled_generation = self._generation
        generation = self._generation

        self.move_applied.emit(index, actor)
        self.turn_changed.emit(self._current)
        # a subscriber may have reset the session in the meantime
        if computer_turn and generation == self._generation:
            self._schedule_computer_move(generation)

    def _schedule_computer_move(self, generation):
        if self.computer_delay_ms <= 0:
            self._play_computer_move(generation)
        else:
            self._computer_timer.start(self.computer_delay_ms)

    @Slot()
    def _on_computer_timer(self):
        self._play_computer_move(self._scheduled_generation)

    def _play_computer_move(self, generation):
        # a reset since scheduling makes this reply stale
        if generation != self._generation:
            return
        self._computer_pending = False
        if not self._active:
            return
        try:
            index = self.computer.choose(self.game_logic.cells)
            self._play(index, self.computer.mark, from_computer=True)
        except GameError as e:
            # engine and controller disagree about the board
            logger.error("computer move failed: %s", e)
            self.move_rejected.emit(str(e))
