from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from .errors import InvalidMove

BOARD_CELLS = 9                      # fixed 3x3 grid, indices 0-8
CENTER = 4
CORNERS = (0, 2, 6, 8)

# order matters: first match wins when reporting the winning line
WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),   # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),   # cols
    (0, 4, 8), (2, 4, 6),              # diags
)


class Mark(Enum):
    """
    cell contents; X always moves first
    """
    EMPTY = ''
    X = 'X'
    O = 'O'

    def opponent(self):
        if self is Mark.EMPTY:
            raise ValueError("empty cell has no opponent")
        return Mark.O if self is Mark.X else Mark.X


class OutcomeKind(Enum):
    ONGOING = "ongoing"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class Outcome:
    """
    result of a position: ongoing, win (with mark + line) or draw
    """
    kind: OutcomeKind
    mark: Optional[Mark] = None
    triple: Optional[Tuple[int, int, int]] = None

    @classmethod
    def ongoing(cls):
        return cls(OutcomeKind.ONGOING)

    @classmethod
    def draw(cls):
        return cls(OutcomeKind.DRAW)

    @classmethod
    def win(cls, mark, triple):
        return cls(OutcomeKind.WIN, mark, tuple(triple))

    @property
    def is_terminal(self):
        return self.kind is not OutcomeKind.ONGOING


def check_win(cells: Sequence[Mark], mark: Mark) -> bool:
    """
    true if any line is three of `mark`
    """
    if mark is Mark.EMPTY:
        return False
    return any(all(cells[i] is mark for i in line) for line in WIN_LINES)


def check_draw(cells: Sequence[Mark]) -> bool:
    """
    board full; only meaningful once neither side has a line
    """
    return all(c is not Mark.EMPTY for c in cells)


def winning_triple(cells: Sequence[Mark]) -> Optional[Tuple[int, int, int]]:
    # first completed line in WIN_LINES order, for highlighting
    for a, b, c in WIN_LINES:
        if cells[a] is not Mark.EMPTY and cells[a] is cells[b] is cells[c]:
            return (a, b, c)
    return None


def evaluate(cells: Sequence[Mark]) -> Outcome:
    """
    win beats draw: a full board with a line is a win
    """
    triple = winning_triple(cells)
    if triple is not None:
        return Outcome.win(cells[triple[0]], triple)
    if check_draw(cells):
        return Outcome.draw()
    return Outcome.ongoing()


def empty_cells(cells: Sequence[Mark]):
    return [i for i, c in enumerate(cells) if c is Mark.EMPTY]


class GameLogic:
    """
    tic-tac-toe board state and move application
    """
    def __init__(self):
        self.board_size = 3               # fixed 3x3 grid
        self._cells = [Mark.EMPTY] * BOARD_CELLS
        self.move_count = 0               # how many moves done

    @property
    def cells(self):
        # immutable snapshot for readers
        return tuple(self._cells)

    def apply_move(self, index, mark):
        """
        place mark on an empty cell, raises InvalidMove otherwise
        """
        if mark is Mark.EMPTY:
            raise InvalidMove("cannot place an empty mark")
        if (isinstance(index, bool) or not isinstance(index, int)
                or not 0 <= index < BOARD_CELLS):
            raise InvalidMove(f"cell {index!r} out of range")
        if self._cells[index] is not Mark.EMPTY:
            raise InvalidMove(f"cell {index} already taken by {self._cells[index].value}")
        self._cells[index] = mark
        self.move_count += 1

    def is_cell_empty(self, index):
        """
        true if index valid and cell blank
        """
        if 0 <= index < BOARD_CELLS:
            return self._cells[index] is Mark.EMPTY
        return False

    def check_win(self, mark):
        return check_win(self._cells, mark)

    def check_draw(self):
        return check_draw(self._cells)

    def winning_triple(self):
        return winning_triple(self._cells)

    def evaluate(self):
        return evaluate(self._cells)

    def empty_cells(self):
        return empty_cells(self._cells)

    def reset(self):
        """
        clear board and counters
        """
        self._cells = [Mark.EMPTY] * BOARD_CELLS
        self.move_count = 0
