import logging
import random

from .errors import NoLegalMove
from .game_logic import CENTER, CORNERS, Mark, check_win, empty_cells

logger = logging.getLogger(__name__)


def _completing_cell(board, mark):
    """
    first empty cell that would give `mark` a line, or None
    """
    for i in empty_cells(board):
        board[i] = mark
        try:
            if check_win(board, mark):
                return i
        finally:
            board[i] = Mark.EMPTY   # undo the trial placement
    return None


def select_move(cells, own_mark, opponent_mark, rng=random):
    """
    pick a cell by fixed priority: win, block, center, corner, anything.

    `cells` is never modified; trial placements happen on a scratch copy.
    corner and fallback picks are uniform over the empty candidates, drawn
    from `rng` (anything with a `choice` method).
    """
    board = list(cells)
    free = empty_cells(board)
    if not free:
        raise NoLegalMove("no empty cell left to play")

    # 1) win now
    cell = _completing_cell(board, own_mark)
    if cell is not None:
        return cell
    # 2) block the opponent's line
    cell = _completing_cell(board, opponent_mark)
    if cell is not None:
        return cell
    # 3) center
    if board[CENTER] is Mark.EMPTY:
        return CENTER
    # 4) corner
    corners = [i for i in CORNERS if board[i] is Mark.EMPTY]
    if corners:
        return rng.choice(corners)
    # 5) whatever is left
    return rng.choice(free)


class HeuristicPlayer:
    """
    computer side bound to one mark
    """
    def __init__(self, mark=Mark.O, rng=None):
        self.mark = mark
        self.rng = rng or random.Random()

    def choose(self, cells):
        move = select_move(cells, self.mark, self.mark.opponent(), self.rng)
        logger.debug("computer %s picks cell %d", self.mark.value, move)
        return move
