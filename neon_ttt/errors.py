class GameError(Exception):
    """
    base for every rejected game request
    """


class InvalidMove(GameError):
    """cell occupied or index outside 0-8"""


class NotYourTurn(GameError):
    """actor is not the side to move"""


class SessionInactive(GameError):
    """move submitted after the game ended"""


class NoLegalMove(GameError):
    """opponent asked to move on a full board"""
