from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import Qt, QSize, Signal, QPointF, QRectF
from PySide6.QtGui import QPainter, QColor, QPen

from ..game_logic import Mark

NEON_CYAN = QColor("#00f5ff")
NEON_PINK = QColor("#ff2e88")
GRID_COLOR = QColor("#3a3a5a")
WIN_FILL = QColor(255, 255, 255, 40)

MARK_COLORS = {Mark.X: NEON_CYAN, Mark.O: NEON_PINK}


class BoardWidget(QWidget):
    """
    custom widget to draw and click on the 3x3 board
    """
    cell_clicked = Signal(int)  # emits cell index 0-8

    def __init__(self, session, parent=None):
        super().__init__(parent)
        self.session = session  # read-only view of the game
        self.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        self.setMinimumSize(QSize(150, 150))
        self.setMouseTracking(True)     # hover preview
        self._hover = None

    def _accepts_input(self):
        return self.session.is_active and not self.session.is_locked

    def heightForWidth(self, width):
        # keep square shape
        return width

    def hasHeightForWidth(self):
        return True

    def _geometry(self):
        w, h = self.width(), self.height()
        side = min(w, h)
        return (w - side) / 2, (h - side) / 2, side / 3

    def _cell_rect(self, index):
        ox, oy, cell = self._geometry()
        r, c = divmod(index, 3)
        return QRectF(ox + c * cell, oy + r * cell, cell, cell)

    def cell_at(self, x, y):
        """
        map widget coords to a cell index, None outside the grid
        """
        ox, oy, cell = self._geometry()
        if cell <= 0 or not (ox <= x < ox + 3 * cell and oy <= y < oy + 3 * cell):
            return None
        col = min(int((x - ox) // cell), 2)
        row = min(int((y - oy) // cell), 2)
        return row * 3 + col

    def _draw_mark(self, painter, index, mark, alpha=255):
        rect = self._cell_rect(index)
        cx, cy = rect.center().x(), rect.center().y()
        rad = rect.width() / 2 * 0.6
        color = QColor(MARK_COLORS[mark]); color.setAlpha(alpha)
        painter.setPen(QPen(color, max(3, int(rect.width() * 0.06)), Qt.SolidLine, Qt.RoundCap))
        painter.setBrush(Qt.NoBrush)
        if mark is Mark.X:
            # two crossing lines
            painter.drawLine(QPointF(cx - rad, cy - rad), QPointF(cx + rad, cy + rad))
            painter.drawLine(QPointF(cx + rad, cy - rad), QPointF(cx - rad, cy + rad))
        else:
            painter.drawEllipse(QPointF(cx, cy), rad, rad)

    def paintEvent(self, event):
        """
        draw grid, marks, hover preview and winning line
        """
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.Antialiasing, True)
            painter.fillRect(self.rect(), QColor("#12121f"))
            ox, oy, cell = self._geometry()
            side = cell * 3
            # winning cells glow
            triple = self.session.outcome.triple
            if triple:
                for i in triple:
                    painter.fillRect(self._cell_rect(i), WIN_FILL)
            # grid lines
            painter.setPen(QPen(GRID_COLOR, 2))
            for i in range(1, 3):
                x = ox + i * cell
                painter.drawLine(int(x), int(oy), int(x), int(oy + side))
                y = oy + i * cell
                painter.drawLine(int(ox), int(y), int(ox + side), int(y))
            # marks
            for i, mark in enumerate(self.session.board):
                if mark is not Mark.EMPTY:
                    self._draw_mark(painter, i, mark)
            # ghost of the mark about to be placed
            if (self._hover is not None and self._accepts_input()
                    and self.session.board[self._hover] is Mark.EMPTY):
                self._draw_mark(painter, self._hover, self.session.current_player, alpha=110)
        finally:
            painter.end()

    def mouseMoveEvent(self, event):
        pos = event.position()
        hover = self.cell_at(pos.x(), pos.y())
        if hover != self._hover:
            self._hover = hover
            self.update()

    def leaveEvent(self, event):
        self._hover = None
        self.update()

    def mouseReleaseEvent(self, event):
        """
        handle clicks: map coords to board cell and emit
        """
        if not self._accepts_input():
            return
        pos = event.position()
        index = self.cell_at(pos.x(), pos.y())
        if index is not None:
            self.cell_clicked.emit(index)  # notify main window
