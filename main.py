import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QPalette, QColor

from neon_ttt import config
from neon_ttt.logging_setup import setup_logging
from neon_ttt.ui.main_window import TicTacToeWindow

NEON_CYAN = QColor("#00f5ff")
NEON_PINK = QColor("#ff2e88")
NEON_PURPLE = QColor("#b967ff")
NIGHT = QColor("#0d0d1a")

# only the roles the neon theme moves away from Fusion's defaults
NEON_ROLES = {
    QPalette.Window: NIGHT,
    QPalette.Base: QColor("#12121f"),
    QPalette.WindowText: NEON_CYAN,
    QPalette.Button: QColor("#24143c"),
    QPalette.ButtonText: NEON_CYAN,
    QPalette.BrightText: NEON_PINK,
    QPalette.Highlight: NEON_PURPLE,
}


def neon_palette():
    palette = QPalette()
    for role, color in NEON_ROLES.items():
        palette.setColor(role, color)
    palette.setColor(QPalette.Disabled, QPalette.ButtonText, QColor("#5a5a6e"))
    return palette


def main():
    setup_logging()
    app = QApplication(sys.argv)
    app.setOrganizationName(config.ORG_NAME)
    app.setApplicationName(config.APP_NAME)
    app.setStyle('Fusion')
    app.setPalette(neon_palette())

    window = TicTacToeWindow()
    window.resize(480, 600)
    window.show()
    return app.exec()


if __name__ == '__main__':
    sys.exit(main())
