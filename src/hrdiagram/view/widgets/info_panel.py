"""
Star Info Panel
Floating overlay showing the data of the selected star.
"""
from html import escape

from PySide6.QtWidgets import QFrame, QLabel, QVBoxLayout, QWidget
from PySide6.QtCore import Qt

from hrdiagram.model.stars import StarRecord, format_star_info


class StarInfoPanel(QFrame):
    MARGIN = 20

    def __init__(self, parent: QWidget) -> None:
        super().__init__(parent)
        self.setObjectName("star-info")
        self.setStyleSheet("""
            QFrame#star-info { background-color: rgba(255, 255, 255, 204); border: 1px solid black; }
            QLabel { background: transparent; border: none; color: black; }
        """)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)

        self.label = QLabel()
        self.label.setTextFormat(Qt.RichText)
        layout.addWidget(self.label)

    def show_star(self, record: StarRecord) -> None:
        lines = [f"<b>{escape(key)}:</b> {escape(value)}" for key, value in format_star_info(record)]
        self.label.setText("<br>".join(lines))
        self.adjustSize()
        self.reposition()
        self.show()
        self.raise_()

    def reposition(self) -> None:
        """Pin to the top-right corner of the parent."""
        parent = self.parentWidget()
        if parent is None:
            return
        self.move(parent.width() - self.width() - self.MARGIN, self.MARGIN)
