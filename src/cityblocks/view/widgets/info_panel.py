"""
City Detail Panel
Floating box showing the record of the block under the crosshair.
"""
from typing import Optional

from PySide6.QtWidgets import QFrame, QLabel, QVBoxLayout, QWidget
from PySide6.QtCore import Qt

from cityblocks.model.records import CityRecord
from cityblocks.view.formatting import detail_text


class InfoPanel(QFrame):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.setStyleSheet("""
            QFrame { background-color: rgba(255, 255, 255, 210); border-radius: 6px; border: 1px solid #ccc; }
            QLabel { background: transparent; border: none; padding: 1px 4px; }
        """)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 6, 8, 6)

        self.lbl_city = QLabel()
        self.lbl_emissions = QLabel()
        self.lbl_per_capita = QLabel()
        self.lbl_population = QLabel()

        for lbl in (self.lbl_city, self.lbl_emissions, self.lbl_per_capita, self.lbl_population):
            lbl.setTextFormat(Qt.RichText)
            layout.addWidget(lbl)

        self._record: Optional[CityRecord] = None
        self.hide()

    def show_record(self, record: Optional[CityRecord]) -> None:
        """Fill and show the panel, or hide it for None."""
        if record is None:
            self._record = None
            self.hide()
            return

        if record is not self._record:
            text = detail_text(record)
            self.lbl_city.setText(text.city)
            self.lbl_emissions.setText(text.emissions)
            self.lbl_per_capita.setText(text.per_capita)
            self.lbl_population.setText(text.population)
            self._record = record
            self.adjustSize()

        if not self.isVisible():
            self.show()
            self.raise_()

    @property
    def record(self) -> Optional[CityRecord]:
        return self._record
