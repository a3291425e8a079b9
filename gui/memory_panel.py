"""Central widget that displays all 65536 memory words in a scrollable table."""
from PySide6.QtWidgets import QTableView, QWidget, QVBoxLayout
from PySide6.QtCore import Qt, QAbstractTableModel, QModelIndex

from lc3.memory import MEM_SIZE

MEM_COLS = 16  # 16 columns x 4096 rows == 64K words

class MemoryModel(QAbstractTableModel):
    def __init__(self, cpu):
        super().__init__()
        self.cpu = cpu

    # Qt model overrides
    def rowCount(self, parent=QModelIndex()):
        return MEM_SIZE // MEM_COLS

    def columnCount(self, parent=QModelIndex()):
        return MEM_COLS

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid() or role != Qt.DisplayRole:
            return None
        addr = index.row()*MEM_COLS + index.column()
        # raw access: reading KBDR through the bus would consume a key
        val = self.cpu.mem.raw_read(addr)
        return f"{val:04X}"

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole:
            return None
        if orientation == Qt.Horizontal:
            return f"+{section:X}"
        return f"{section*MEM_COLS:04X}"

    def refresh(self):
        top_left = self.index(0, 0)
        bottom_right = self.index(self.rowCount()-1, self.columnCount()-1)
        self.dataChanged.emit(top_left, bottom_right)

class MemoryPanel(QWidget):
    def __init__(self, cpu):
        super().__init__()
        self.model = MemoryModel(cpu)
        self.view = QTableView()
        self.view.setModel(self.model)
        self.view.horizontalHeader().setStretchLastSection(True)
        self.view.setSelectionMode(QTableView.NoSelection)
        layout = QVBoxLayout(self)
        layout.addWidget(self.view)
        self.setLayout(layout)

    def refresh(self):
        self.model.refresh()

    def show_address(self, addr: int):
        """Scroll so the row holding `addr` is visible."""
        self.view.scrollTo(self.model.index(addr // MEM_COLS, addr % MEM_COLS))
