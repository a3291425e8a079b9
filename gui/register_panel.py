from PySide6.QtWidgets import QWidget, QLabel, QLineEdit, QGridLayout, QMessageBox
from PySide6.QtCore import Qt, Slot
from lc3.registers import GENERAL_REGS, SPECIAL_REGS

class RegisterPanel(QWidget):
    """
    Grid of the 8 GPRs (editable) and PC / IR / PSR (read-only),
    plus the current condition code.
    """
    def __init__(self, cpu, parent=None):
        super().__init__(parent)
        self.cpu = cpu
        self.edits = []
        self.setObjectName("Registers")

        layout = QGridLayout(self)

        # general registers R0–R7
        for i in range(GENERAL_REGS):
            lbl = QLabel(f"R{i}")
            edit = QLineEdit()
            edit.setAlignment(Qt.AlignRight)
            edit.editingFinished.connect(self.register_edited)
            edit.setObjectName(f"R{i}")
            layout.addWidget(lbl, i, 0)
            layout.addWidget(edit, i, 1)
            self.edits.append(edit)

        # special registers
        for row, name in enumerate(SPECIAL_REGS, GENERAL_REGS):
            lbl = QLabel(name)
            edit = QLineEdit()
            edit.setReadOnly(True)
            edit.setAlignment(Qt.AlignRight)
            layout.addWidget(lbl, row, 0)
            layout.addWidget(edit, row, 1)
            self.edits.append(edit)

        row = GENERAL_REGS + len(SPECIAL_REGS)
        layout.addWidget(QLabel("CC"), row, 0)
        self.cc = QLabel()
        self.cc.setAlignment(Qt.AlignRight)
        layout.addWidget(self.cc, row, 1)

        layout.setColumnStretch(1, 1)

        # Flag to prevent editing during update
        self.updating = False
        self.refresh()

    @Slot()
    def refresh(self):
        """Update register display from CPU state"""
        self.updating = True
        for i in range(GENERAL_REGS):
            self.edits[i].setText(f"{self.cpu.reg[i]:04X}")
        specials = [self.cpu.reg.pc, self.cpu.reg.ir, self.cpu.reg.psr]
        for j, val in enumerate(specials, start=GENERAL_REGS):
            self.edits[j].setText(f"{val:04X}")
        self.cc.setText(self.cpu.reg.flags)
        self.updating = False

    @Slot()
    def register_edited(self):
        """Handle direct editing of register values"""
        if self.updating:
            return

        sender = self.sender()
        if not sender:
            return

        try:
            reg_idx = int(sender.objectName()[1:])  # "R0" -> 0
            value = int(sender.text(), 16)
            self.cpu.reg[reg_idx] = value
        except (ValueError, IndexError):
            QMessageBox.warning(self, "Invalid Input",
                               "Please enter a valid hexadecimal value.")
        self.refresh()
