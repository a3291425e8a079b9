from PySide6.QtWidgets import QMainWindow, QDockWidget, QApplication
from PySide6.QtCore import Qt
from .register_panel import RegisterPanel
from .memory_panel import MemoryPanel
from .control_panel import ControlPanel
from .console_panel import ConsolePanel
from lc3.console import Console
from lc3.cpu_core import CPU
import sys

class MainWindow(QMainWindow):
    def __init__(self, images=()):
        super().__init__()
        self.console_panel = ConsolePanel()
        self.cpu = CPU(Console(stdin=self.console_panel.keys,
                               stdout=self.console_panel))
        self.setWindowTitle("LC-3 Emulator")

        # central widget: memory
        self.memory_panel = MemoryPanel(self.cpu)
        self.setCentralWidget(self.memory_panel)

        # Dock 1 : registers
        self.register_panel = RegisterPanel(self.cpu)
        reg_dock = QDockWidget("Registers", self)
        reg_dock.setWidget(self.register_panel)
        self.addDockWidget(Qt.LeftDockWidgetArea, reg_dock)

        # Dock 2 : console
        con_dock = QDockWidget("Console", self)
        con_dock.setWidget(self.console_panel)
        self.addDockWidget(Qt.RightDockWidgetArea, con_dock)

        # Dock 3 : controls
        self.control_panel = ControlPanel(self.cpu, self.register_panel,
                                          self.memory_panel)
        ctrl_dock = QDockWidget("Control", self)
        ctrl_dock.setWidget(self.control_panel)
        self.addDockWidget(Qt.BottomDockWidgetArea, ctrl_dock)

        for path in images:
            self.control_panel.load_image(path)


def run(images=()) -> int:
    app = QApplication.instance() or QApplication(sys.argv)
    mw = MainWindow(images)
    mw.resize(1280, 960)
    mw.show()
    return app.exec()

if __name__ == "__main__":
    sys.exit(run(sys.argv[1:]))
