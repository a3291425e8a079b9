from PySide6.QtWidgets import QWidget, QPushButton, QHBoxLayout, QLabel, QFileDialog
from PySide6.QtCore import QTimer, Slot

from lc3.errors import LoadError, VMError

STEPS_PER_TICK = 2000
IDLE_INTERVAL = 50   # ms between key checks while parked on GETC

class ControlPanel(QWidget):
    """
    Load / Step / Run / Pause / Reset buttons and a status label.
    Run steps the CPU in batches from a QTimer so the window stays live;
    a GETC with no typed key parks the batch until a key arrives.
    """
    def __init__(self, cpu, register_panel, memory_panel, parent=None):
        super().__init__(parent)
        self.cpu = cpu
        self.register_panel = register_panel
        self.memory_panel = memory_panel
        self.images = []

        self.btn_load  = QPushButton("Load…")
        self.btn_step  = QPushButton("Step")
        self.btn_run   = QPushButton("Run")
        self.btn_pause = QPushButton("Pause")
        self.btn_reset = QPushButton("Reset")
        self.status    = QLabel("Stopped")

        lay = QHBoxLayout(self)
        for b in (self.btn_load, self.btn_step, self.btn_run,
                  self.btn_pause, self.btn_reset, self.status):
            lay.addWidget(b)

        # connections
        self.btn_load.clicked.connect(self.choose_image)
        self.btn_step.clicked.connect(self.step_once)
        self.btn_run.clicked.connect(self.run)
        self.btn_pause.clicked.connect(self.pause)
        self.btn_reset.clicked.connect(self.reset)

        # timer for continuous run
        self.timer = QTimer(self)
        self.timer.timeout.connect(self.tick)
        self.timer.setInterval(0)

    def refresh(self):
        self.register_panel.refresh()
        self.memory_panel.refresh()

    def load_image(self, path) -> bool:
        try:
            origin = self.cpu.load_file(path)
        except LoadError as e:
            self.status.setText(f"{e.source}: {e}")
            return False
        self.images.append(path)
        self.memory_panel.show_address(origin)
        self.refresh()
        self.status.setText(f"Loaded {path} at {origin:04X}")
        return True

    @Slot()
    def choose_image(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "Load program image", "", "LC-3 images (*.obj);;All files (*)")
        if path:
            self.load_image(path)

    def _execute(self, steps):
        if self.cpu.halted:
            self.pause()
            self.status.setText("Halted")
            return
        try:
            for _ in range(steps):
                if self.cpu.halted:
                    break
                if self.cpu.awaiting_key:
                    # GETC would read end-of-input; retry on the next tick
                    self.status.setText("Waiting for input")
                    self.timer.setInterval(IDLE_INTERVAL)
                    self.refresh()
                    return
                self.cpu.step()
            self.timer.setInterval(0)
        except VMError as e:
            self.pause()
            self.status.setText(str(e))
        else:
            if self.cpu.halted:
                self.pause()
                self.status.setText("Halted")
            else:
                self.status.setText(f"PC={self.cpu.reg.pc:04X}")
        self.refresh()

    @Slot()
    def step_once(self):
        self._execute(1)

    @Slot()
    def tick(self):
        self._execute(STEPS_PER_TICK)

    @Slot()
    def run(self):
        self.timer.start()
        self.status.setText("Running")

    @Slot()
    def pause(self):
        self.timer.stop()
        if not self.cpu.halted:
            self.status.setText("Paused")

    @Slot()
    def reset(self):
        """Power-cycle the CPU and reload every image loaded so far"""
        self.timer.stop()
        self.cpu.reset()
        images, self.images = self.images, []
        for path in images:
            self.load_image(path)
        self.refresh()
        self.status.setText("Reset OK")
