import sys
import time
from PySide6.QtCore import Qt, QPointF, QTimer
from PySide6.QtGui import QPainter
from PySide6.QtWidgets import QApplication, QMainWindow, QWidget
from countup.common.logger import log
from countup.common.setup import APP_IDENTITY
from countup.core import config
from countup.core.countup_state import CountState
from countup.ui.theme import COLORS, FONTS
from countup.ui.ui_blueprint import UIBlueprint

# Fixed update step (60 Hz) and how often frames are drawn while animating vs idle.
FIXED_TICK = 1.0 / 60.0
FRAME_MS = 16
IDLE_FRAME_MS = 1000
# Any backlog past this many ticks in one frame is dropped (e.g. after the machine wakes from sleep).
MAX_TICKS_PER_FRAME = 240

# Qt keys the controller understands, by the names CountupConfig uses.
_KEY_NAMES = {
    Qt.Key.Key_Escape.value: "escape",
    Qt.Key.Key_Space.value: "space",
}


# ---------------------------------------------------------------------------
# Canvas
# ---------------------------------------------------------------------------

# Paints whatever render model the controller currently produces, scaled from the logical canvas to the widget.
class CountupCanvas(QWidget):

    def __init__(self, controller, blueprint, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.blueprint = blueprint
        self.setFocusPolicy(Qt.NoFocus)

    def paintEvent(self, event):
        model = self.controller.render_model()
        bp = self.blueprint

        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.TextAntialiasing)
            painter.fillRect(self.rect(), bp.color(model.background))
            painter.scale(self.width() / model.width, self.height() / model.height)

            for item in model.items:
                font = bp.fonts[item.style.size]
                fm = bp.metrics[item.style.size]
                x = item.x
                if item.style.anchor == "right_top":
                    x -= fm.horizontalAdvance(item.text)
                painter.setFont(font)
                painter.setPen(bp.color(item.style.color))
                painter.drawText(QPointF(x, item.y + fm.ascent()), item.text)
        finally:
            painter.end()


# ---------------------------------------------------------------------------
# Main window
# ---------------------------------------------------------------------------

# Host window for a CountState. Owns the run loop (a QTimer doing fixed-timestep updates), forwards key presses,
# and remembers its geometry between runs.
class CountupWindow(QMainWindow):

    def __init__(self, controller: CountState, frame_clock=time.monotonic):
        super().__init__()
        self.setWindowTitle("Countup")
        self.controller = controller
        self._frame_clock = frame_clock

        # -- Restore geometry --
        self._prefs = config.load_prefs()
        w = self._prefs["window"]
        self.resize(w["width"], w["height"])
        if w["x"] is not None and w["y"] is not None:
            self.move(w["x"], w["y"])

        # -- Canvas --
        self.blueprint = UIBlueprint.compute(COLORS, FONTS)
        self._canvas = CountupCanvas(controller, self.blueprint, self)
        self.setCentralWidget(self._canvas)
        self.setFocusPolicy(Qt.StrongFocus)

        # -- Run loop --
        self._last_frame = self._frame_clock()
        self._lag = 0.0
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._tick)
        self._timer.start(FRAME_MS)

    # ------------------------------------------------------------------ #
    #  Run loop                                                            #
    # ------------------------------------------------------------------ #

    def _tick(self):
        now = self._frame_clock()
        self._lag += now - self._last_frame
        self._last_frame = now

        steps = 0
        while self._lag >= FIXED_TICK and steps < MAX_TICKS_PER_FRAME:
            self.controller.update(FIXED_TICK)
            self._lag -= FIXED_TICK
            steps += 1
        if steps == MAX_TICKS_PER_FRAME:
            self._lag = 0.0

        if self.controller.should_exit():
            self.close()
            return

        self._canvas.update()
        self._sync_cadence()

    # Idle backoff, nothing changes on screen until the next day so there's no point drawing at 60fps.
    def _sync_cadence(self):
        interval = IDLE_FRAME_MS if self.controller.is_idle else FRAME_MS
        if self._timer.interval() != interval:
            log.debug(f"Frame interval {self._timer.interval()}ms -> {interval}ms")
            self._timer.setInterval(interval)
            # Time spent waiting on the slow idle timer must not be replayed into a restarted animation
            if interval == FRAME_MS:
                self._last_frame = self._frame_clock()
                self._lag = 0.0

    # ------------------------------------------------------------------ #
    #  Keys                                                                #
    # ------------------------------------------------------------------ #

    def keyPressEvent(self, event):
        key = event.key()
        name = _KEY_NAMES.get(getattr(key, "value", key))
        if name is None or event.isAutoRepeat():
            super().keyPressEvent(event)
            return

        self.controller.on_key([name])
        if self.controller.should_exit():
            self.close()
            return
        self._sync_cadence()
        self._canvas.update()

    # ------------------------------------------------------------------ #
    #  Window close                                                        #
    # ------------------------------------------------------------------ #

    def closeEvent(self, event):
        self._timer.stop()
        pos = self.pos()
        config.set_window_geometry(self._prefs, pos.x(), pos.y(), self.width(), self.height())
        try:
            config.save_prefs(self._prefs)
        except OSError:
            log.warning("Failed to save window prefs on exit", exc_info=True)
        event.accept()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(controller, argv=None):
    vendor, author, app_name = APP_IDENTITY
    app = QApplication.instance() or QApplication(argv if argv is not None else sys.argv)
    app.setApplicationName(app_name)
    app.setOrganizationName(author)
    app.setOrganizationDomain(vendor)
    window = CountupWindow(controller)
    window.show()
    return app.exec()
