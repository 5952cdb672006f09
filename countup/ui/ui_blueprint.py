from dataclasses import dataclass
from PySide6.QtGui import QColor, QFont, QFontMetrics

# A unified UI Blueprint dataclass holding the resolved Qt objects for painting one render model.
@dataclass
class UIBlueprint:
    colors: dict         # style color name -> QColor
    fonts: dict          # style size name -> QFont
    metrics: dict        # style size name -> QFontMetrics

    # Builds the blueprint from the theme dicts.
    @staticmethod
    def compute(colors, fonts):
        qcolors = {name: QColor(value) for name, value in colors.items()}

        qfonts = {}
        qmetrics = {}
        for size_name in ("large", "small"):
            font = QFont(fonts["family"])
            font.setStyleHint(QFont.Monospace)
            font.setPixelSize(fonts[size_name])
            # Large text is bold so numbers still read at the default tiny window size
            font.setBold(size_name == "large")
            qfonts[size_name] = font
            qmetrics[size_name] = QFontMetrics(font)

        return UIBlueprint(colors=qcolors, fonts=qfonts, metrics=qmetrics)

    def color(self, name):
        return self.colors.get(name, self.colors["label"])
