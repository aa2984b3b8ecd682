"""Font construction and text measurement with QFontMetricsF.

Fonts are described the CSS way (``"'Poppins', sans-serif"``) so styles can be
stored as plain strings. Generic family names become Qt style hints and the
named families are tried in order.
"""

from PyQt5.QtGui import QFont, QFontMetricsF

GENERIC_FAMILIES = {
    'sans-serif': QFont.SansSerif,
    'serif': QFont.Serif,
    'monospace': QFont.Monospace,
    'cursive': QFont.Cursive,
    'fantasy': QFont.Fantasy,
}


def parse_font_families(font):
    """Split a CSS font-family list into names, quotes stripped."""
    if isinstance(font, (list, tuple)):
        return [str(name) for name in font]
    names = []
    for part in str(font).split(','):
        name = part.strip().strip('"\'').strip()
        if name:
            names.append(name)
    return names


def make_font(font, size, bold=False, italic=False):
    """QFont for a CSS family list at a pixel size."""
    families = parse_font_families(font)
    named = [name for name in families if name.lower() not in GENERIC_FAMILIES]
    generic = [name.lower() for name in families if name.lower() in GENERIC_FAMILIES]

    qfont = QFont()
    if named:
        qfont.setFamily(named[0])
        qfont.setFamilies(named)
    if generic:
        qfont.setStyleHint(GENERIC_FAMILIES[generic[0]])
    qfont.setPixelSize(max(1, int(round(size))))
    qfont.setBold(bool(bold))
    qfont.setItalic(bool(italic))
    return qfont


def font_for_label(label):
    return make_font(label.font, label.size, label.bold, label.italic)


class QtTextMeasurer:
    """Measures text labels with the same fonts the renderer draws them in."""

    def text_width(self, text, qfont):
        return QFontMetricsF(qfont).horizontalAdvance(text)

    def measure(self, label):
        """(width, height) for a text label.

        Height is the font size, the box the label is hit-tested and drawn in.
        """
        return self.text_width(label.content, font_for_label(label)), float(label.size)

    def apply(self, label):
        """Refresh label.width/height from its content and style, keeping the top-left."""
        label.width, label.height = self.measure(label)
        return label
