import math
import unicodedata

_LATEX_SPECIALS = {
    '\\': r'\textbackslash{}',
    '&': r'\&',
    '%': r'\%',
    '$': r'\$',
    '#': r'\#',
    '_': r'\_',
    '{': r'\{',
    '}': r'\}',
    '~': r'\textasciitilde{}',
    '^': r'\textasciicircum{}',
}


def latex_escape(text: str) -> str:
    """Escape LaTeX specials, keeping precomposed accented letters."""

    text = unicodedata.normalize('NFC', text)
    text = ''.join(ch for ch in text if unicodedata.category(ch) != 'Mn')
    return ''.join(_LATEX_SPECIALS.get(ch, ch) for ch in text)


def tikz_name(node_id: str) -> str:
    """Node names may not contain TikZ path syntax characters."""

    return ''.join(ch if ch.isalnum() else '-' for ch in node_id)


def format_float(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        raise ValueError("Cannot format non-finite float for TikZ output")
    formatted = f"{value:.4f}".rstrip("0").rstrip(".")
    if formatted in ("", "-0"):
        return "0"
    return formatted


def hex_to_rgb(color: str) -> str:
    """``#1E40AF`` → ``30,64,175`` for ``\\definecolor{...}{RGB}{...}``."""

    value = color.lstrip('#')
    return ','.join(str(int(value[idx:idx + 2], 16)) for idx in (0, 2, 4))
