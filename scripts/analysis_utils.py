"""
Shared matplotlib helpers for the review scripts.
"""

import matplotlib
import matplotlib.pyplot as plt

# Student and class names may be in any script; these cover CJK and Latin
NAME_FONTS = [
    'Noto Sans CJK TC',
    'Noto Sans CJK JP',
    'Noto Sans CJK KR',
    'Microsoft JhengHei',
    'PingFang TC',
    'Arial Unicode MS',
]


def name_font_chain() -> list[str]:
    """Installed name fonts first, then DejaVu Sans (always bundled)."""
    installed = {f.name for f in matplotlib.font_manager.fontManager.ttflist}
    return [font for font in NAME_FONTS if font in installed] + ['DejaVu Sans']


def setup_plotting() -> list[str]:
    """Apply chart defaults; returns the font chain in use."""
    chain = name_font_chain()
    plt.rcParams['font.family'] = 'sans-serif'
    plt.rcParams['font.sans-serif'] = chain
    plt.rcParams['figure.dpi'] = 100
    plt.rcParams['savefig.dpi'] = 150
    plt.rcParams['axes.unicode_minus'] = False
    return chain


def save_figure(fig, output):
    """Write `fig` to `output` (parent dirs created) and release it."""
    output.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(output)
    plt.close(fig)
