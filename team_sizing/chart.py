"""Label frequency table and the bar chart drawn from it."""

import io
from typing import Dict, List, Sequence

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.ticker import MaxNLocator
import pandas as pd

from .config import BAR_COLOR


def chart_data(estimates: Sequence) -> List[Dict]:
    """Count estimates per size label, keeping labels in first-seen order."""
    if not estimates:
        return []
    df = pd.DataFrame({"label": [e.size for e in estimates]})
    counts = df.groupby("label", sort=False).size()
    return [{"label": label, "count": int(count)} for label, count in counts.items()]


def chart_figure(data: List[Dict], title: str = "Estimate Distribution"):
    fig, ax = plt.subplots()
    ax.bar([d["label"] for d in data], [d["count"] for d in data], color=BAR_COLOR)
    ax.set_xlabel("Size")
    ax.set_ylabel("Count")
    ax.set_title(title)
    ax.yaxis.set_major_locator(MaxNLocator(integer=True))
    return fig


def fig_to_png_bytes(fig) -> bytes:
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=200, bbox_inches="tight")
    buf.seek(0)
    return buf.getvalue()
