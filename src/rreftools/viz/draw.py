from __future__ import annotations

import math
from typing import Sequence

import matplotlib.pyplot as plt

from rreftools.elimination.steps import Step
from rreftools.render.narrative import describe, format_entry


def draw_snapshot(ax, snapshot: Sequence[Sequence[float]], *, title: str = "", fontsize: int = 9):
    """
    Draw one matrix snapshot on ax as a colored grid with its entries written in.
    Cells with larger magnitude are darker.
    """
    m, n = len(snapshot), len(snapshot[0])
    vmax = max((abs(x) for row in snapshot for x in row), default=0.0) or 1.0
    ax.imshow(
        [[abs(x) for x in row] for row in snapshot],
        cmap="Blues",
        vmin=0.0,
        vmax=vmax,
        aspect="auto",
    )
    for i in range(m):
        for j in range(n):
            x = snapshot[i][j]
            ax.text(
                j,
                i,
                format_entry(x),
                ha="center",
                va="center",
                fontsize=fontsize,
                color="white" if abs(x) > 0.6 * vmax else "black",
            )
    ax.set_xticks(range(n))
    ax.set_xticklabels([str(j + 1) for j in range(n)])
    ax.set_yticks(range(m))
    ax.set_yticklabels([str(i + 1) for i in range(m)])
    ax.set_title(title, fontsize=fontsize)


def draw_steps(
    steps: Sequence[Step],
    *,
    cols: int = 4,
    panel_size: float = 3.0,
    title_width: int = 40,
    save_path: str | None = None,
):
    """
    Grid of every step's snapshot, titled with its narrative.

    If save_path is set the figure is written there (PNG) and closed;
    otherwise it is shown. Returns the figure.
    """
    if not steps:
        raise ValueError("no steps to draw")

    cols = max(1, min(cols, len(steps)))
    rows = math.ceil(len(steps) / cols)
    fig, axes = plt.subplots(rows, cols, figsize=(panel_size * cols, panel_size * rows), squeeze=False)

    for k, ax in enumerate(axes.flat):
        if k >= len(steps):
            ax.set_axis_off()
            continue
        text = describe(steps[k])
        if len(text) > title_width:
            text = text[: title_width - 3] + "..."
        draw_snapshot(ax, steps[k].snapshot, title=f"{k}: {text}")

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150)
        plt.close(fig)
    else:
        plt.show()

    return fig
