import os
from typing import List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .models import Circle
from .moves import MoveDescriptor
from .utils.file_manager import create_output_directory


def trace_moves(moves: Sequence[MoveDescriptor]) -> List[Tuple[str, np.ndarray]]:
    """
    Convert sparse moves into XY polyline runs for plotting.

    Position starts at the origin with the cutter above the surface. A run
    is a stretch of consecutive XY motion of the same style: 'rapid',
    'cut' (feed with Z below 0) or 'feed' (feed above the surface).

    Args:
        moves: Moves in emission order

    Returns:
        List of (style, Nx2 array of XY points) runs
    """
    x, y, z = 0.0, 0.0, float('inf')
    runs: List[Tuple[str, List[Tuple[float, float]]]] = []

    for move in moves:
        if move.z is not None:
            z = move.z
        if move.x is None and move.y is None:
            continue
        new_x = move.x if move.x is not None else x
        new_y = move.y if move.y is not None else y

        if move.is_rapid:
            style = 'rapid'
        elif z < 0:
            style = 'cut'
        else:
            style = 'feed'

        if runs and runs[-1][0] == style and runs[-1][1][-1] == (x, y):
            runs[-1][1].append((new_x, new_y))
        else:
            runs.append((style, [(x, y), (new_x, new_y)]))
        x, y = new_x, new_y

    return [(style, np.array(points)) for style, points in runs]


def plot_moves(moves: Sequence[MoveDescriptor], boundary: Optional[Circle] = None,
               output_file: str = None, dpi: int = 150, show: bool = True,
               title: str = "CNC Toolpath Preview"):
    """
    Plot a toolpath preview.

    Cutting moves are drawn solid, rapids dashed, and the trim boundary
    (if any) as a red circle.

    Args:
        moves: Moves in emission order
        boundary: Optional trim circle to overlay
        output_file: Optional path to save the plot
        dpi: Plot resolution
        show: Open an interactive window
        title: Plot title

    Returns:
        The matplotlib Figure
    """
    fig, ax = plt.subplots(figsize=(8, 8), dpi=dpi)

    styles = {
        'cut': dict(color='blue', linestyle='-', linewidth=1.0, label="Cut"),
        'feed': dict(color='green', linestyle='-', linewidth=0.5, label="Feed (above stock)"),
        'rapid': dict(color='gray', linestyle='--', linewidth=0.5, alpha=0.6, label="Rapid"),
    }
    labelled = set()
    for style, points in trace_moves(moves):
        kwargs = dict(styles[style])
        if style in labelled:
            kwargs.pop('label')
        labelled.add(style)
        ax.plot(points[:, 0], points[:, 1], **kwargs)

    if boundary is not None:
        circle = plt.Circle((boundary.center.x, boundary.center.y), boundary.radius,
                            color='red', fill=False, linewidth=1.5, linestyle='-.',
                            label="Trim boundary")
        ax.add_patch(circle)

    ax.set_xlabel("X-axis (mm)")
    ax.set_ylabel("Y-axis (mm)")
    ax.set_title(f"{title}\n{len(moves)} moves")
    if labelled or boundary is not None:
        ax.legend(fontsize=8)
    ax.grid(True, alpha=0.3)
    ax.set_aspect('equal', adjustable='datalim')
    ax.margins(0.1)

    plt.tight_layout()

    if output_file:
        plt.savefig(output_file, dpi=dpi, bbox_inches='tight')

    if show:
        plt.show()

    return fig


def save_plot_preview(moves: Sequence[MoveDescriptor], base_filename: str,
                      output_dir: str = "output", boundary: Optional[Circle] = None) -> str:
    """
    Save a plot preview PNG without showing it.

    Returns:
        Path of the saved image
    """
    create_output_directory(output_dir)
    plot_filename = os.path.join(output_dir, f"{base_filename}_preview.png")

    fig = plot_moves(moves, boundary, plot_filename, show=False)
    plt.close(fig)

    return plot_filename
