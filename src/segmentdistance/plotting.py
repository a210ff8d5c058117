from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np
import matplotlib.pyplot as plt

from segmentdistance.solvers.solver import closest_approach

if TYPE_CHECKING:
    from matplotlib.figure import Figure

    from segmentdistance.model.geometry_primitives import Segment
    from segmentdistance.solvers.solver import ClosestApproach


def plot_segments(
    s1: Segment,
    s2: Segment,
    approach: Optional[ClosestApproach] = None,
    title: Optional[str] = None,
    show: bool = True,
) -> Figure:
    """
    Plot two segments in 3D together with the line of closest approach.

    Args:
        s1: First segment.
        s2: Second segment.
        approach: Precomputed closest approach; computed if omitted.
        title: Optional figure title.
        show: Call `plt.show()` before returning.

    Returns:
        The matplotlib figure.
    """
    if approach is None:
        approach = closest_approach(s1, s2)

    plt.rcParams["figure.constrained_layout.use"] = True
    fig = plt.figure(figsize=(7, 6))
    ax = fig.add_subplot(projection="3d")

    for segment, color, label in ((s1, "tab:blue", "Segment 1"), (s2, "tab:orange", "Segment 2")):
        pts = segment.to_array()
        ax.plot(pts[:, 0], pts[:, 1], pts[:, 2], color=color, lw=2, marker="o", label=label)

    link = np.array([approach.point_on_first.to_array(), approach.point_on_second.to_array()])
    ax.plot(link[:, 0], link[:, 1], link[:, 2], 'r--', lw=1.5,
            label=f"Distance = {approach.distance:.4f}")

    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_zlabel("z")
    ax.legend()
    ax.set_title(title or f"Closest approach ({approach.kind})")

    if show:
        plt.show()
    return fig
