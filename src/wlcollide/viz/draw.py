from __future__ import annotations

import networkx as nx
import matplotlib.pyplot as plt

from wlcollide.classify.buckets import CollisionBucket


def draw_bucket(
    bucket: CollisionBucket,
    *,
    node_size: int = 220,
    edge_width: float = 1.4,
    save_prefix: str | None = None,
):
    """
    Draw the representatives of a collision bucket side by side.

    If save_prefix is set, saves {save_prefix}.png and closes the figure;
    otherwise shows it. Returns the figure.
    """
    reps = [c.representative for c in bucket.classes]
    fig, axes = plt.subplots(1, len(reps), figsize=(4 * len(reps), 4), squeeze=False)

    for i, (g, ax) in enumerate(zip(reps, axes[0])):
        G = g.to_networkx()
        ax.set_axis_off()
        ax.set_title(f"class {i}  |E|={g.number_of_edges}")
        nx.draw_networkx(
            G,
            pos=nx.circular_layout(G),
            ax=ax,
            with_labels=True,
            node_size=node_size,
            width=edge_width,
        )

    status = bucket.status if bucket.separating_k is None else f"separated at k={bucket.separating_k}"
    fig.suptitle(f"1-WL bucket {bucket.key[:12]} ({status})")
    plt.tight_layout()

    if save_prefix:
        plt.savefig(f"{save_prefix}.png", dpi=150)
        plt.close(fig)
    else:
        plt.show()
    return fig
