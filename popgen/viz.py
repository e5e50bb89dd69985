import numpy as np
import matplotlib.pyplot as plt
from matplotlib import cm
from matplotlib.colors import Normalize

from popgen.geometry import to_xy


def plot_districts(city, ax, nodes=True, centers=True, annotate=True, cmap=cm.tab20, alpha=0.4, zorder=1):
    """
    Plots the districts of a city on a given matplotlib axis.

    Parameters
    ----------
    city : City
    ax : matplotlib.axes.Axes
    nodes : bool
        Whether to plot the network nodes of each district.
    centers : bool
        Whether to mark the bounding-box centers used for distance ranking.
    annotate : bool
        Whether to write the district names at their centers.
    """
    n = max(len(city.districts), 1)
    for i, district in enumerate(city.districts):
        color = cmap(i / n)
        geom = district.boundary.geometry
        if not geom.is_empty:
            polys = list(getattr(geom, 'geoms', [geom]))
            for poly in polys:
                bx, by = poly.exterior.xy
                ax.fill(bx, by, facecolor=color, alpha=alpha, zorder=zorder)
                ax.plot(bx, by, color='black', linewidth=0.8, zorder=zorder + 1)
        if nodes and district.nodes:
            xy = np.array([to_xy(node) for node in district.nodes.values()])
            ax.scatter(xy[:, 0], xy[:, 1], s=4, color=color, zorder=zorder + 2)
        if district.boundary.points and (centers or annotate):
            cx, cy = to_xy(district.center())
            if centers:
                ax.scatter([cx], [cy], marker='x', s=25, color='black', zorder=zorder + 3)
            if annotate:
                ax.annotate(district.name, (cx, cy), fontsize=7, ha='center', va='bottom', zorder=zorder + 3)

    ax.set_aspect('equal', adjustable='box')
    ax.set_xticks([]); ax.set_yticks([])
    return ax


def plot_worker_flows(city, ax, min_count=1, cmap=cm.viridis, max_width=6.0, zorder=2):
    """
    Draws one line per pair of home and work district, weighted by commuters.

    Commuters living and working in the same district are shown as circles at the
    district center.
    """
    flows = []
    for work in city.districts:
        for home_name, count in work.incoming_worker_counts.items():
            if count >= min_count:
                flows.append((city.get_district(home_name), work, count))
    if not flows:
        return ax

    top = max(count for _, _, count in flows)
    norm = Normalize(vmin=0, vmax=top)
    for home, work, count in sorted(flows, key=lambda f: f[2]):
        hx, hy = to_xy(home.center())
        wx, wy = to_xy(work.center())
        color = cmap(norm(count))
        if home is work:
            ax.scatter([hx], [hy], s=20 + 200 * count / top, facecolors='none', edgecolors=[color], zorder=zorder)
        else:
            ax.plot([hx, wx], [hy, wy], color=color, linewidth=max_width * count / top, alpha=0.8, zorder=zorder)

    plt.colorbar(cm.ScalarMappable(norm=norm, cmap=cmap), ax=ax, label='commuters')
    ax.set_aspect('equal', adjustable='box')
    return ax
