# ------------------------------------------------------------
# Browser-native 2D grid visualizer (Plotly)
# ------------------------------------------------------------
import numpy as np
import plotly.graph_objects as go


def _circle(x, y, r, **kwargs):
    return dict(type="circle", xref="x", yref="y",
                x0=x - r, y0=y - r, x1=x + r, y1=y + r, **kwargs)


def visualize_grid(grid, rc, neighbors=None, highlight_id=None):
    """
    Draw the cell grid, real particles and ghost copies.

    If ``highlight_id`` is given, that particle is drawn with its cutoff
    halo (radius + rc) and its neighbors from ``neighbors`` are marked.
    Raises ValueError when no real particle has that id.
    """
    L, cell = grid.L, grid.cell_size
    fig = go.Figure()

    real = np.array([(p.x, p.y) for p in grid.particles]).reshape(-1, 2)
    fig.add_trace(
        go.Scatter(
            x=real[:, 0], y=real[:, 1],
            mode="markers",
            marker=dict(size=6, color="royalblue"),
            text=[str(p.id) for p in grid.particles],
            name="particles",
        )
    )

    if grid.ghosts:
        ghosts = np.array([(g.x, g.y) for g in grid.ghosts])
        fig.add_trace(
            go.Scatter(
                x=ghosts[:, 0], y=ghosts[:, 1],
                mode="markers",
                marker=dict(size=6, color="gray", opacity=0.5),
                text=[str(g.id) for g in grid.ghosts],
                name="ghosts",
            )
        )

    shapes = []
    # Cell lines over the base grid and, when periodic, the extension ring
    # (extension rows -1 and M, extension column M)
    pad = 1 if grid.periodic else 0
    x_hi = L + pad * cell
    y_lo, y_hi = -pad * cell, L + pad * cell
    for k in range(grid.M + 1 + pad):
        x = k * cell
        shapes.append(dict(type="line", x0=x, x1=x, y0=y_lo, y1=y_hi,
                           line=dict(width=1, color="lightgray")))
    for k in range(grid.M + 1 + 2 * pad):
        y = y_lo + k * cell
        shapes.append(dict(type="line", x0=0.0, x1=x_hi, y0=y, y1=y,
                           line=dict(width=1, color="lightgray")))

    # Simulation box
    shapes.append(dict(type="rect", x0=0, y0=0, x1=L, y1=L,
                       line=dict(width=2, color="black")))

    for p in grid.particles:
        if p.radius > 0:
            shapes.append(_circle(p.x, p.y, p.radius, line=dict(width=1, color="royalblue")))

    if highlight_id is not None:
        target = next((p for p in grid.particles if p.id == highlight_id), None)
        if target is None:
            raise ValueError(f"No particle with id {highlight_id} in the grid")
        shapes.append(_circle(target.x, target.y, target.radius + rc,
                              line=dict(width=1, color="red", dash="dot")))
        fig.add_trace(
            go.Scatter(x=[target.x], y=[target.y], mode="markers",
                       marker=dict(size=9, color="red"), name=f"particle {highlight_id}")
        )
        if neighbors is not None:
            near = neighbors.get(target, [])
            fig.add_trace(
                go.Scatter(
                    x=[q.x for q in near], y=[q.y for q in near],
                    mode="markers",
                    marker=dict(size=9, color="orange"),
                    name="neighbors",
                )
            )

    fig.update_layout(
        title=f"Cell grid M={grid.M}, cell={cell}, rc={rc}",
        shapes=shapes,
        xaxis=dict(range=[-cell, x_hi], constrain="domain"),
        yaxis=dict(range=[-cell, y_hi], scaleanchor="x", scaleratio=1),
        margin=dict(l=0, r=0, t=30, b=0),
    )
    return fig
