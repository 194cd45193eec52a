from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from ..graph import Edge, Kind
from ..puzzle import Puzzle


_KIND_HEX = {
    Kind.TRIANGLE: "#d62728",  # red
    Kind.SQUARE: "#1f77b4",  # blue
    Kind.DIAMOND: "#2ca02c",  # green
    Kind.OCTAGON: "#cccccc",
}

_KIND_SYMBOL = {
    Kind.TRIANGLE: "triangle-up",
    Kind.SQUARE: "square",
    Kind.DIAMOND: "diamond",
    Kind.OCTAGON: "octagon",
}


def build_plotly_figure(
    puzzle: Puzzle,
    *,
    edge_kind: Optional[Dict[Edge, Kind]] = None,
    title: str = "Lyne Solver",
):
    import plotly.graph_objects as go

    # Base edges (light)
    ex, ey = [], []
    for u, v in puzzle.edges():
        ex += [u.pos[0], v.pos[0], None]
        ey += [u.pos[1], v.pos[1], None]

    traces = [
        go.Scatter(
            x=ex,
            y=ey,
            mode="lines",
            line=dict(width=1, color="rgba(160,160,160,0.5)"),
            hoverinfo="none",
            name="edges",
        )
    ]

    # Solution edges (colored, thicker)
    for (u, v), kind in sorted((edge_kind or {}).items()):
        traces.append(
            go.Scatter(
                x=[u.pos[0], v.pos[0]],
                y=[u.pos[1], v.pos[1]],
                mode="lines",
                line=dict(width=6, color=_KIND_HEX[kind]),
                hoverinfo="none",
                showlegend=False,
            )
        )

    nx, ny, ntext, ncolor, nsize, nsymbol = [], [], [], [], [], []
    for node in puzzle.nodes():
        nx.append(node.pos[0])
        ny.append(node.pos[1])
        label_bits = [f"id={node.id}", f"kind={node.kind.value}", f"desired_edges={node.desired_edges}"]
        if node.terminal:
            label_bits.append("terminal")
        ntext.append("<br>".join(label_bits))
        ncolor.append(_KIND_HEX[node.kind])
        nsize.append(18 if node.terminal else 12)
        nsymbol.append(_KIND_SYMBOL[node.kind])

    traces.append(
        go.Scatter(
            x=nx,
            y=ny,
            mode="markers+text",
            marker=dict(size=nsize, color=ncolor, symbol=nsymbol, line=dict(width=0)),
            text=[str(n.desired_edges // 2) if n.kind is Kind.OCTAGON else "" for n in puzzle.nodes()],
            hovertext=ntext,
            hoverinfo="text",
            name="nodes",
        )
    )

    fig = go.Figure(data=traces)
    fig.update_layout(
        title=title,
        xaxis=dict(visible=False),
        yaxis=dict(visible=False, scaleanchor="x", scaleratio=1),
        margin=dict(l=0, r=0, t=40, b=0),
    )
    return fig


def write_plotly_html(
    puzzle: Puzzle,
    *,
    out_path: str | Path,
    edge_kind: Optional[Dict[Edge, Kind]] = None,
    title: str = "Lyne Solver",
) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    fig = build_plotly_figure(puzzle, edge_kind=edge_kind, title=title)
    fig.write_html(str(out_path), include_plotlyjs="cdn", full_html=True)
    return out_path
