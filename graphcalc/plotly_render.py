"""Draw :class:`~graphcalc.geometry.CanvasGeometry` with Plotly.

The figure is set up as a pixel canvas: the x axis spans ``[0, width]``, the
y axis spans ``[height, 0]`` (reversed, so canvas y grows downward) and both
axes are hidden. Segments become layout shapes, labels become annotations and
the curve is a single ``lines`` scatter trace that is updated in place on
redraw.

Works with both ``plotly.graph_objects.Figure`` and ``FigureWidget``.
"""

from __future__ import annotations

from typing import Any, Dict, List

import plotly.graph_objects as go

from .geometry import CanvasGeometry

__all__ = ["CURVE_TRACE_NAME", "clear_figure", "geometry_to_figure", "render_geometry"]

CURVE_TRACE_NAME = "curve"
_AXIS_COLOR = "black"
_LABEL_FONT_SIZE = 10


def _pixel_layout(width: float, height: float) -> Dict[str, Any]:
    hidden_axis = dict(visible=False, fixedrange=True, showgrid=False, zeroline=False)
    return dict(
        width=int(round(width)),
        height=int(round(height)),
        margin=dict(l=0, r=0, t=0, b=0),
        showlegend=False,
        plot_bgcolor="white",
        paper_bgcolor="white",
        xaxis=dict(range=[0.0, float(width)], **hidden_axis),
        yaxis=dict(range=[float(height), 0.0], **hidden_axis),
    )


def _shapes(geometry: CanvasGeometry) -> List[Dict[str, Any]]:
    return [
        dict(
            type="line",
            xref="x",
            yref="y",
            x0=seg.x1,
            y0=seg.y1,
            x1=seg.x2,
            y1=seg.y2,
            line=dict(color=_AXIS_COLOR, width=1, dash="dash" if seg.dashed else "solid"),
        )
        for seg in geometry.lines
    ]


def _annotations(geometry: CanvasGeometry) -> List[Dict[str, Any]]:
    return [
        dict(
            xref="x",
            yref="y",
            x=label.x,
            y=label.y,
            text=label.text,
            showarrow=False,
            xanchor="left",
            yanchor="top",
            font=dict(size=_LABEL_FONT_SIZE),
        )
        for label in geometry.labels
    ]


def _curve_trace(fig: go.Figure) -> go.Scatter:
    """Return the curve trace of ``fig``, creating it on first use."""
    for trace in fig.data:
        if trace.name == CURVE_TRACE_NAME:
            return trace
    fig.add_scatter(x=[], y=[], mode="lines", name=CURVE_TRACE_NAME, hoverinfo="skip")
    return fig.data[-1]


def render_geometry(fig: go.Figure, geometry: CanvasGeometry) -> go.Figure:
    """Replace the contents of ``fig`` with ``geometry``.

    Parameters
    ----------
    fig : plotly.graph_objects.Figure or FigureWidget
        Target figure; updated in place.
    geometry : CanvasGeometry
        Output of :func:`graphcalc.geometry.emit_geometry`.

    Returns
    -------
    plotly.graph_objects.Figure
        ``fig``, for chaining.
    """
    trace = _curve_trace(fig)
    xs = [p[0] for p in geometry.polyline]
    ys = [p[1] for p in geometry.polyline]
    with fig.batch_update():
        fig.update_layout(
            **_pixel_layout(geometry.width, geometry.height),
            shapes=_shapes(geometry),
            annotations=_annotations(geometry),
        )
        trace.x = xs
        trace.y = ys
        trace.line = dict(color=geometry.curve_color, width=geometry.curve_width)
    return fig


def clear_figure(fig: go.Figure) -> go.Figure:
    """Remove every trace, shape and annotation from ``fig``."""
    fig.data = ()
    with fig.batch_update():
        fig.update_layout(shapes=[], annotations=[])
    return fig


def geometry_to_figure(geometry: CanvasGeometry) -> go.Figure:
    """Return a new static Plotly figure showing ``geometry``."""
    return render_geometry(go.Figure(), geometry)
