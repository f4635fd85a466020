"""
Plotly rendering of the orrery.

Draws the current simulation state (bodies, orbit tracks, camera placement
and the info panel of the selected body) and turns plotly click payloads
back into selection events. Nothing here feeds back into the kinematics
except through ``Pick`` events.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

import numpy as np
import plotly.graph_objects as go

from .bodies import BodyId, BodyRecord
from .catalog import Catalog
from .config import config
from .selection import Pick
from .transform import quat_rotate
from .utils import scientific_notation

logger = logging.getLogger(__name__)


# ========== INFO PANEL ==========
def info_panel(record: BodyRecord, catalog: Catalog) -> List[str]:
    """
    Lines shown in the information panel for ``record``.

    Examples
    --------
    >>> lines = info_panel(catalog.record(BodyId.EARTH), catalog)
    >>> lines[1]
    'Mass: 5.9724x10^24 kg'
    """
    if record.rotation_period_days is None:
        rotation = 'unknown'
    else:
        rotation = f"{record.rotation_period_days:g} days"
    return [
        record.name,
        f"Mass: {scientific_notation(record.mass_kg)} kg",
        f"Diameter: {record.diameter_km:g} km",
        f"Distance from what it orbits: {record.distance_au:g} AU",
        f"Number of moons: {record.num_moons}",
        f"Average temperature: {record.temperature_c:g}°C",
        f"Period of revolution: {record.revolution_period_days:g} days",
        f"Period of rotation: {rotation}",
        f"Orbits: {catalog.record(record.parent).name}",
        f"Fun fact: {record.fun_fact}",
    ]


def listing_rows(catalog: Catalog) -> List[List[str]]:
    """
    Body names grouped for a selection list: one row per planet system.

    The Sun gets a row of its own; each planet row is followed by its moons.
    """
    rows: List[List[str]] = []
    for record in catalog:
        if record.parent == BodyId.SUN or not rows:
            rows.append([])
        rows[-1].append(record.name)
    return rows


# ========== PICKING ==========
def event_from_click(click: Union[Mapping[str, Any], Iterable[Mapping[str, Any]], None]
                     ) -> Optional[Pick]:
    """
    Convert a plotly click payload into a Pick event.

    Parameters
    ----------
    click : mapping or iterable of mappings
        Either a click payload with a ``'points'`` list (as delivered by
        Dash ``clickData``) or the list of point dicts itself. Body traces
        created by ``scene_figure`` carry the BodyId value as customdata.

    Returns
    -------
    Pick or None
        Pick for the first point that refers to a body, None if nothing
        pickable was clicked
    """
    if click is None:
        return None
    points = click.get('points', []) if isinstance(click, Mapping) else click
    for point in points:
        data = point.get('customdata')
        if isinstance(data, (list, tuple)) and data:
            data = data[0]
        if not isinstance(data, str):
            continue
        try:
            return Pick(BodyId.from_name(data))
        except KeyError:
            logger.debug("Ignoring click on non-body customdata %r", data)
    return None


# ========== SCENE ==========
def _sphere(center, radius, orientation, n_u=30, n_v=20):
    """Sphere mesh grid around ``center``, poles along the body's local +Y."""
    u = np.linspace(0, 2 * np.pi, n_u)
    v = np.linspace(0, np.pi, n_v)
    local = np.stack([
        radius * np.outer(np.cos(u), np.sin(v)),
        radius * np.outer(np.ones(np.size(u)), np.cos(v)),
        radius * np.outer(np.sin(u), np.sin(v)),
    ], axis=-1)
    points = np.apply_along_axis(lambda p: quat_rotate(orientation, p), -1, local)
    return (center[0] + points[..., 0],
            center[1] + points[..., 1],
            center[2] + points[..., 2])


def _add_body(fig: go.Figure, record: BodyRecord, sim, color: str,
              opacity: float = 1.0):
    transform = sim.propagator.transform(record.body)
    center = transform.position
    radius = sim.body_scaled_radius(record.body)
    x, y, z = _sphere(center, radius, transform.orientation)

    fig.add_trace(go.Surface(
        x=x, y=y, z=z,
        colorscale=[[0, color], [1, color]],
        showscale=False,
        opacity=opacity,
        name=record.name,
        customdata=np.full(x.shape, record.body.value, dtype=object),
        hoverinfo='name',
    ))
    # center marker so the body is clickable even when sub-pixel
    fig.add_trace(go.Scatter3d(
        x=[center[0]], y=[center[1]], z=[center[2]],
        mode='markers',
        marker=dict(size=3, color=color),
        name=record.name,
        customdata=[record.body.value],
        text=[record.name],
        hovertemplate='%{text}<extra></extra>',
        showlegend=False,
    ))


def _add_orbit(fig: go.Figure, record: BodyRecord, sim, n_points: int):
    parent_center = sim.body_position(record.parent)
    d = sim.propagator.scaled_distance(record.body)
    u = np.linspace(0, 2 * np.pi, n_points)
    fig.add_trace(go.Scatter3d(
        x=parent_center[0] + d * np.cos(u),
        y=np.full(n_points, parent_center[1]),
        z=parent_center[2] + d * np.sin(u),
        mode='lines',
        line=dict(color=config.DEFAULT_ORBIT_COLOR, width=1),
        name=f"{record.name} orbit",
        hoverinfo='skip',
        showlegend=False,
    ))


def scene_figure(sim, show_orbits: bool = True,
                 n_points: Optional[int] = None,
                 extent: Optional[float] = None) -> go.Figure:
    """
    Build a 3D plotly figure of the current simulation state.

    Parameters
    ----------
    sim : Simulation
        Simulation to draw
    show_orbits : bool, optional
        Draw each body's orbit track around its parent (default: True)
    n_points : int, optional
        Points per orbit track (default: ``config.DEFAULT_ORBIT_POINTS``)
    extent : float, optional
        Half-width of the plotted box around the camera target. Defaults to
        ``config.DEFAULT_VIEW_EXTENT`` times the eye-target distance when a
        body is selected, and to the whole system otherwise.

    Returns
    -------
    go.Figure
        Figure with the camera placed from ``sim.current_camera_pose()``
    """
    if n_points is None:
        n_points = config.DEFAULT_ORBIT_POINTS
    if n_points < 2:
        raise ValueError("n_points must be at least 2")

    fig = go.Figure()
    for record in sim.catalog:
        color = config.SUN_COLOR if record.is_sun else config.DEFAULT_BODY_COLOR
        # exaggerated radii put every moon inside its planet's sphere
        hosts_moons = not record.is_sun and bool(sim.catalog.satellites_of(record.body))
        opacity = config.HOST_OPACITY if hosts_moons else 1.0
        _add_body(fig, record, sim, color, opacity)
        if show_orbits and not record.is_sun:
            _add_orbit(fig, record, sim, n_points)

    pose = sim.current_camera_pose()
    if extent is None:
        if sim.selected is None:
            extent = max(
                np.linalg.norm(sim.body_position(b)) + sim.body_scaled_radius(b)
                for b in sim.catalog.ids()
            )
        else:
            extent = pose.distance() * config.DEFAULT_VIEW_EXTENT
    extent = max(extent, 1.0)

    center = pose.target
    axes = {}
    for i, name in enumerate(('xaxis', 'yaxis', 'zaxis')):
        axes[name] = dict(range=[center[i] - extent, center[i] + extent],
                          title=name[0].upper(), showbackground=False)

    # the cube spans one unit in plotly camera coordinates
    eye = (pose.eye - pose.target) / (2 * extent)
    fig.update_layout(
        scene=dict(aspectmode='cube', **axes),
        scene_camera=dict(
            eye=dict(x=eye[0], y=eye[1], z=eye[2]),
            center=dict(x=0, y=0, z=0),
            up=dict(x=pose.up[0], y=pose.up[1], z=pose.up[2]),
        ),
        title='The Solar System',
        showlegend=False,
        paper_bgcolor='black',
        font=dict(color='white'),
    )

    record = sim.selected_record
    if record is not None:
        fig.add_annotation(
            text='<br>'.join(info_panel(record, sim.catalog)),
            xref='paper', yref='paper', x=0.01, y=0.99,
            showarrow=False, align='left',
            bgcolor='rgba(40, 40, 40, 0.8)',
        )
    return fig


def show_scene(sim, renderer: str = 'browser', **kwargs) -> go.Figure:
    """Build the scene figure and open it with the given plotly renderer."""
    fig = scene_figure(sim, **kwargs)
    fig.show(renderer=renderer)
    return fig
