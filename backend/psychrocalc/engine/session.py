"""
Session operations over state points and processes.

The engine owns no mutable state. Each operation takes a PsychroSession and
returns a new one in which every derived value is consistent with the edit:
changing the altitude recomputes the pressure, then every point, then every
process; removing a point drops the processes that reference it.
"""

import logging
from typing import Optional

from psychrocalc.engine.state_resolver import derive_properties_from_pair, recompute
from psychrocalc.engine.processes.energy import calculate_energy
from psychrocalc.models.atmosphere import AtmosphericContext
from psychrocalc.models.process import ProcessTransition
from psychrocalc.models.session import PsychroSession
from psychrocalc.models.state_point import MoistAirState

logger = logging.getLogger(__name__)


def _with_energy(
    process: ProcessTransition, points: dict[str, MoistAirState]
) -> ProcessTransition:
    start = points[process.start_point_id]
    end = points[process.end_point_id]
    energy = None
    if start.is_complete and end.is_complete:
        energy = calculate_energy(start, end, process.mass_flow)
    return process.model_copy(update={"energy": energy})


def _recompute_processes(
    processes: dict[str, ProcessTransition], points: dict[str, MoistAirState]
) -> dict[str, ProcessTransition]:
    return {pid: _with_energy(p, points) for pid, p in processes.items()}


def _replace(
    session: PsychroSession,
    atmosphere: Optional[AtmosphericContext] = None,
    points: Optional[dict[str, MoistAirState]] = None,
    processes: Optional[dict[str, ProcessTransition]] = None,
) -> PsychroSession:
    points = session.points if points is None else points
    processes = session.processes if processes is None else processes
    return PsychroSession(
        atmosphere=session.atmosphere if atmosphere is None else atmosphere,
        points=points,
        processes=_recompute_processes(processes, points),
    )


def new_session(altitude: float = 0.0) -> PsychroSession:
    """An empty session at the given altitude (m)."""
    return PsychroSession(atmosphere=AtmosphericContext(altitude=altitude))


def set_altitude(session: PsychroSession, altitude: float) -> PsychroSession:
    """Change the site altitude and recompute everything that depends on pressure."""
    atmosphere = AtmosphericContext(altitude=altitude)
    pressure = atmosphere.pressure
    points = {pid: recompute(state, pressure) for pid, state in session.points.items()}
    logger.debug(
        "Altitude %.1f m -> %.3f kPa; recomputed %d points", altitude, pressure, len(points)
    )
    return _replace(session, atmosphere=atmosphere, points=points)


def add_point(
    session: PsychroSession,
    point_id: str,
    input_pair: tuple,
    values: tuple[float, float],
    label: str = "",
) -> PsychroSession:
    """
    Add a state point resolved at the session pressure.

    A point that cannot be resolved is still stored, holding only its
    given values.
    """
    if point_id in session.points:
        raise ValueError(f"Point '{point_id}' already exists")
    state = derive_properties_from_pair(
        input_pair[0], values[0], input_pair[1], values[1], session.pressure, label=label
    )
    return _replace(session, points={**session.points, point_id: state})


def update_point(
    session: PsychroSession,
    point_id: str,
    input_pair: Optional[tuple] = None,
    values: Optional[tuple[float, float]] = None,
    label: Optional[str] = None,
) -> PsychroSession:
    """
    Edit a point's input pair, values or label and re-derive it.

    When the edited inputs cannot be resolved the point keeps its
    previous state.
    """
    if point_id not in session.points:
        raise KeyError(point_id)
    old = session.points[point_id]
    input_pair = old.input_pair if input_pair is None else input_pair
    values = old.input_values if values is None else values
    label = old.label if label is None else label

    state = derive_properties_from_pair(
        input_pair[0], values[0], input_pair[1], values[1], session.pressure, label=label
    )
    if not state.is_complete:
        logger.debug("Point '%s' edit not resolvable; keeping previous state", point_id)
        state = old.model_copy(update={"label": label})
    return _replace(session, points={**session.points, point_id: state})


def remove_point(session: PsychroSession, point_id: str) -> PsychroSession:
    """Remove a point and every process that references it."""
    if point_id not in session.points:
        raise KeyError(point_id)
    points = {pid: s for pid, s in session.points.items() if pid != point_id}
    processes = {
        pid: p
        for pid, p in session.processes.items()
        if point_id not in (p.start_point_id, p.end_point_id)
    }
    return _replace(session, points=points, processes=processes)


def add_process(session: PsychroSession, process: ProcessTransition) -> PsychroSession:
    """Add a process between two existing, distinct points."""
    if process.id in session.processes:
        raise ValueError(f"Process '{process.id}' already exists")
    for point_id in (process.start_point_id, process.end_point_id):
        if point_id not in session.points:
            raise ValueError(f"Process references unknown point '{point_id}'")
    if process.start_point_id == process.end_point_id:
        raise ValueError("A process needs two different points")
    return _replace(session, processes={**session.processes, process.id: process})


def remove_process(session: PsychroSession, process_id: str) -> PsychroSession:
    """Remove a process; its points are kept."""
    if process_id not in session.processes:
        raise KeyError(process_id)
    processes = {pid: p for pid, p in session.processes.items() if pid != process_id}
    return _replace(session, processes=processes)
