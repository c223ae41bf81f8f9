"""
Energy balance between two state points.

For a dry-air mass flow m the total energy change is m·(h2 − h1). It splits
exactly into a sensible part at the entering humidity and a latent part at
the leaving temperature:

    Qs = m · (c_pa + c_pv·W1) · (t2 − t1)
    Ql = m · (W2 − W1) · (h_fg0 + c_pv·t2)
"""

from psychrocalc.config import CP_DRY_AIR, CP_WATER_VAPOR, H_FG_0C, DEFAULT_MASS_FLOW
from psychrocalc.engine.state_resolver import resolve_state_point
from psychrocalc.engine.processes.base import ProcessSolver
from psychrocalc.models.process import (
    ProcessInput,
    ProcessOutput,
    ProcessType,
    ProcessEnergy,
)
from psychrocalc.models.state_point import MoistAirState

# Changes smaller than these count as "no change" when classifying
_DELTA_T_EPS = 1e-3  # K
_DELTA_W_EPS = 1e-6  # kg/kg


def calculate_energy(
    start: MoistAirState, end: MoistAirState, mass_flow: float = DEFAULT_MASS_FLOW
) -> ProcessEnergy:
    """
    Sensible, latent and total energy change from start to end.

    Positive values mean energy added to the air.
    """
    if not (start.is_complete and end.is_complete):
        raise ValueError("Both state points must be fully resolved")
    if mass_flow <= 0.0:
        raise ValueError(f"mass_flow must be positive, got {mass_flow}")

    delta_T = end.Tdb - start.Tdb
    delta_W = end.W - start.W
    delta_h = end.h - start.h

    Q_sensible = mass_flow * (CP_DRY_AIR + CP_WATER_VAPOR * start.W) * delta_T
    Q_latent = mass_flow * delta_W * (H_FG_0C + CP_WATER_VAPOR * end.Tdb)
    Q_total = mass_flow * delta_h

    SHR = None
    if abs(Q_sensible + Q_latent) > 1e-9:
        SHR = Q_sensible / (Q_sensible + Q_latent)

    return ProcessEnergy(
        mass_flow=mass_flow,
        delta_T=round(delta_T, 4),
        delta_W=round(delta_W, 8),
        delta_h=round(delta_h, 4),
        Q_sensible=round(Q_sensible, 4),
        Q_latent=round(Q_latent, 4),
        Q_total=round(Q_total, 4),
        SHR=None if SHR is None else round(SHR, 4),
    )


def classify_process(start: MoistAirState, end: MoistAirState) -> ProcessType:
    """Name the process by which of Tdb and W change."""
    delta_T = end.Tdb - start.Tdb
    delta_W = end.W - start.W

    if abs(delta_W) < _DELTA_W_EPS:
        return ProcessType.HEATING if delta_T >= 0.0 else ProcessType.COOLING
    if abs(delta_T) < _DELTA_T_EPS:
        return (
            ProcessType.HUMIDIFICATION if delta_W > 0.0 else ProcessType.DEHUMIDIFICATION
        )
    return ProcessType.CUSTOM


class EnergyBalanceSolver(ProcessSolver):
    """Energy analysis of a process with known entering and leaving states."""

    def solve(self, process_input: ProcessInput) -> ProcessOutput:
        pi = process_input

        if pi.end_point_pair is None or pi.end_point_values is None:
            raise ValueError(
                "end_point_pair and end_point_values are required "
                f"for a {pi.process_type.value} process"
            )

        start = resolve_state_point(
            input_pair=pi.start_point_pair,
            values=pi.start_point_values,
            pressure=pi.pressure,
            label="start",
        )
        end = resolve_state_point(
            input_pair=pi.end_point_pair,
            values=pi.end_point_values,
            pressure=pi.pressure,
            label="end",
        )

        # Volumetric airflow is taken at the entering state: m = V / v
        if pi.mass_flow is not None:
            mass_flow = pi.mass_flow
        elif pi.airflow is not None:
            if pi.airflow <= 0.0:
                raise ValueError(f"airflow must be positive, got {pi.airflow}")
            mass_flow = pi.airflow / start.v
        else:
            mass_flow = DEFAULT_MASS_FLOW

        energy = calculate_energy(start, end, mass_flow)
        actual_type = classify_process(start, end)

        warnings: list[str] = []
        if pi.process_type != ProcessType.CUSTOM and actual_type != pi.process_type:
            warnings.append(
                f"States describe a {actual_type.value} process, "
                f"not {pi.process_type.value}."
            )

        metadata = {
            "classified_type": actual_type.value,
            "mass_flow": round(mass_flow, 6),
        }
        if pi.airflow is not None and pi.mass_flow is None:
            metadata["airflow"] = pi.airflow

        return ProcessOutput(
            process_type=pi.process_type,
            pressure=pi.pressure,
            start_point=start.model_dump(),
            end_point=end.model_dump(),
            energy=energy,
            metadata=metadata,
            warnings=warnings,
        )
