"""
Adiabatic mixing process solver.

Models the mixing of two airstreams in a mixing box with no external heat
transfer. The mixed state lies on a straight line between the two entering
states on the psychrometric chart, positioned by the mass flow ratio (lever rule).

Conservation equations (dry-air mass basis):
    W_mix = f * W_1 + (1 - f) * W_2
    h_mix = f * h_1 + (1 - f) * h_2

where f = m_1 / (m_1 + m_2) is the stream-1 mass fraction (mixing_fraction).
"""

from psychrocalc.config import ParameterKind
from psychrocalc.engine.moist_air import dry_bulb_from_enthalpy
from psychrocalc.engine.state_resolver import resolve_state_point
from psychrocalc.engine.processes.base import ProcessSolver
from psychrocalc.models.process import ProcessInput, ProcessOutput, ProcessType
from psychrocalc.models.state_point import MoistAirState


def mix_states(
    stream1: MoistAirState,
    stream2: MoistAirState,
    fraction: float,
    pressure: float,
    label: str = "mixed",
) -> MoistAirState:
    """
    Resolve the mixed state of two streams.

    Args:
        stream1: First entering state (fully resolved)
        stream2: Second entering state (fully resolved)
        fraction: Stream-1 dry-air mass fraction, 0-1
        pressure: Barometric pressure, kPa

    Raises:
        ValueError: If the fraction is out of range, a stream is unresolved,
            or the mixed state would be supersaturated (fog)
    """
    if fraction < 0.0 or fraction > 1.0:
        raise ValueError(f"mixing_fraction must be between 0 and 1, got {fraction}")
    if not (stream1.is_complete and stream2.is_complete):
        raise ValueError("Both streams must be fully resolved before mixing")

    W_mix = fraction * stream1.W + (1.0 - fraction) * stream2.W
    h_mix = fraction * stream1.h + (1.0 - fraction) * stream2.h

    # Back-calculate Tdb from h and W (algebraic, not iterative)
    Tdb_mix = dry_bulb_from_enthalpy(h_mix, W_mix)

    try:
        return resolve_state_point(
            input_pair=(ParameterKind.TDB, ParameterKind.W),
            values=(Tdb_mix, W_mix),
            pressure=pressure,
            label=label,
        )
    except ValueError as e:
        raise ValueError(
            f"Mixed state (Tdb={Tdb_mix:.2f}°C, W={W_mix:.6f}) is not a valid "
            f"unsaturated state: {e}"
        )


class MixingSolver(ProcessSolver):
    """Solver for adiabatic mixing of two airstreams."""

    def solve(self, process_input: ProcessInput) -> ProcessOutput:
        pi = process_input

        # --- Validate required fields ---
        if pi.stream2_point_pair is None or pi.stream2_point_values is None:
            raise ValueError(
                "stream2_point_pair and stream2_point_values are required "
                "for adiabatic mixing"
            )
        if pi.mixing_fraction is None:
            raise ValueError("mixing_fraction is required for adiabatic mixing")

        f = pi.mixing_fraction
        warnings: list[str] = []
        if f == 0.0 or f == 1.0:
            stream_label = "stream 1" if f == 1.0 else "stream 2"
            warnings.append(
                f"mixing_fraction is {f}: the mixed state equals {stream_label} "
                f"(no actual mixing occurs)."
            )

        # --- Resolve both entering states ---
        stream1 = resolve_state_point(
            input_pair=pi.start_point_pair,
            values=pi.start_point_values,
            pressure=pi.pressure,
            label="stream_1",
        )
        stream2 = resolve_state_point(
            input_pair=pi.stream2_point_pair,
            values=pi.stream2_point_values,
            pressure=pi.pressure,
            label="stream_2",
        )

        mixed = mix_states(stream1, stream2, f, pi.pressure)

        metadata = {
            "stream2": stream2.model_dump(),
            "mixing_fraction": round(f, 4),
            "Tdb_mix": mixed.Tdb,
            "W_mix": mixed.W,
            "W_mix_display": mixed.W_display,
            "h_mix": mixed.h,
        }

        return ProcessOutput(
            process_type=ProcessType.MIXING,
            pressure=pi.pressure,
            start_point=stream1.model_dump(),
            end_point=mixed.model_dump(),
            metadata=metadata,
            warnings=warnings,
        )
