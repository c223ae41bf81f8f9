"""
API routes for state point resolution.
"""

from fastapi import APIRouter, HTTPException

from psychrocalc.models.state_point import StatePointInput, MoistAirState
from psychrocalc.engine.state_resolver import resolve_state_point
from psychrocalc.engine.atmosphere import pressure_from_altitude

router = APIRouter(prefix="/api/v1", tags=["state-point"])


@router.post("/state-point", response_model=MoistAirState)
async def create_state_point(data: StatePointInput) -> MoistAirState:
    """
    Resolve a full psychrometric state point from two independent properties.

    Accepts any supported input pair (e.g., Tdb+RH, Tdb+Twb, Tdb+Tdp, etc.)
    and returns all psychrometric properties.
    """
    try:
        return resolve_state_point(
            input_pair=data.input_pair,
            values=data.values,
            pressure=data.pressure,
            label=data.label,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")


@router.get("/pressure-from-altitude")
async def get_pressure_from_altitude(altitude: float) -> dict:
    """
    Convert altitude (m) to standard-atmosphere barometric pressure (kPa).
    """
    try:
        pressure = pressure_from_altitude(altitude)
        return {"altitude": altitude, "pressure": round(pressure, 6)}
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")
