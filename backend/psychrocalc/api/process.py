"""
API routes for psychrometric process calculations.
"""

from fastapi import APIRouter, HTTPException

from psychrocalc.models.process import ProcessInput, ProcessOutput, ProcessType
from psychrocalc.engine.processes.energy import EnergyBalanceSolver
from psychrocalc.engine.processes.mixing import MixingSolver

router = APIRouter(prefix="/api/v1", tags=["process"])

_energy_solver = EnergyBalanceSolver()

# Solver dispatch table — maps process types to solver instances
_SOLVERS = {
    ProcessType.HEATING: _energy_solver,
    ProcessType.COOLING: _energy_solver,
    ProcessType.HUMIDIFICATION: _energy_solver,
    ProcessType.DEHUMIDIFICATION: _energy_solver,
    ProcessType.CUSTOM: _energy_solver,
    ProcessType.MIXING: MixingSolver(),
}


@router.post("/process", response_model=ProcessOutput)
async def calculate_process(data: ProcessInput) -> ProcessOutput:
    """
    Calculate a psychrometric process.

    Dispatches to the appropriate solver based on process_type.
    Returns start state, end state, energy change, metadata, and any warnings.
    """
    solver = _SOLVERS[data.process_type]
    try:
        return solver.solve(data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")
