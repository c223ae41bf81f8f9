"""
Pydantic model for a calculation session: the points and processes a chart
user is working with, plus the atmospheric context they share.
"""

from pydantic import BaseModel, Field

from psychrocalc.models.atmosphere import AtmosphericContext
from psychrocalc.models.process import ProcessTransition
from psychrocalc.models.state_point import MoistAirState


class PsychroSession(BaseModel):
    """Immutable snapshot; session operations return a new instance."""

    model_config = {"frozen": True}

    atmosphere: AtmosphericContext = Field(default_factory=AtmosphericContext)
    points: dict[str, MoistAirState] = Field(default_factory=dict)
    processes: dict[str, ProcessTransition] = Field(default_factory=dict)

    @property
    def pressure(self) -> float:
        return self.atmosphere.pressure
