"""
Abstract base class for process solvers (energy balance, mixing).
"""

from abc import ABC, abstractmethod

from psychrocalc.models.process import ProcessInput, ProcessOutput


class ProcessSolver(ABC):
    """Resolves the states of a ProcessInput and reports the result."""

    @abstractmethod
    def solve(self, process_input: ProcessInput) -> ProcessOutput:
        """
        Raises:
            ValueError: If an input state or a process parameter is invalid
        """
        ...
