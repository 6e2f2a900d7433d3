"""Workflow management for multi-day pharmacy simulations."""

from .simulation import DailySnapshot, SimulationConfig, SimulationResult, run_simulation

__all__ = [
    'DailySnapshot',
    'SimulationConfig',
    'SimulationResult',
    'run_simulation',
]
