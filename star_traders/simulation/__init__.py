"""
Star Traders Simulation Package

Modules:
- economy: once-per-move economic adjustment
- simulator: headless autoplay harness
"""

from .economy import AdjustmentReport, adjust_values, pay_dividends
from .simulator import (
    SimulationConfig,
    SimulationResult,
    StarTradersSimulator,
    run_quick_simulation
)

__all__ = [
    # Economy
    'AdjustmentReport',
    'adjust_values',
    'pay_dividends',

    # Simulator
    'SimulationConfig',
    'SimulationResult',
    'StarTradersSimulator',
    'run_quick_simulation',
]
