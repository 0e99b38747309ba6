"""
Core modules for CPU Scheduling Simulator
"""

from .process import (Process, ProcessState, ProcessTable, TickObservation,
                      SchedulerContractError)
from .scheduler_base import BaseScheduler, SchedulerStats, GanttEntry, SimulationState

__all__ = [
    'Process',
    'ProcessState',
    'ProcessTable',
    'TickObservation',
    'SchedulerContractError',
    'BaseScheduler',
    'SchedulerStats',
    'GanttEntry',
    'SimulationState'
]
