"""
Utility modules
"""

from .input_parser import InputParser, InputError
from .visualization import Visualizer

__all__ = ['InputParser', 'InputError', 'Visualizer']
