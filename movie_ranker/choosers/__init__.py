"""
Chooser implementations.
"""

from .prompt_chooser import PromptChooser
from .simulated_chooser import SimulatedChooser

__all__ = [
    "PromptChooser",
    "SimulatedChooser",
]
