"""Application package for GridSketch.

Contains the command dispatcher that the CLI read-eval loop drives.
"""

from .commands import CommandDispatcher, CommandOutcome

__all__ = ["CommandDispatcher", "CommandOutcome"]
