"""Procesador package: memory image and IR execution engine"""

from .memory import Memory
from .executor import Executor, InputNeeded

__all__ = ["Memory", "Executor", "InputNeeded"]
