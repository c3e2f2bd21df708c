"""Kernel value types — public re-export surface.

Modules:
  result.py — Success, Failure, Result
  option.py — Some, Nothing, Option
"""

from txbus.kernel.types.option import Nothing, Option, Some
from txbus.kernel.types.result import Failure, Result, Success

__all__ = [
    "Failure",
    "Nothing",
    "Option",
    "Result",
    "Some",
    "Success",
]
