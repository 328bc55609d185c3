"""
FUTDash: owned players and SBC rankings for FC Ultimate Team
"""

from ._version import __version__
from .context import DashboardContext

__all__ = [
    "DashboardContext",
    "__version__",
]
