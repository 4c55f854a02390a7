from .drawer import Drawer
from .line import DataLimits, LineChart, Series, format_tick

__all__ = [
    "DataLimits",
    "Drawer",
    "LineChart",
    "Series",
    "format_tick",
]
