from .models import *

__all__ = [
    "MetricInfo",
    "MetricView",
    "SelectionView",
    "ServerOptions",
    "ServerStatus",
]
