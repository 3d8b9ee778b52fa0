__all__ = [
    "LoadRunner",
    "LoadTestConfig",
    "RequestExecutor",
    "Result",
    "RunSummary",
    "aggregate",
    "render_report",
    "resolve_targets",
]


from .config import LoadTestConfig
from .core import LoadRunner
from .executor import RequestExecutor
from .metrics import aggregate
from .models import Result, RunSummary
from .rendering import render_report
from .targets import resolve_targets
