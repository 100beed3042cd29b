from .models import ToolCallRecord, ToolExecutionResult, ToolSpec, ToolTiming
from .tool_factory import ToolExecutor, ToolFactory

__all__ = [
    "ToolFactory",
    "ToolExecutor",
    "ToolSpec",
    "ToolTiming",
    "ToolExecutionResult",
    "ToolCallRecord",
]
