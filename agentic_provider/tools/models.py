# agentic_provider/agentic_provider/tools/models.py
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ToolSpec(BaseModel):
    """A capability the model may invoke during a request."""

    id: str  # Name the model uses to call the tool, unique within a request
    description: str = ""
    parameters: Dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )
    params: Dict[str, Any] = Field(
        default_factory=dict,
        description="Fixed arguments merged underneath the model-supplied ones",
    )

    def to_tool_definition(self) -> Dict[str, Any]:
        """Return the Chat Completions ``function`` tool descriptor."""
        return {
            "type": "function",
            "function": {
                "name": self.id,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


class ToolTiming(BaseModel):
    start_time: str  # ISO-8601
    end_time: str  # ISO-8601
    duration: float  # Milliseconds


class ToolExecutionResult(BaseModel):
    """Outcome reported by a tool executor for a single invocation."""

    success: bool
    output: Any = None  # Structured value fed back to the model as JSON
    timing: Optional[ToolTiming] = None
    error: Optional[str] = None  # Populated when success is False


class ToolCallRecord(BaseModel):
    """A tool invocation that resolved to a known tool and succeeded."""

    name: str
    arguments: Dict[str, Any]  # Parsed call arguments, before merging params
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    duration: Optional[float] = None
    result: Any = None
