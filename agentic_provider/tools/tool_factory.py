# agentic_provider/agentic_provider/tools/tool_factory.py
import asyncio
import logging
import time
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable

from ..exceptions import ToolError
from .models import ToolExecutionResult, ToolSpec, ToolTiming

module_logger = logging.getLogger(__name__)


@runtime_checkable
class ToolExecutor(Protocol):
    """Anything able to run a named tool with structured arguments."""

    async def execute_tool(
        self, name: str, args: Dict[str, Any]
    ) -> ToolExecutionResult: ...


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ToolFactory:
    """
    Registry and executor for the tools a provider can hand to the model.
    Tools are plain (sync or async) callables taking keyword arguments.
    Tracks how often each tool was executed.
    """

    def __init__(self):
        self.tools: Dict[str, Callable] = {}
        self._specs: Dict[str, ToolSpec] = {}
        self.tool_usage_counts: Dict[str, int] = defaultdict(int)
        module_logger.info("ToolFactory initialized.")

    def register_tool(
        self,
        function: Callable,
        name: str,
        description: str,
        parameters: Dict[str, Any] | None = None,
        params: Dict[str, Any] | None = None,
    ):
        """
        Registers a tool function and the spec exposed to the model.

        Args:
            function: The callable to execute. May be sync or async.
            name: The name the model will use to call the function. Should be unique.
            description: A description for the model explaining what the tool does.
            parameters: JSON Schema object describing the function's parameters.
            params: Fixed arguments merged underneath the model's arguments on every call.
        """
        if not callable(function):
            raise ToolError(f"Tool '{name}' must be callable.")
        if name in self.tools:
            module_logger.warning(f"Tool '{name}' is already registered. Overwriting.")

        if parameters is not None and (
            not isinstance(parameters, dict) or parameters.get("type") != "object"
        ):
            module_logger.warning(
                "Tool '%s' parameters does not seem to be a valid JSON "
                "Schema object. Ensure it follows the provider's expected format.",
                name,
            )

        spec_kwargs: Dict[str, Any] = {"id": name, "description": description}
        if parameters is not None:
            spec_kwargs["parameters"] = parameters
        if params:
            spec_kwargs["params"] = dict(params)

        self.tools[name] = function
        self._specs[name] = ToolSpec(**spec_kwargs)
        self.tool_usage_counts[name] = 0
        module_logger.info(f"Registered tool: {name}")

    def get_tool_specs(
        self, filter_tool_names: Optional[List[str]] = None
    ) -> List[ToolSpec]:
        """
        Returns the registered tool specs, optionally filtered by name.

        Args:
            filter_tool_names (Optional[List[str]]): Names to include. ``None``
                returns every registered tool; an empty list returns none.
        """
        if filter_tool_names is None:
            return list(self._specs.values())

        allowed = set(filter_tool_names)
        specs = [spec for name, spec in self._specs.items() if name in allowed]
        missing = allowed - {spec.id for spec in specs}
        if missing:
            module_logger.warning(
                f"Requested tools not found in factory: {sorted(missing)}. They will be excluded."
            )
        return specs

    async def execute_tool(
        self, name: str, args: Dict[str, Any]
    ) -> ToolExecutionResult:
        """
        Executes the tool registered under ``name`` with ``args``.

        Failures never raise: an unknown tool or an exception inside the tool
        is reported as ``success=False`` with ``error`` set. Plain return
        values become the ``output``; a returned ``ToolExecutionResult`` is
        passed through (timing is filled in when the tool did not set it).
        """
        tool_function = self.tools.get(name)
        if tool_function is None:
            error_msg = f"Tool '{name}' not found."
            module_logger.error(error_msg)
            return ToolExecutionResult(success=False, error=error_msg)

        self.tool_usage_counts[name] += 1
        start_time = _utc_now_iso()
        started = time.perf_counter()
        try:
            module_logger.debug(f"Executing tool '{name}' with args: {args}")
            if asyncio.iscoroutinefunction(tool_function):
                result = await tool_function(**args)
            else:
                result = tool_function(**args)
                if asyncio.iscoroutine(result):
                    result = await result
        except Exception as e:
            error_msg = f"Execution failed unexpectedly within tool '{name}': {e}"
            module_logger.exception(f"Error during tool execution for {name}")
            return ToolExecutionResult(success=False, error=error_msg)

        timing = ToolTiming(
            start_time=start_time,
            end_time=_utc_now_iso(),
            duration=(time.perf_counter() - started) * 1000.0,
        )
        if isinstance(result, ToolExecutionResult):
            if result.timing is None:
                result = result.model_copy(update={"timing": timing})
            return result
        return ToolExecutionResult(success=True, output=result, timing=timing)

    def get_tool_usage_counts(self) -> Dict[str, int]:
        """Returns a dictionary of tool names and their usage counts."""
        return dict(self.tool_usage_counts)

    def reset_tool_usage_counts(self):
        """Resets all tool usage counts to zero."""
        for tool_name in self.tool_usage_counts:
            self.tool_usage_counts[tool_name] = 0
        module_logger.info("All tool usage counts have been reset.")

    @property
    def available_tool_names(self) -> List[str]:
        """Returns a list of all registered tool names."""
        return list(self.tools)
