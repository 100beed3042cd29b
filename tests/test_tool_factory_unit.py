"""Unit tests for ToolFactory registration, execution and usage counts."""

from __future__ import annotations

import pytest

from agentic_provider.exceptions import ToolError
from agentic_provider.tools.models import ToolExecutionResult, ToolTiming
from agentic_provider.tools.tool_factory import ToolExecutor, ToolFactory

_ADD_PARAMS = {
    "type": "object",
    "properties": {"a": {"type": "integer"}, "b": {"type": "integer"}},
    "required": ["a", "b"],
}


def _add(a: int, b: int) -> dict:
    return {"sum": a + b}


async def _async_add(a: int, b: int) -> dict:
    return {"sum": a + b}


def _explode() -> None:
    raise RuntimeError("kaboom")


def _factory() -> ToolFactory:
    factory = ToolFactory()
    factory.register_tool(_add, name="add", description="Add", parameters=_ADD_PARAMS)
    return factory


def test_factory_satisfies_executor_protocol() -> None:
    assert isinstance(ToolFactory(), ToolExecutor)


def test_register_rejects_non_callable() -> None:
    with pytest.raises(ToolError):
        ToolFactory().register_tool("nope", name="bad", description="bad")  # type: ignore[arg-type]


def test_get_tool_specs_all_and_filtered() -> None:
    factory = _factory()
    factory.register_tool(
        _explode, name="explode", description="Explodes", params={"force": 9}
    )

    all_specs = factory.get_tool_specs()
    assert [s.id for s in all_specs] == ["add", "explode"]
    assert all_specs[0].parameters == _ADD_PARAMS
    assert all_specs[1].params == {"force": 9}

    filtered = factory.get_tool_specs(["explode", "missing"])
    assert [s.id for s in filtered] == ["explode"]
    assert factory.get_tool_specs([]) == []


def test_reregistering_overwrites_spec() -> None:
    factory = _factory()
    factory.register_tool(_add, name="add", description="Add v2")

    specs = factory.get_tool_specs()
    assert len(specs) == 1
    assert specs[0].description == "Add v2"


@pytest.mark.asyncio
async def test_execute_sync_tool_wraps_output_with_timing() -> None:
    result = await _factory().execute_tool("add", {"a": 2, "b": 3})

    assert result.success is True
    assert result.output == {"sum": 5}
    assert result.timing is not None
    assert result.timing.duration >= 0
    assert result.timing.start_time <= result.timing.end_time


@pytest.mark.asyncio
async def test_execute_async_tool() -> None:
    factory = ToolFactory()
    factory.register_tool(_async_add, name="async_add", description="Add")

    result = await factory.execute_tool("async_add", {"a": 1, "b": 1})

    assert result.success is True
    assert result.output == {"sum": 2}


@pytest.mark.asyncio
async def test_execute_passes_through_tool_execution_result() -> None:
    timing = ToolTiming(start_time="s", end_time="e", duration=1.5)

    def _timed() -> ToolExecutionResult:
        return ToolExecutionResult(success=True, output="x", timing=timing)

    def _failed() -> ToolExecutionResult:
        return ToolExecutionResult(success=False, error="upstream 404")

    factory = ToolFactory()
    factory.register_tool(_timed, name="timed", description="t")
    factory.register_tool(_failed, name="failed", description="f")

    timed = await factory.execute_tool("timed", {})
    failed = await factory.execute_tool("failed", {})

    assert timed.timing == timing
    assert failed.success is False
    assert failed.error == "upstream 404"
    assert failed.timing is not None


@pytest.mark.asyncio
async def test_execute_unknown_tool_reports_failure() -> None:
    result = await ToolFactory().execute_tool("ghost", {})

    assert result.success is False
    assert result.error is not None and "not found" in result.error


@pytest.mark.asyncio
async def test_execute_exception_reports_failure() -> None:
    factory = ToolFactory()
    factory.register_tool(_explode, name="explode", description="Explodes")

    result = await factory.execute_tool("explode", {})

    assert result.success is False
    assert result.error is not None and "kaboom" in result.error


@pytest.mark.asyncio
async def test_execute_bad_arguments_reports_failure() -> None:
    result = await _factory().execute_tool("add", {"a": 1})

    assert result.success is False


@pytest.mark.asyncio
async def test_usage_counts_and_reset() -> None:
    factory = _factory()
    await factory.execute_tool("add", {"a": 1, "b": 2})
    await factory.execute_tool("add", {"a": 3, "b": 4})
    await factory.execute_tool("ghost", {})

    assert factory.get_tool_usage_counts() == {"add": 2}

    factory.reset_tool_usage_counts()
    assert factory.get_tool_usage_counts() == {"add": 0}
    assert factory.available_tool_names == ["add"]
