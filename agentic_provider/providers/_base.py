"""BaseProvider ABC: request assembly, the bounded tool-calling loop, and shared types."""

from __future__ import annotations

import abc
import dataclasses
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from ..exceptions import ConfigurationError
from ..tools.models import ToolCallRecord, ToolExecutionResult, ToolSpec
from ..tools.tool_factory import ToolExecutor, ToolFactory

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Normalised request / result models
# ---------------------------------------------------------------------------


class ProviderRequest(BaseModel):
    """Normalised request handed to :meth:`BaseProvider.execute_request`."""

    api_key: Optional[str] = None
    model: Optional[str] = None
    system_prompt: Optional[str] = None
    context: Optional[str] = None
    messages: List[Dict[str, Any]] = Field(default_factory=list)
    tools: Optional[List[ToolSpec]] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    response_format: Optional[Dict[str, Any]] = None


class TokenUsage(BaseModel):
    prompt: int = 0
    completion: int = 0
    total: int = 0

    def accumulate(self, usage: Optional[Dict[str, int]]) -> "TokenUsage":
        """Return a new total with *usage* added; missing fields count as zero."""
        if not usage:
            return self.model_copy()
        return TokenUsage(
            prompt=self.prompt + (usage.get("prompt_tokens") or 0),
            completion=self.completion + (usage.get("completion_tokens") or 0),
            total=self.total + (usage.get("total_tokens") or 0),
        )


class ProviderResult(BaseModel):
    """Normalised response returned to the caller.

    ``tool_calls`` and ``tool_results`` are ``None`` rather than empty lists
    when no tool invocation succeeded.
    """

    content: str = ""
    model: Optional[str] = None
    tokens: TokenUsage = Field(default_factory=TokenUsage)
    tool_calls: Optional[List[ToolCallRecord]] = None
    tool_results: Optional[List[Any]] = None


class ProviderInfo(BaseModel):
    """Static metadata describing a provider adapter."""

    id: str
    name: str
    description: str
    version: str
    models: List[str]
    default_model: str


# ---------------------------------------------------------------------------
# Normalised types returned by adapter _call_api
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProviderToolCall:
    """A single tool call from the provider."""

    call_id: str
    name: str
    arguments: str  # JSON string


@dataclass(frozen=True)
class ProviderResponse:
    """Normalised response from a single provider API call."""

    content: str
    tool_calls: List[ProviderToolCall] = field(default_factory=list)
    usage: Optional[Dict[str, int]] = None


@dataclass(frozen=True)
class ChatPayload:
    """Chat Completions request body.

    Optional fields left as ``None`` are omitted from :meth:`to_kwargs`
    instead of being sent as nulls.
    """

    model: str
    messages: List[Dict[str, Any]]
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    response_format: Optional[Dict[str, Any]] = None
    tools: Optional[List[Dict[str, Any]]] = None
    tool_choice: Optional[str] = None

    def with_messages(self, messages: List[Dict[str, Any]]) -> "ChatPayload":
        return dataclasses.replace(self, messages=list(messages))

    def to_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"model": self.model, "messages": self.messages}
        for name in (
            "temperature",
            "max_tokens",
            "response_format",
            "tools",
            "tool_choice",
        ):
            value = getattr(self, name)
            if value is not None:
                kwargs[name] = value
        return kwargs


# ---------------------------------------------------------------------------
# Loop bookkeeping
# ---------------------------------------------------------------------------

SKIP_INVALID_ARGUMENTS = "invalid_arguments"
SKIP_UNKNOWN_TOOL = "unknown_tool"
SKIP_EXECUTION_ERROR = "execution_error"
SKIP_UNSUCCESSFUL = "unsuccessful"


@dataclass(frozen=True)
class InvocationOutcome:
    """Result of processing one tool invocation: either executed or skipped."""

    call_id: str
    name: str
    skip_reason: Optional[str] = None
    record: Optional[ToolCallRecord] = None
    output: Any = None
    turns: Tuple[Dict[str, Any], ...] = ()

    @property
    def executed(self) -> bool:
        return self.skip_reason is None

    @classmethod
    def skipped(
        cls, tool_call: ProviderToolCall, reason: str
    ) -> "InvocationOutcome":
        return cls(
            call_id=tool_call.call_id, name=tool_call.name, skip_reason=reason
        )


@dataclass(frozen=True)
class LoopState:
    """Accumulators threaded through each iteration of the tool loop."""

    messages: Tuple[Dict[str, Any], ...]
    content: str = ""
    tokens: TokenUsage = field(default_factory=TokenUsage)
    tool_calls: Tuple[ToolCallRecord, ...] = ()
    tool_results: Tuple[Any, ...] = ()
    iterations: int = 0

    def with_outcome(self, outcome: InvocationOutcome) -> "LoopState":
        if not outcome.executed:
            return self
        return dataclasses.replace(
            self,
            messages=self.messages + outcome.turns,
            tool_calls=self.tool_calls + (outcome.record,),
            tool_results=self.tool_results + (outcome.output,),
        )

    def with_response(self, response: ProviderResponse) -> "LoopState":
        """Fold a follow-up round trip into the state and count the iteration."""
        return dataclasses.replace(
            self,
            content=response.content or self.content,
            tokens=self.tokens.accumulate(response.usage),
            iterations=self.iterations + 1,
        )


# ---------------------------------------------------------------------------
# BaseProvider ABC
# ---------------------------------------------------------------------------


class BaseProvider(abc.ABC):
    """Abstract base for provider adapters.

    Subclasses implement the transport-specific :meth:`_call_api`; this class
    owns message assembly, payload construction and the agentic loop.
    """

    PROVIDER_ID: str = ""
    NAME: str = ""
    DESCRIPTION: str = ""
    VERSION: str = "1.0.0"
    MODELS: Tuple[str, ...] = ()
    DEFAULT_MODEL: str = ""

    # Safety bound on follow-up round trips; not configurable.
    MAX_ITERATIONS = 10

    def __init__(
        self,
        *,
        tool_executor: Optional[ToolExecutor] = None,
        timeout: float = 180.0,
        **kwargs: Any,
    ) -> None:
        self.tool_executor: ToolExecutor = (
            tool_executor if tool_executor is not None else ToolFactory()
        )
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Abstract methods: each adapter MUST implement
    # ------------------------------------------------------------------

    @abc.abstractmethod
    async def _call_api(self, api_key: str, payload: ChatPayload) -> ProviderResponse:
        """Make a single round trip and return a normalised response."""
        ...

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @classmethod
    def info(cls) -> ProviderInfo:
        return ProviderInfo(
            id=cls.PROVIDER_ID,
            name=cls.NAME,
            description=cls.DESCRIPTION,
            version=cls.VERSION,
            models=list(cls.MODELS),
            default_model=cls.DEFAULT_MODEL,
        )

    # ------------------------------------------------------------------
    # Request building
    # ------------------------------------------------------------------

    @staticmethod
    def build_messages(request: ProviderRequest) -> List[Dict[str, Any]]:
        """System prompt, then context as a user turn, then the caller's messages."""
        messages: List[Dict[str, Any]] = []
        if request.system_prompt:
            messages.append({"role": "system", "content": request.system_prompt})
        if request.context:
            messages.append({"role": "user", "content": request.context})
        messages.extend(request.messages)
        return messages

    @staticmethod
    def _build_response_format(spec: Dict[str, Any]) -> Dict[str, Any]:
        # A spec without a nested "schema" is itself used as the schema.
        return {"type": "json_schema", "json_schema": spec.get("schema") or spec}

    def build_payload(self, request: ProviderRequest) -> ChatPayload:
        """Build the payload template reused for every round trip."""
        tools = (
            [tool.to_tool_definition() for tool in request.tools]
            if request.tools
            else None
        )
        return ChatPayload(
            model=request.model or self.DEFAULT_MODEL,
            messages=self.build_messages(request),
            temperature=request.temperature,
            max_tokens=request.max_tokens,
            response_format=(
                self._build_response_format(request.response_format)
                if request.response_format is not None
                else None
            ),
            tools=tools,
            tool_choice="auto" if tools else None,
        )

    # ------------------------------------------------------------------
    # Tool invocation handling
    # ------------------------------------------------------------------

    async def _process_invocation(
        self, request: ProviderRequest, tool_call: ProviderToolCall
    ) -> InvocationOutcome:
        """Resolve, execute and record one tool invocation.

        Never raises: every failure mode maps to a skipped outcome.
        """
        try:
            tool_args = json.loads(tool_call.arguments)
            if tool_args is None:
                tool_args = {}
            elif not isinstance(tool_args, dict):
                raise TypeError(
                    f"Tool arguments are not a JSON object. Type: {type(tool_args)}"
                )
        except (json.JSONDecodeError, TypeError) as e:
            logger.error(
                "Error processing tool call %s (%s): %s",
                tool_call.name,
                tool_call.call_id,
                e,
                extra={"error": str(e)},
            )
            return InvocationOutcome.skipped(tool_call, SKIP_INVALID_ARGUMENTS)

        tool = next((t for t in request.tools or [] if t.id == tool_call.name), None)
        if tool is None:
            return InvocationOutcome.skipped(tool_call, SKIP_UNKNOWN_TOOL)

        merged_args = {**tool.params, **tool_args}
        try:
            result: ToolExecutionResult = await self.tool_executor.execute_tool(
                tool_call.name, merged_args
            )
            if not result.success:
                logger.debug(
                    "Tool %s (%s) reported failure: %s",
                    tool_call.name,
                    tool_call.call_id,
                    result.error,
                )
                return InvocationOutcome.skipped(tool_call, SKIP_UNSUCCESSFUL)
            return self._executed_outcome(tool_call, tool_args, result)
        except Exception as e:
            logger.error(
                "Error processing tool call %s (%s): %s",
                tool_call.name,
                tool_call.call_id,
                e,
                exc_info=True,
                extra={"error": str(e)},
            )
            return InvocationOutcome.skipped(tool_call, SKIP_EXECUTION_ERROR)

    @staticmethod
    def _executed_outcome(
        tool_call: ProviderToolCall,
        tool_args: Dict[str, Any],
        result: ToolExecutionResult,
    ) -> InvocationOutcome:
        """Build the record and the assistant/tool turn pair for a successful call."""
        timing = result.timing
        record = ToolCallRecord(
            name=tool_call.name,
            arguments=tool_args,
            start_time=timing.start_time if timing else None,
            end_time=timing.end_time if timing else None,
            duration=timing.duration if timing else None,
            result=result.output,
        )
        turns = (
            {
                "role": "assistant",
                "content": None,
                "tool_calls": [
                    {
                        "id": tool_call.call_id,
                        "type": "function",
                        "function": {
                            "name": tool_call.name,
                            "arguments": tool_call.arguments,
                        },
                    }
                ],
            },
            {
                "role": "tool",
                "tool_call_id": tool_call.call_id,
                "content": json.dumps(result.output, default=str),
            },
        )
        return InvocationOutcome(
            call_id=tool_call.call_id,
            name=tool_call.name,
            record=record,
            output=result.output,
            turns=turns,
        )

    async def _process_batch(
        self,
        state: LoopState,
        request: ProviderRequest,
        tool_calls: List[ProviderToolCall],
    ) -> LoopState:
        """Process a response's tool calls sequentially, in the order returned."""
        logger.info("Tool calls received: %d", len(tool_calls))
        for tool_call in tool_calls:
            outcome = await self._process_invocation(request, tool_call)
            state = state.with_outcome(outcome)
        return state

    # ------------------------------------------------------------------
    # Public API: agentic loop
    # ------------------------------------------------------------------

    async def execute_request(self, request: ProviderRequest) -> ProviderResult:
        """Run the request, executing tool calls until the model stops or the cap is hit."""
        if not request.api_key:
            raise ConfigurationError(
                f"API key is required for {self.NAME or type(self).__name__}"
            )

        payload = self.build_payload(request)

        try:
            response = await self._call_api(request.api_key, payload)
            state = LoopState(
                messages=tuple(payload.messages),
                content=response.content or "",
                tokens=TokenUsage().accumulate(response.usage),
            )

            while state.iterations < self.MAX_ITERATIONS:
                if not response.tool_calls:
                    break

                state = await self._process_batch(state, request, response.tool_calls)

                response = await self._call_api(
                    request.api_key, payload.with_messages(list(state.messages))
                )
                state = state.with_response(response)
            else:
                if response.tool_calls:
                    logger.warning(
                        "Max tool iterations (%d) reached; returning partial result.",
                        self.MAX_ITERATIONS,
                    )
        except Exception as e:
            logger.error(
                "Error in %s request: %s",
                self.NAME or type(self).__name__,
                e,
                exc_info=True,
                extra={"error": str(e)},
            )
            raise

        return ProviderResult(
            content=state.content,
            model=request.model,
            tokens=state.tokens,
            tool_calls=list(state.tool_calls) or None,
            tool_results=list(state.tool_results) or None,
        )
