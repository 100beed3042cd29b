# agentic_provider/agentic_provider/client.py
import logging
import os
from typing import Any, Callable, Dict, List, Optional

from dotenv import load_dotenv

from .exceptions import AgenticProviderError, ConfigurationError
from .providers import (
    BaseProvider,
    ProviderRequest,
    ProviderResult,
    create_provider_instance,
)
from .tools.tool_factory import ToolFactory

module_logger = logging.getLogger(__name__)


class ProviderClient:
    """
    High-level client around a single registered provider.
    Resolves the API key, owns the ToolFactory used as the tool executor,
    and turns plain message lists into ``ProviderRequest`` objects.
    """

    def __init__(
        self,
        provider_type: str = "google",
        api_key: Optional[str] = None,
        tool_factory: Optional[ToolFactory] = None,
        **provider_kwargs: Any,
    ) -> None:
        """
        Initializes the ProviderClient.

        Args:
            provider_type (str): Identifier of the registered provider (e.g., 'google').
            api_key (str, optional): The API key or a path to a file containing it.
                                     Falls back to the provider's environment variable.
            tool_factory (ToolFactory, optional): Existing factory to execute tools with.
                                                  A new one is created if omitted.
            **provider_kwargs: Passed to the provider constructor (e.g., base_url, timeout).
        """
        module_logger.info(f"Initializing ProviderClient for provider: {provider_type}")

        self.provider_type = provider_type
        self.tool_factory = tool_factory or ToolFactory()

        try:
            self.provider: BaseProvider = create_provider_instance(
                provider_type,
                tool_executor=self.tool_factory,
                **provider_kwargs,
            )
        except AgenticProviderError as e:
            module_logger.error(f"Failed to initialize ProviderClient: {e}", exc_info=True)
            raise

        self.api_key = self._resolve_api_key(
            api_key, getattr(self.provider, "API_ENV_VAR", None)
        )

    # ------------------------------------------------------------------
    # API key resolution
    # ------------------------------------------------------------------

    @staticmethod
    def _load_api_key_from_file(key_path: str) -> str:
        """Loads the key from a file."""
        try:
            with open(key_path, "r") as f:
                key = f.read().strip()
        except OSError as e:
            raise ConfigurationError(f"Error reading API key file '{key_path}': {e}")
        if not key:
            raise ConfigurationError(f"API key file '{key_path}' is empty.")
        return key

    @staticmethod
    def _load_api_key_from_env(api_env_var: str) -> Optional[str]:
        """Loads the API key from the environment, reading ``.env`` in the CWD first."""
        load_dotenv(dotenv_path=os.path.join(os.getcwd(), ".env"))
        return os.environ.get(api_env_var) or None

    def _resolve_api_key(
        self, api_key: Optional[str], api_env_var: Optional[str]
    ) -> Optional[str]:
        if api_key and os.path.isfile(api_key):
            return self._load_api_key_from_file(api_key)
        if api_key:
            return api_key
        if api_env_var:
            key = self._load_api_key_from_env(api_env_var)
            if key:
                return key
            # The provider raises ConfigurationError when a request is made.
            module_logger.warning(
                "Environment variable '%s' not found or is empty.", api_env_var
            )
        return None

    # ------------------------------------------------------------------
    # Tools
    # ------------------------------------------------------------------

    def register_tool(
        self,
        function: Callable[..., Any],
        name: Optional[str] = None,
        description: Optional[str] = None,
        parameters: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Registers a Python function as a tool with the internal ToolFactory.

        Args:
            function (Callable): The Python function to register.
            name (str, optional): The name for the tool. Defaults to the function's __name__.
            description (str, optional): Defaults to the function's docstring.
            parameters (Dict[str, Any], optional): JSON schema of the function's parameters.
            params (Dict[str, Any], optional): Fixed arguments merged under the model's.
        """
        if name is None:
            name = function.__name__
        if description is None:
            docstring = function.__doc__ or ""
            description = docstring.strip() or f"Executes the {name} function."
            if not function.__doc__:
                module_logger.warning(
                    f"Tool function '{name}' has no docstring. Using generic description."
                )

        self.tool_factory.register_tool(
            function=function,
            name=name,
            description=description,
            parameters=parameters,
            params=params,
        )

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def generate(
        self,
        messages: List[Dict[str, Any]],
        *,
        model: Optional[str] = None,
        system_prompt: Optional[str] = None,
        context: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        response_format: Optional[Dict[str, Any]] = None,
        use_tools: Optional[List[str]] = [],
    ) -> ProviderResult:
        """
        Sends ``messages`` to the provider, running any tool calls the model makes.

        Args:
            messages: The conversation so far, in Chat Completions format.
            model: Overrides the provider's default model.
            use_tools: ``[]`` (default) exposes every registered tool, ``None``
                disables tools, a non-empty list restricts to those names.

        Raises:
            ConfigurationError: If no API key could be resolved.
            ProviderError: If a call to the remote endpoint fails.
        """
        tools = (
            None
            if use_tools is None
            else self.tool_factory.get_tool_specs(use_tools or None)
        )
        request = ProviderRequest(
            api_key=self.api_key,
            model=model,
            system_prompt=system_prompt,
            context=context,
            messages=list(messages),
            tools=tools or None,
            temperature=temperature,
            max_tokens=max_tokens,
            response_format=response_format,
        )
        return await self.provider.execute_request(request)
