# agentic_provider/agentic_provider/providers/__init__.py
import importlib
import logging
import os
from typing import List, Type

from ..exceptions import ConfigurationError
from ._base import (
    BaseProvider,
    ChatPayload,
    InvocationOutcome,
    LoopState,
    ProviderInfo,
    ProviderRequest,
    ProviderResponse,
    ProviderResult,
    ProviderToolCall,
    TokenUsage,
)

_provider_registry: dict[str, Type[BaseProvider]] = {}
_providers_discovered = False
module_logger = logging.getLogger(__name__)


def register_provider(name: str):
    """
    Decorator to register provider adapter classes.

    Args:
        name (str): The identifier for the provider (e.g., 'google').
    """

    def decorator(cls):
        if not issubclass(cls, BaseProvider):
            raise TypeError(
                f"Class {cls.__name__} must inherit from BaseProvider to be registered."
            )
        if name in _provider_registry:
            module_logger.warning(
                "Provider '%s' is already registered. Overwriting with %s.",
                name,
                cls.__name__,
            )
        _provider_registry[name] = cls
        module_logger.info("Registered provider: '%s' -> %s", name, cls.__name__)
        return cls

    return decorator


def _discover_providers(provider_dir: str | None = None):
    """
    Imports every provider module in ``provider_dir`` so that their
    registration decorators run. Modules starting with ``_`` are skipped.
    """
    global _providers_discovered
    if _providers_discovered:
        return

    if provider_dir is None:
        provider_dir = os.path.dirname(__file__)

    module_logger.debug("Discovering providers in: %s", provider_dir)
    for filename in sorted(os.listdir(provider_dir)):
        if filename.endswith(".py") and not filename.startswith("_"):
            module_path = f"{__name__}.{filename[:-3]}"
            try:
                importlib.import_module(module_path)
                module_logger.debug("Imported provider module: %s", module_path)
            except ImportError as e:
                module_logger.warning(
                    "Could not import provider module %s. Error: %s", module_path, e
                )

    _providers_discovered = True


def list_providers() -> List[ProviderInfo]:
    """Returns metadata for every registered provider."""
    _discover_providers()
    return [cls.info() for cls in _provider_registry.values()]


def create_provider_instance(provider_type: str, **kwargs) -> BaseProvider:
    """
    Creates an instance of the specified provider class.

    Args:
        provider_type (str): The provider identifier (e.g., 'google').
        **kwargs: Passed to the provider's constructor
                  (e.g., tool_executor, base_url, timeout).

    Raises:
        ConfigurationError: If the provider type is not registered or cannot be built.
    """
    _discover_providers()

    provider_class = _provider_registry.get(provider_type.lower())
    if not provider_class:
        available = sorted(_provider_registry)
        raise ConfigurationError(
            f"Invalid provider type: '{provider_type}'. Available providers: {available}"
        )

    try:
        return provider_class(**kwargs)
    except TypeError as e:
        module_logger.error(
            "Failed to instantiate provider '%s': %s", provider_type, e, exc_info=True
        )
        raise ConfigurationError(
            f"Could not create instance of provider '{provider_type}': {e}"
        ) from e


__all__ = [
    "BaseProvider",
    "ChatPayload",
    "InvocationOutcome",
    "LoopState",
    "ProviderInfo",
    "ProviderRequest",
    "ProviderResponse",
    "ProviderResult",
    "ProviderToolCall",
    "TokenUsage",
    "register_provider",
    "create_provider_instance",
    "list_providers",
]
