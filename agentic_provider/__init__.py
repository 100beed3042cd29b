# agentic_provider/agentic_provider/__init__.py
import logging
import os

from dotenv import load_dotenv

# Library logging: applications attach their own handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Load a .env from the CWD early so provider API keys are available.
try:
    dotenv_path = os.path.join(os.getcwd(), ".env")
    if os.path.exists(dotenv_path):
        load_dotenv(dotenv_path=dotenv_path)
except OSError as e:
    logging.getLogger(__name__).warning(f"Could not load .env file: {e}")


from .client import ProviderClient  # noqa: E402
from .exceptions import (  # noqa: E402
    AgenticProviderError,
    ConfigurationError,
    ProviderError,
    ToolError,
)
from .models import ModelInfo, get_model_info, list_models  # noqa: E402
from .providers import (  # noqa: E402
    BaseProvider,
    ProviderRequest,
    ProviderResult,
    TokenUsage,
    create_provider_instance,
    list_providers,
)
from .tools import (  # noqa: E402
    ToolCallRecord,
    ToolExecutionResult,
    ToolFactory,
    ToolSpec,
)

__all__ = [
    "ProviderClient",
    "BaseProvider",
    "ProviderRequest",
    "ProviderResult",
    "TokenUsage",
    "ToolFactory",
    "ToolSpec",
    "ToolExecutionResult",
    "ToolCallRecord",
    "AgenticProviderError",
    "ConfigurationError",
    "ProviderError",
    "ToolError",
    "ModelInfo",
    "get_model_info",
    "list_models",
    "create_provider_instance",
    "list_providers",
]

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("agentic_provider")
except PackageNotFoundError:
    __version__ = "0.0.0-unknown"
