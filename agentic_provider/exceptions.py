# agentic_provider/agentic_provider/exceptions.py


class AgenticProviderError(Exception):
    """Base exception class for the agentic_provider library."""

    pass


class ConfigurationError(AgenticProviderError):
    """Exception raised for configuration errors (e.g., missing API key)."""

    pass


class ProviderError(AgenticProviderError):
    """Exception raised for errors originating from the remote endpoint."""

    pass


class ToolError(AgenticProviderError):
    """Exception raised for errors while registering or executing tools."""

    pass
