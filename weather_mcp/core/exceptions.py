"""Custom exception hierarchy for the weather MCP server.

Provides structured exceptions with error codes and recovery hints.
"""


class WeatherMCPError(Exception):
    """Base exception for weather MCP errors.

    Attributes:
        message: Human-readable error message.
        code: Machine-readable error code.
        recoverable: Whether the error is potentially recoverable.
    """

    def __init__(
        self,
        message: str,
        code: str,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.recoverable = recoverable

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, str | bool]:
        """Convert exception to dictionary for JSON serialization.

        Returns:
            Dictionary with error details.
        """
        return {
            "error": self.code,
            "message": self.message,
            "recoverable": self.recoverable,
        }


class UnknownToolError(WeatherMCPError):
    """Requested tool is not in the catalog.

    Raised by the tool router before anything reaches the data provider.
    """

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Unknown tool: {tool_name}", "UNKNOWN_TOOL")
        self.tool_name = tool_name


class InvalidArgumentError(WeatherMCPError):
    """A tool argument has an unusable value."""

    def __init__(self, tool_name: str, argument: str, message: str) -> None:
        super().__init__(message, "INVALID_ARGUMENT")
        self.tool_name = tool_name
        self.argument = argument


class MissingArgumentError(InvalidArgumentError):
    """A required tool argument is absent or null."""

    def __init__(self, tool_name: str, argument: str) -> None:
        super().__init__(
            tool_name,
            argument,
            f"Missing required argument '{argument}' for tool '{tool_name}'",
        )


class JsonRpcParseError(WeatherMCPError):
    """Inbound message body is not valid JSON.

    Raised at the binding boundary; never reaches the tool router.
    """

    def __init__(self, cause: Exception | None = None) -> None:
        message = "Invalid JSON"
        if cause:
            message += f": {cause}"
        super().__init__(message, "PARSE_ERROR")
        self.cause = cause


class NoActiveChannelError(WeatherMCPError):
    """A side-channel message arrived while no push channel is open."""

    def __init__(self) -> None:
        super().__init__("No active SSE transport", "NO_CHANNEL")


class ConfigurationError(WeatherMCPError):
    """Invalid configuration.

    Raised when configuration is invalid or missing required values.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, "CONFIG", recoverable=False)
