class CatchfallError(Exception):
    """Base exception for the Catchfall project."""


class ConfigError(CatchfallError):
    """Raised when game configuration is invalid or cannot be read."""


class ScoreReportError(CatchfallError):
    """Raised when a final score could not be delivered to the reporting endpoint."""
