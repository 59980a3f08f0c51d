"""errwrap package root."""

from errwrap.exceptions import ConfigError, ErrwrapError, ExternalToolError, SourceFileError

__all__ = [
    "__version__",
    "ConfigError",
    "ErrwrapError",
    "ExternalToolError",
    "SourceFileError",
]

__version__ = "0.1.0"
