"""Custom Exceptions for the SubView application."""

class SubViewError(Exception):
    """Base class for exceptions in this module."""
    pass

class ConfigurationError(SubViewError):
    """Exception raised for errors in configuration loading."""
    pass

class FeedParseError(SubViewError):
    """Exception raised when the subtitle feed content is not well-formed."""
    pass

class WatcherError(SubViewError):
    """Exception raised for misuse or failure of the feed change watcher."""
    pass

class FileSystemError(SubViewError):
    """Exception raised for file system related errors (permissions, not found etc)."""
    pass
