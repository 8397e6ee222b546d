"""
Exception hierarchy for reftree.

Only conditions a host must act on are raised. Dangling referencers,
depth pruning and repeated visits are handled silently by the renderer.
"""


class ReftreeError(Exception):
    """Base class for all reftree errors."""


class NodeNotFoundError(ReftreeError):
    """
    Raised when a requested root node is not known to the graph provider.

    Hosts usually answer this by offering to rebuild the index.

    Attributes:
        node_id: The identifier that failed to resolve.
    """

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(
            f"Node not found in index: {node_id}. Rebuild the index and try again."
        )


class IndexNotFoundError(ReftreeError):
    """
    Raised when the precomputed index file cannot be read.

    Attributes:
        path: Location that was tried.
    """

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"Index not found: {path}"
        super().__init__(f"{message} ({reason})" if reason else message)


class InvalidDepthError(ReftreeError, ValueError):
    """Raised when a negative maximum depth is requested."""

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"max_depth must be non-negative, got {max_depth}")


class RebuildError(ReftreeError):
    """
    Raised when the external rebuild command fails.

    Attributes:
        message: Human-readable error message.
        stderr: Raw stderr output from the command.
    """

    def __init__(self, message: str, stderr: str = ""):
        self.message = message
        self.stderr = stderr
        super().__init__(f"{message}: {stderr}" if stderr else message)


class SessionError(ReftreeError):
    """
    Raised when the session file cannot be written.

    Attributes:
        path: Location of the session file.
    """

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"Could not save session to {path}"
        super().__init__(f"{message} ({reason})" if reason else message)
