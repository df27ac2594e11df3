from typing import Any, Dict, Optional


class TabscopeException(Exception):
    """Base exception for tabscope errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class UnparsableDatasetError(TabscopeException):
    """Raised when an upload yields no rows or the file reader fails."""

    def __init__(self, file_name: str, reason: str = "no rows could be parsed"):
        super().__init__(
            f"Could not analyze '{file_name}': {reason}. Please check the file format.",
            details={"file_name": file_name, "reason": reason},
        )


class SelectionError(TabscopeException):
    """Raised when a target/feature selection does not match the dataset."""
