from __future__ import annotations

import os
from typing import Optional


class ResolverException(Exception):
    """A base class for all exceptions raised by the resolver.

    Exceptions derived from this class abort the resolution as a whole.
    No partial plan is produced.
    """


class StoreError(ResolverException):
    """The installation tree or its lockfile could not be read."""

    def __init__(self, reason: str, path: Optional[os.PathLike] = None) -> None:
        super(StoreError, self).__init__(reason, path)
        self.reason = reason
        self.path = path

    def __str__(self) -> str:
        if self.path is None:
            return self.reason
        return f"{self.reason} ({os.fspath(self.path)})"


class PromptError(ResolverException):
    """A confirmation could not be obtained from the user."""

    def __init__(self, message: str, reason: str = "no answer") -> None:
        super(PromptError, self).__init__(message, reason)
        self.message = message
        self.reason = reason

    def __str__(self) -> str:
        return f"could not prompt {self.message!r}: {self.reason}"
