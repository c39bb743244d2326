"""Exceptions raised by the estimator."""

from __future__ import annotations


class EstimationError(Exception):
    """Base class for errors that stop an estimation run."""

    message = "Estimation failed."

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingUrlError(EstimationError):
    message = "Please specify the URL."


class SiteUnreachableError(EstimationError):
    message = "This site can't be reached."


class InvalidCategoryError(EstimationError, ValueError):
    """Raised when a category filter name is not recognised."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Unknown category '{name}' (expected one of: images, documents, media, other)"
        )
