"""Configuration objects and constants for the estimator."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/87.0.4280.88 Safari/537.36"
)
DEFAULT_TIMEOUT = 10.0
DEFAULT_MAX_REDIRECTS = 3
DEFAULT_ROOT_MAX_REDIRECTS = 20


@dataclass
class EstimatorConfig:
    """Settings that control fetching and probing behaviour."""

    timeout: float = DEFAULT_TIMEOUT
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    root_max_redirects: int = DEFAULT_ROOT_MAX_REDIRECTS
    user_agent: str = DEFAULT_USER_AGENT
    workers: int = 1
    legacy_classification: bool = False

    def __post_init__(self) -> None:
        if not self.timeout > 0:
            raise ValueError(f"timeout must be greater than 0 (got {self.timeout})")
        if self.max_redirects < 0 or self.root_max_redirects < 0:
            raise ValueError("redirect limits cannot be negative")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1 (got {self.workers})")
