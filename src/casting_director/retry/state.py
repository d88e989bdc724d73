"""Per-call retry state."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RetryState:
    """
    Position of one attempt inside a single logical call.
    
    Attributes:
        attempt: 0-based attempt index
        max_attempts: Attempt cap for the call
    """

    attempt: int
    max_attempts: int

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if not 0 <= self.attempt < self.max_attempts:
            raise ValueError(
                f"attempt must be in [0, {self.max_attempts}), got {self.attempt}"
            )

    @property
    def number(self) -> int:
        """1-based attempt number, for logs."""
        return self.attempt + 1

    @property
    def is_last_attempt(self) -> bool:
        return self.attempt == self.max_attempts - 1
