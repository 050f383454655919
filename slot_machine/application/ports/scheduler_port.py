"""Scheduler port (interface)"""
from abc import ABC, abstractmethod
from typing import Any, Callable


class SchedulerPort(ABC):
    """Port for delayed callbacks with cancellation handles"""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> Any:
        """Run callback after delay seconds, returns a cancellation handle"""
        pass

    @abstractmethod
    def cancel(self, handle: Any) -> None:
        """Cancel a pending callback; cancelling a fired handle is a no-op"""
        pass
