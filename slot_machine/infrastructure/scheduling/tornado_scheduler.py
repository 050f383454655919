"""Tornado IOLoop scheduler implementation"""
from typing import Any, Callable, Optional

from tornado.ioloop import IOLoop

from slot_machine.application.ports.scheduler_port import SchedulerPort


class TornadoScheduler(SchedulerPort):
    """Schedules callbacks on the tornado IOLoop"""

    def __init__(self, io_loop: Optional[IOLoop] = None):
        self._io_loop = io_loop

    @property
    def io_loop(self) -> IOLoop:
        return self._io_loop or IOLoop.current()

    def call_later(self, delay: float, callback: Callable[[], None]) -> Any:
        return self.io_loop.call_later(delay, callback)

    def cancel(self, handle: Any) -> None:
        self.io_loop.remove_timeout(handle)
