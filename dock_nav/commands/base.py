"""
Command Lifecycle
=================

Commands wrap navigation objects in the lifecycle a fixed-period
scheduler expects:

    initialize()    once, when the command starts
    execute()       every period while running
    is_finished()   checked after every execute()
    end()           once, after is_finished() returns True
    interrupted()   once, if the command is cancelled instead

CommandRunner is a minimal scheduler for one command, used by the
simulation node and tests.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence

logger = logging.getLogger(__name__)


class Command(ABC):
    """Base class for scheduler commands.

    Args:
        timeout: Seconds after start() at which is_timed_out() turns true.
        clock: Time source, seconds.
    """

    def __init__(self, timeout: Optional[float] = None, clock: Callable[[], float] = time.time):
        self.timeout = timeout
        self._clock = clock
        self._start_time = 0.0
        self._running = False

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def is_running(self) -> bool:
        return self._running

    def time_since_start(self) -> float:
        return self._clock() - self._start_time

    def is_timed_out(self) -> bool:
        return self.timeout is not None and self.time_since_start() >= self.timeout

    def start(self) -> None:
        self._start_time = self._clock()
        self._running = True
        logger.debug(f"{self.name}: initialize")
        self.initialize()

    def run_once(self) -> bool:
        """Run one period. Returns True once the command has ended."""
        if not self._running:
            return True
        self.execute()
        if self.is_finished():
            self._running = False
            logger.debug(f"{self.name}: end")
            self.end()
            return True
        return False

    def cancel(self) -> None:
        if not self._running:
            return
        self._running = False
        logger.info(f"{self.name}: interrupted")
        self.interrupted()

    def initialize(self) -> None:
        pass

    def execute(self) -> None:
        pass

    @abstractmethod
    def is_finished(self) -> bool:
        pass

    def end(self) -> None:
        pass

    def interrupted(self) -> None:
        pass


class SequentialCommandGroup(Command):
    """Run commands one after another."""

    def __init__(self, commands: Sequence[Command], **kwargs):
        super().__init__(**kwargs)
        self.commands: List[Command] = list(commands)
        self._index = 0

    @property
    def current(self) -> Optional[Command]:
        if self._index < len(self.commands):
            return self.commands[self._index]
        return None

    def initialize(self) -> None:
        self._index = 0
        if self.current is not None:
            self.current.start()

    def execute(self) -> None:
        command = self.current
        if command is None:
            return
        if command.run_once():
            self._index += 1
            if self.current is not None:
                self.current.start()

    def is_finished(self) -> bool:
        return self.current is None

    def interrupted(self) -> None:
        if self.current is not None:
            self.current.cancel()


class CommandRunner:
    """Fixed-period loop for a single command.

    ``clock`` reports run time as ticks elapsed times the period, so it
    can be handed to commands whose timeouts must follow the loop rather
    than the wall clock.

    Args:
        period: Seconds per tick.
        realtime: Sleep out the remainder of each period.
    """

    def __init__(self, period: float = 0.02, realtime: bool = False):
        self.period = period
        self.realtime = realtime
        self.ticks = 0

    def clock(self) -> float:
        """Seconds of loop time elapsed in the current run."""
        return self.ticks * self.period

    def run(
        self,
        command: Command,
        max_ticks: int = 3000,
        on_tick: Optional[Callable[[int], None]] = None,
    ) -> int:
        """Run until the command ends or max_ticks elapse.

        A command still running after max_ticks is cancelled.

        Returns:
            Number of ticks executed.
        """
        self.ticks = 0
        command.start()
        while self.ticks < max_ticks:
            tick_start = time.monotonic()
            if on_tick is not None:
                on_tick(self.ticks)
            self.ticks += 1
            if command.run_once():
                return self.ticks
            if self.realtime:
                remaining = self.period - (time.monotonic() - tick_start)
                if remaining > 0:
                    time.sleep(remaining)

        logger.warning(f"{command.name} still running after {max_ticks} ticks; cancelling")
        command.cancel()
        return self.ticks
