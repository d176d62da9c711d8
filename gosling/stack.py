from typing import Iterator, List, Optional, Tuple

from rlbot.utils.logging_utils import get_logger

from gosling.errors import EmptyStackError, StackOwnershipError

logger = get_logger("gosling")


class RoutineStack:
    """Last-in-first-out collection of routines.

    Only the routine on top runs each tick; everything below it is dormant with
    its state frozen until it surfaces again. While a routine is running it may
    push children or pop itself, but it can never pop a routine other than
    itself.
    """

    def __init__(self):
        self._routines: List = []
        # the routine currently inside step(), cleared once it pops itself
        self._running = None
        self._stepping = False

    def __len__(self) -> int:
        return len(self._routines)

    def __iter__(self) -> Iterator:
        # bottom to top
        return iter(tuple(self._routines))

    def __repr__(self) -> str:
        return "RoutineStack(%s)" % ", ".join(self.names())

    def is_empty(self) -> bool:
        return len(self._routines) == 0

    def push(self, routine):
        self._routines.append(routine)

    def pop(self):
        if self.is_empty():
            raise EmptyStackError("pop")
        top = self._routines[-1]
        if self._stepping:
            if self._running is None:
                # the running routine already popped itself this tick
                raise StackOwnershipError("a finished routine", type(top).__name__)
            if top is not self._running:
                raise StackOwnershipError(type(self._running).__name__, type(top).__name__)
            self._running = None
        return self._routines.pop()

    def peek(self):
        if self.is_empty():
            raise EmptyStackError("peek")
        return self._routines[-1]

    def clear(self):
        if self._routines:
            logger.debug("Clearing %d routine(s): %s", len(self._routines), ", ".join(self.names()))
        self._routines = []

    def names(self) -> Tuple[str, ...]:
        return tuple(type(routine).__name__ for routine in self._routines)

    def step(self, agent) -> Optional[object]:
        """Runs the top routine once and returns it, or returns None if the stack is empty.

        The routine may push, pop itself, or write to ``agent.controller``. A
        routine exposed by a pop waits until the next call to run. Exceptions
        raised by the routine are not caught here.
        """
        if self.is_empty():
            return None
        routine = self._routines[-1]
        self._running = routine
        self._stepping = True
        try:
            routine.run(agent)
        finally:
            self._running = None
            self._stepping = False
        return routine
