"""Named tasks and their series / parallel composition."""

import asyncio
import inspect
import logging
import time
from collections.abc import Awaitable, Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from .exceptions import TaskDefinitionError, TaskNotFoundError

if TYPE_CHECKING:
    from .context import BuildContext

__all__ = ["Step", "Task", "TaskRegistry"]

logger = logging.getLogger(__name__)

Step: TypeAlias = Callable[["BuildContext"], Awaitable[None] | None]
StepRef: TypeAlias = "str | Step"


async def _invoke(step: Step, ctx: "BuildContext") -> None:
    result = step(ctx)
    if inspect.isawaitable(result):
        await result


def _format_elapsed(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.0f} ms"
    return f"{seconds:.2f} s"


@dataclass(frozen=True)
class Task:
    """A registered, named build step."""

    name: str
    step: Step
    description: str | None = None

    async def __call__(self, ctx: "BuildContext") -> None:
        logger.info("Starting '%s'...", self.name)
        started = time.perf_counter()
        try:
            await _invoke(self.step, ctx)
        except Exception:
            logger.error(
                "'%s' errored after %s",
                self.name,
                _format_elapsed(time.perf_counter() - started),
            )
            raise
        logger.info(
            "Finished '%s' after %s", self.name, _format_elapsed(time.perf_counter() - started)
        )


class TaskRegistry:
    """
    Registry of named tasks.

    Tasks are plain or async callables taking a BuildContext. Composites are
    built with :meth:`series` and :meth:`parallel`, which accept task names
    and callables alike. Names are resolved when the composite is built, so a
    task must be defined before anything composes it.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks.values())

    def __len__(self) -> int:
        return len(self._tasks)

    def add(self, name: str, step: Step, description: str | None = None) -> Task:
        if name in self._tasks:
            raise TaskDefinitionError(f"Task already defined: {name}")
        task = Task(name=name, step=step, description=description or inspect.getdoc(step))
        self._tasks[name] = task
        return task

    def task(self, name: str, description: str | None = None) -> Callable[[Step], Step]:
        """Decorator registering the wrapped callable under ``name``."""

        def decorator(fn: Step) -> Step:
            self.add(name, fn, description)
            return fn

        return decorator

    def get(self, name: str) -> Task:
        try:
            return self._tasks[name]
        except KeyError:
            raise TaskNotFoundError(name) from None

    def _resolve(self, steps: Iterable[StepRef]) -> list[Step]:
        return [self.get(s) if isinstance(s, str) else s for s in steps]

    def series(self, *steps: StepRef) -> Step:
        """Compose steps to run one after another, stopping at the first failure."""
        resolved = self._resolve(steps)

        async def run_series(ctx: "BuildContext") -> None:
            for step in resolved:
                await _invoke(step, ctx)

        return run_series

    def parallel(self, *steps: StepRef) -> Step:
        """Compose steps to run concurrently; waits for all, then raises the first failure."""
        resolved = self._resolve(steps)

        async def run_parallel(ctx: "BuildContext") -> None:
            results = await asyncio.gather(
                *(_invoke(step, ctx) for step in resolved), return_exceptions=True
            )
            for result in results:
                if isinstance(result, BaseException):
                    raise result

        return run_parallel

    async def run(self, names: Iterable[str], ctx: "BuildContext") -> None:
        """Run the named tasks in order."""
        tasks = [self.get(name) for name in names]
        for task in tasks:
            await task(ctx)
