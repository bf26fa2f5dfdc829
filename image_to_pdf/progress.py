"""Progress observers for document assembly.

The assembler reports to a :class:`ProgressObserver` and never reads
anything back, so passing no observer gives the same document.
"""

from __future__ import annotations

import threading
from typing import Callable, Iterable, List, Optional, Protocol, Union

from rich.progress import Progress, Task, TaskID


class ProgressObserver(Protocol):
    """Receives assembly progress signals."""

    def on_batch_start(self, total: int) -> None:
        """Called once before the first page with the number of images."""

    def on_item_done(self) -> None:
        """Called after each page is placed."""

    def on_batch_done(self) -> None:
        """Called once when assembly ends, successfully or not."""


class NullProgressObserver:
    """Observer that ignores every signal."""

    def on_batch_start(self, total: int) -> None:
        pass

    def on_item_done(self) -> None:
        pass

    def on_batch_done(self) -> None:
        pass


class CallbackProgressObserver:
    """Forward progress as ``callback(current, total)`` after each page."""

    def __init__(self, callback: Callable[[int, int], None]) -> None:
        self.callback = callback
        self.total = 0
        self.current = 0

    def on_batch_start(self, total: int) -> None:
        self.total = total
        self.current = 0

    def on_item_done(self) -> None:
        if self.current < self.total:
            self.current += 1
        self.callback(self.current, self.total)

    def on_batch_done(self) -> None:
        pass


class ChainedProgress(Progress):
    """A :class:`rich.progress.Progress` whose tasks can be inserted after one another.

    Tasks added with :meth:`insert_task` render in the order they were
    chained, so the bars for several documents in a batch stay in sequence
    even when a later bar is created first.
    """

    def __init__(self, *columns, **kwargs) -> None:
        # Progress.__init__ renders once through get_renderables().
        self._order: List[TaskID] = []
        self._order_lock = threading.Lock()
        super().__init__(*columns, **kwargs)

    def insert_task(
        self,
        description: str,
        *,
        total: Optional[float] = None,
        after: Optional[TaskID] = None,
        **fields,
    ) -> TaskID:
        task_id = self.add_task(description, total=total, **fields)
        with self._order_lock:
            if after is not None and after in self._order:
                self._order.insert(self._order.index(after) + 1, task_id)
            else:
                self._order.append(task_id)
        return task_id

    def remove_task(self, task_id: TaskID) -> None:
        super().remove_task(task_id)
        with self._order_lock:
            if task_id in self._order:
                self._order.remove(task_id)

    @property
    def ordered_tasks(self) -> List[Task]:
        tasks = {task.id: task for task in self.tasks}
        with self._order_lock:
            ordered = [tasks.pop(task_id) for task_id in self._order if task_id in tasks]
        # Tasks added through add_task() directly keep their creation order at the end.
        return ordered + list(tasks.values())

    def get_renderables(self) -> Iterable:
        yield self.make_tasks_table(self.ordered_tasks)


ObserverHandle = Union["RichProgressObserver", TaskID, None]


class RichProgressObserver:
    """Drive one task of a rich progress display.

    ``after`` is the observer (or task id) of a previous document. When
    *progress* is a :class:`ChainedProgress`, this observer's bar is
    rendered immediately below it.
    """

    def __init__(
        self,
        progress: Progress,
        description: str = "Assembling pages",
        *,
        after: ObserverHandle = None,
        remove_on_done: bool = False,
    ) -> None:
        self.progress = progress
        self.description = description
        self.after = after
        self.remove_on_done = remove_on_done
        self.task_id: Optional[TaskID] = None
        self.total = 0
        self.completed = 0

    def _after_task_id(self) -> Optional[TaskID]:
        if isinstance(self.after, RichProgressObserver):
            return self.after.task_id
        return self.after

    def on_batch_start(self, total: int) -> None:
        self.total = total
        self.completed = 0
        if isinstance(self.progress, ChainedProgress):
            self.task_id = self.progress.insert_task(
                self.description, total=total, after=self._after_task_id()
            )
        else:
            self.task_id = self.progress.add_task(self.description, total=total)

    def on_item_done(self) -> None:
        if self.task_id is None or self.completed >= self.total:
            return
        self.completed += 1
        self.progress.advance(self.task_id, 1)

    def on_batch_done(self) -> None:
        """Settle the bar at the pages placed, or remove it with *remove_on_done*.

        A failed assembly leaves the bar partial rather than complete.
        """
        if self.task_id is None:
            return
        if self.remove_on_done:
            self.progress.remove_task(self.task_id)
        else:
            self.progress.update(self.task_id, completed=self.completed)


__all__ = [
    "CallbackProgressObserver",
    "ChainedProgress",
    "NullProgressObserver",
    "ProgressObserver",
    "RichProgressObserver",
]
