import heapq
import itertools
from typing import List, Tuple


class PriorityPolicy:
    """Waiting queue ordered by priority, then longest job, then arrival order.

    Smaller priority values win. Among equal priorities the task with the
    larger execution time goes first; remaining ties keep insertion order.
    """

    def __init__(self):
        self._heap = []
        self._seq = itertools.count()

    @staticmethod
    def sort_key(task):
        return (task.priority, -task.execution_time)

    def push(self, task):
        heapq.heappush(self._heap, (*self.sort_key(task), next(self._seq), task))

    def pop(self):
        return heapq.heappop(self._heap)[-1]

    def __len__(self):
        return len(self._heap)

    def waiting(self) -> List:
        """Waiting tasks in dispatch order (does not consume the queue)."""
        return [entry[-1] for entry in sorted(self._heap)]

    def assign_tasks(self, processors, current_time) -> List[Tuple]:
        assignments = []
        for processor in processors:
            if processor.is_available() and self._heap:
                task = self.pop()
                processor.assign(task, current_time)
                assignments.append((task, processor))
        return assignments
