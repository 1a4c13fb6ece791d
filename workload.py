import random
from pathlib import Path
from typing import List

from logging_config import LoggingFlags, log_if
from simulator import LoadError, Task


def parse_tasks(text) -> List[Task]:
    """Parse the task-list format.

    The first line holds the task count N; each of the next N lines is
    ``creation_time execution_time priority``. Tasks are named T1..TN in
    file order. Lines after the N-th task are ignored.
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines:
        raise LoadError("task list is empty")

    try:
        num_tasks = int(lines[0])
    except ValueError:
        raise LoadError(f"invalid task count: {lines[0]!r}") from None
    if num_tasks < 0:
        raise LoadError(f"task count must not be negative, got {num_tasks}")

    task_lines = lines[1:num_tasks + 1]
    if len(task_lines) < num_tasks:
        raise LoadError(f"expected {num_tasks} tasks, found {len(task_lines)}")

    tasks = []
    for i, line in enumerate(task_lines, start=1):
        parts = line.split()
        if len(parts) != 3:
            raise LoadError(f"task line {i}: expected 3 integers, got {line!r}")
        try:
            creation_time, execution_time, priority = (int(p) for p in parts)
        except ValueError:
            raise LoadError(f"task line {i}: non-integer value in {line!r}") from None
        if creation_time < 1:
            raise LoadError(f"task line {i}: creation time must be >= 1, got {creation_time}")
        if execution_time < 1:
            raise LoadError(f"task line {i}: execution time must be >= 1, got {execution_time}")
        tasks.append(Task(f"T{i}", creation_time, execution_time, priority))

    return tasks


def load_tasks(path) -> List[Task]:
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as exc:
        raise LoadError(f"cannot read task file {path}: {exc}") from exc

    tasks = parse_tasks(text)
    log_if(LoggingFlags.LOADING, f"Read {len(tasks)} tasks from {path}")
    return tasks


def dump_tasks(tasks) -> str:
    lines = [str(len(tasks))]
    lines += [f"{t.creation_time} {t.execution_time} {t.priority}" for t in tasks]
    return "\n".join(lines) + "\n"


def generate_workload(scenario="balanced", num_tasks=20, seed=None, max_priority=3) -> List[Task]:
    rng = random.Random(seed)

    specs = []
    for i in range(num_tasks):
        if scenario == "balanced":
            creation = i + 1
            duration = rng.randint(2, 5)
            priority = rng.randint(1, max_priority)

        elif scenario == "bursty":
            burst_start = (i // 5) * 10
            creation = burst_start + rng.randint(1, 3)
            duration = rng.randint(1, 4)
            priority = rng.randint(1, max_priority)

        elif scenario == "priority_mix":
            # Short urgent jobs interleaved with long background ones
            creation = i // 2 + 1
            if rng.random() < 0.3:
                duration = rng.randint(1, 2)
                priority = 1
            else:
                duration = rng.randint(3, 8)
                priority = rng.randint(2, max(2, max_priority))

        else:
            raise ValueError(f"unknown scenario: {scenario!r}")

        specs.append((creation, duration, priority))

    # Ids follow load order, so number them after sorting by arrival
    specs.sort(key=lambda s: s[0])
    return [Task(f"T{i}", c, d, p) for i, (c, d, p) in enumerate(specs, start=1)]
