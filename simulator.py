from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional
import numpy as np

from logging_config import LoggingFlags, log_if
from policies.priority import PriorityPolicy


class LoadError(ValueError):
    """Task input is missing or malformed."""


class ConfigError(ValueError):
    """Run parameters are out of range."""


class SimulationFinished(RuntimeError):
    """Raised when stepping a simulation that already ran all of its cycles."""


class SimulationStarted(RuntimeError):
    """Raised when loading tasks into a simulation that already ran a cycle."""


class Task:
    def __init__(self, task_id, creation_time, execution_time, priority):
        self.task_id = task_id
        self.creation_time = creation_time
        self.execution_time = execution_time
        self.priority = priority
        self.remaining_time = execution_time
        self.start_cycle = None
        self.end_cycle = None
        self.processor_id = None

    @property
    def is_complete(self):
        return self.remaining_time == 0

    def tick(self):
        if self.remaining_time > 0:
            self.remaining_time -= 1

    def clone_for_sim(self):
        return Task(self.task_id, self.creation_time, self.execution_time, self.priority)

    def __repr__(self):
        return (f"Task {self.task_id}: created={self.creation_time}, exec={self.execution_time}, "
                f"priority={self.priority}, remaining={self.remaining_time}")


class Processor:
    def __init__(self, processor_id):
        self.processor_id = processor_id
        self.current_task: Optional[Task] = None
        self.busy_cycles = 0

    def is_available(self):
        return self.current_task is None

    def assign(self, task: Task, current_time):
        self.current_task = task
        task.processor_id = self.processor_id
        if task.start_cycle is None:
            task.start_cycle = current_time

    def step(self, current_time) -> Optional[Task]:
        """Run one unit of work; return the task if it finished this cycle."""
        if self.current_task is None:
            return None

        self.current_task.tick()
        self.busy_cycles += 1

        if self.current_task.is_complete:
            self.current_task.end_cycle = current_time
            finished_task = self.current_task
            self.current_task = None
            return finished_task
        return None

    def __repr__(self):
        running = self.current_task.task_id if self.current_task else None
        return f"Processor {self.processor_id}: task={running}"


class OutcomeKind(Enum):
    COMPLETED = "completed"
    RUNNING = "running"
    IDLE = "idle"


@dataclass(frozen=True)
class TaskArrival:
    task_id: str
    execution_time: int
    priority: int


@dataclass(frozen=True)
class ProcessorOutcome:
    processor_id: str
    kind: OutcomeKind
    task_id: Optional[str] = None


@dataclass(frozen=True)
class CycleReport:
    """Everything that happened in one clock cycle (1-based)."""
    cycle: int
    arrivals: List[TaskArrival] = field(default_factory=list)
    outcomes: List[ProcessorOutcome] = field(default_factory=list)


class Scheduler:
    def __init__(self, processors: List[Processor], policy=None):
        self.processors = processors
        self.policy = policy if policy is not None else PriorityPolicy()
        self.completed: List[Task] = []

    def add_task(self, task: Task):
        self.policy.push(task)

    def schedule_tasks(self, current_time):
        assignments = self.policy.assign_tasks(self.processors, current_time)
        for task, processor in assignments:
            log_if(LoggingFlags.DISPATCH,
                   f"[C{current_time}] dispatch {task.task_id} -> {processor.processor_id}")
        return assignments

    def execute_tasks(self, current_time) -> List[ProcessorOutcome]:
        outcomes = []
        for processor in self.processors:
            finished = processor.step(current_time)
            if finished is not None:
                self.completed.append(finished)
                outcomes.append(ProcessorOutcome(processor.processor_id, OutcomeKind.COMPLETED, finished.task_id))
            elif processor.current_task is not None:
                outcomes.append(ProcessorOutcome(processor.processor_id, OutcomeKind.RUNNING,
                                                 processor.current_task.task_id))
            else:
                outcomes.append(ProcessorOutcome(processor.processor_id, OutcomeKind.IDLE))
        return outcomes

    @property
    def waiting_tasks(self) -> List[Task]:
        return self.policy.waiting()

    @property
    def running_tasks(self) -> List[Task]:
        return [p.current_task for p in self.processors if p.current_task is not None]


def create_processors(num_processors) -> List[Processor]:
    return [Processor(f"P{i}") for i in range(1, num_processors + 1)]


def _check_count(name, value):
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
        raise ConfigError(f"{name} must be a positive integer, got {value!r}")
    return int(value)


class Simulator:
    def __init__(self, num_processors, num_cycles, verbose=False):
        self.num_processors = _check_count("num_processors", num_processors)
        self.num_cycles = _check_count("num_cycles", num_cycles)
        self.verbose = verbose

        self.processors = create_processors(self.num_processors)
        self.scheduler = Scheduler(self.processors)
        self.tasks: List[Task] = []
        self.cycle = 0

    def load_tasks(self, tasks):
        if self.cycle > 0:
            raise SimulationStarted(f"cannot load tasks after cycle {self.cycle} has run")
        # Each run gets its own mutable copies so re-runs start from scratch
        self.tasks = [task.clone_for_sim() for task in tasks]
        log_if(LoggingFlags.LOADING or self.verbose, f"Loaded {len(self.tasks)} tasks")

    @property
    def completed_tasks(self) -> List[Task]:
        return self.scheduler.completed

    @property
    def finished(self):
        return self.cycle >= self.num_cycles

    def step(self) -> CycleReport:
        if self.finished:
            raise SimulationFinished(f"simulation already ran {self.num_cycles} cycles")

        current = self.cycle + 1
        log_if(LoggingFlags.CYCLE_PROGRESS or self.verbose, f"--- cycle {current}/{self.num_cycles}")

        arrivals = []
        for task in self.tasks:
            if task.creation_time == current:
                self.scheduler.add_task(task)
                arrivals.append(TaskArrival(task.task_id, task.execution_time, task.priority))
                log_if(LoggingFlags.ARRIVALS or self.verbose, f"[C{current}] arrival {task!r}")

        self.scheduler.schedule_tasks(current)
        outcomes = self.scheduler.execute_tasks(current)

        for outcome in outcomes:
            if outcome.kind is OutcomeKind.COMPLETED:
                log_if(LoggingFlags.COMPLETIONS or self.verbose,
                       f"[C{current}] {outcome.task_id} completed on {outcome.processor_id}")

        self.cycle += 1
        return CycleReport(current, arrivals, outcomes)

    def run(self, on_cycle: Optional[Callable[[CycleReport], None]] = None) -> List[CycleReport]:
        reports = []
        while not self.finished:
            report = self.step()
            reports.append(report)
            if on_cycle is not None:
                on_cycle(report)
        return reports

    def evaluate(self):
        turnarounds = [t.end_cycle - t.creation_time + 1 for t in self.completed_tasks]
        waits = [t.start_cycle - t.creation_time for t in self.completed_tasks]

        elapsed = max(self.cycle, 1)
        utilizations = {p.processor_id: p.busy_cycles / elapsed for p in self.processors}

        return {
            "num_tasks": len(self.tasks),
            "num_completed": len(self.completed_tasks),
            "avg_turnaround": float(np.mean(turnarounds)) if turnarounds else 0.0,
            "avg_waiting": float(np.mean(waits)) if waits else 0.0,
            "utilization": utilizations,
            "avg_utilization": float(np.mean(list(utilizations.values()))),
        }


def simulate(num_processors, num_cycles, tasks, on_cycle=None) -> List[CycleReport]:
    sim = Simulator(num_processors, num_cycles)
    sim.load_tasks(tasks)
    return sim.run(on_cycle)
