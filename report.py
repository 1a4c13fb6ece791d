from typing import List
import pandas as pd

from simulator import CycleReport, OutcomeKind


def format_cycle(report: CycleReport) -> List[str]:
    """Console lines for one cycle, blank separator included."""
    lines = [f"Clock Cycle C{report.cycle}:"]
    for arrival in report.arrivals:
        lines.append(f"  Task {arrival.task_id} is created with execution time "
                     f"{arrival.execution_time} and priority {arrival.priority}")
    for outcome in report.outcomes:
        if outcome.kind is OutcomeKind.COMPLETED:
            lines.append(f"  Task {outcome.task_id} is completed on {outcome.processor_id}")
        elif outcome.kind is OutcomeKind.RUNNING:
            lines.append(f"  Task {outcome.task_id} is running on {outcome.processor_id}")
        else:
            lines.append(f"  {outcome.processor_id} is empty")
    lines.append("")
    return lines


def processor_number(processor_id):
    """Pool position encoded in an id like ``P3``."""
    return int(processor_id[1:])


def reports_to_frame(reports: List[CycleReport]) -> pd.DataFrame:
    rows = []
    for report in reports:
        for outcome in report.outcomes:
            rows.append({
                "cycle": report.cycle,
                "processor": outcome.processor_id,
                "status": outcome.kind.value,
                "task": outcome.task_id,
            })
    return pd.DataFrame(rows, columns=["cycle", "processor", "status", "task"])


def task_spans(reports: List[CycleReport]) -> pd.DataFrame:
    """Contiguous stretches of a task on one processor, for Gantt charts.

    ``start`` is the first cycle of the stretch and ``end`` is one past the
    last, so ``end - start`` is the number of cycles worked.
    """
    open_spans = {}
    spans = []
    for report in reports:
        for outcome in report.outcomes:
            if outcome.kind is OutcomeKind.IDLE:
                continue
            key = outcome.processor_id
            span = open_spans.get(key)
            if span is None or span["task"] != outcome.task_id:
                if span is not None:
                    spans.append(span)
                span = {"task": outcome.task_id, "processor": key,
                        "start": report.cycle, "end": report.cycle + 1, "completed": False}
                open_spans[key] = span
            else:
                span["end"] = report.cycle + 1
            if outcome.kind is OutcomeKind.COMPLETED:
                span["completed"] = True
                spans.append(span)
                del open_spans[key]

    spans.extend(open_spans.values())
    spans.sort(key=lambda s: (s["start"], processor_number(s["processor"])))
    return pd.DataFrame(spans, columns=["task", "processor", "start", "end", "completed"])


def status_grid(reports: List[CycleReport]) -> pd.DataFrame:
    """Cycle-by-processor table of labels such as ``T3 running`` or ``idle``."""
    df = reports_to_frame(reports)
    df["label"] = [status if pd.isna(task) else f"{task} {status}"
                   for task, status in zip(df["task"], df["status"])]
    grid = df.pivot(index="cycle", columns="processor", values="label")
    return grid[sorted(grid.columns, key=processor_number)]
