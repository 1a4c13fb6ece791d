import pytest

from report import format_cycle, reports_to_frame, status_grid, task_spans
from run_simulation import cycle_delay, main
from simulator import ConfigError, Task, simulate


@pytest.fixture
def reports():
    tasks = [Task("T1", 1, 2, 1), Task("T2", 1, 1, 2)]
    return simulate(2, 3, tasks)


def test_format_cycle_matches_console_layout(reports):
    assert format_cycle(reports[0]) == [
        "Clock Cycle C1:",
        "  Task T1 is created with execution time 2 and priority 1",
        "  Task T2 is created with execution time 1 and priority 2",
        "  Task T1 is running on P1",
        "  Task T2 is completed on P2",
        "",
    ]
    assert format_cycle(reports[1]) == [
        "Clock Cycle C2:",
        "  Task T1 is completed on P1",
        "  P2 is empty",
        "",
    ]


def test_reports_to_frame_has_row_per_processor_per_cycle(reports):
    df = reports_to_frame(reports)
    assert len(df) == 6
    assert list(df.columns) == ["cycle", "processor", "status", "task"]
    assert df[df.cycle == 3].status.tolist() == ["idle", "idle"]


def test_task_spans(reports):
    df = task_spans(reports)
    rows = df.to_dict("records")
    assert rows == [
        {"task": "T1", "processor": "P1", "start": 1, "end": 3, "completed": True},
        {"task": "T2", "processor": "P2", "start": 1, "end": 2, "completed": True},
    ]


def test_task_spans_keeps_unfinished_runs():
    df = task_spans(simulate(1, 2, [Task("T1", 1, 5, 1)]))
    assert df.to_dict("records") == [
        {"task": "T1", "processor": "P1", "start": 1, "end": 3, "completed": False},
    ]


def test_cli_prints_cycles(tmp_path, capsys):
    path = tmp_path / "tasks.txt"
    path.write_text("2\n1 2 1\n1 1 2\n")
    assert main([str(path), "2", "3"]) == 0

    out = capsys.readouterr().out
    assert out.startswith("Clock Cycle C1:\n")
    assert "  Task T1 is completed on P1" in out
    assert out.count("Clock Cycle") == 3


def test_cli_reports_load_error(tmp_path, capsys):
    assert main([str(tmp_path / "missing.txt"), "2", "3"]) == 1
    assert "error:" in capsys.readouterr().err


def test_cli_rejects_zero_processors(tmp_path, capsys):
    path = tmp_path / "tasks.txt"
    path.write_text("0\n")
    assert main([str(path), "0", "3"]) == 1


def test_cycle_delay_from_environment(monkeypatch):
    monkeypatch.delenv("SIM_CYCLE_DELAY", raising=False)
    assert cycle_delay() == 0.0
    monkeypatch.setenv("SIM_CYCLE_DELAY", "0.25")
    assert cycle_delay() == 0.25
    monkeypatch.setenv("SIM_CYCLE_DELAY", "soon")
    with pytest.raises(ConfigError):
        cycle_delay()


def test_task_spans_order_processors_numerically():
    tasks = [Task(f"T{i}", 1, 1, 1) for i in range(1, 12)]
    df = task_spans(simulate(11, 1, tasks))
    assert df.processor.tolist() == [f"P{i}" for i in range(1, 12)]


def test_status_grid_keeps_completed_and_running_apart(reports):
    grid = status_grid(reports)
    assert grid.columns.tolist() == ["P1", "P2"]
    assert grid.loc[1].tolist() == ["T1 running", "T2 completed"]
    assert grid.loc[2].tolist() == ["T1 completed", "idle"]
    assert grid.loc[3].tolist() == ["idle", "idle"]


def test_status_grid_orders_processor_columns_by_pool():
    grid = status_grid(simulate(11, 1, []))
    assert grid.columns.tolist() == [f"P{i}" for i in range(1, 12)]
