import pytest

from simulator import LoadError
from workload import dump_tasks, generate_workload, load_tasks, parse_tasks


def test_parse_assigns_ids_in_file_order():
    tasks = parse_tasks("3\n1 2 1\n1 1 2\n4 3 1\n")
    assert [(t.task_id, t.creation_time, t.execution_time, t.priority) for t in tasks] == [
        ("T1", 1, 2, 1),
        ("T2", 1, 1, 2),
        ("T3", 4, 3, 1),
    ]
    assert all(t.remaining_time == t.execution_time for t in tasks)


def test_parse_ignores_blank_and_trailing_lines():
    tasks = parse_tasks("\n2\n\n1 1 1\n  2 2 2  \n7 7 7\n")
    assert [t.task_id for t in tasks] == ["T1", "T2"]


def test_zero_tasks_is_valid():
    assert parse_tasks("0\n") == []


@pytest.mark.parametrize("text", [
    "",
    "abc\n1 1 1\n",
    "-1\n",
    "3\n1 1 1\n2 2 2\n",
    "1\n1 1\n",
    "1\n1 x 1\n",
    "1\n0 1 1\n",
    "1\n1 0 1\n",
])
def test_malformed_input_raises_load_error(text):
    with pytest.raises(LoadError):
        parse_tasks(text)


def test_load_tasks_from_file(tmp_path):
    path = tmp_path / "tasks.txt"
    path.write_text("2\n1 2 1\n1 1 2\n")
    tasks = load_tasks(path)
    assert [t.task_id for t in tasks] == ["T1", "T2"]


def test_missing_file_raises_load_error(tmp_path):
    with pytest.raises(LoadError):
        load_tasks(tmp_path / "nope.txt")


def test_dump_produces_loadable_text():
    tasks = parse_tasks("2\n3 4 5\n1 1 1\n")
    assert dump_tasks(tasks) == "2\n3 4 5\n1 1 1\n"


@pytest.mark.parametrize("scenario", ["balanced", "bursty", "priority_mix"])
def test_generated_workload_is_valid_and_seeded(scenario):
    tasks = generate_workload(scenario, num_tasks=15, seed=7)
    again = generate_workload(scenario, num_tasks=15, seed=7)

    assert [t.task_id for t in tasks] == [f"T{i}" for i in range(1, 16)]
    assert all(t.creation_time >= 1 and t.execution_time >= 1 for t in tasks)
    assert [t.creation_time for t in tasks] == sorted(t.creation_time for t in tasks)
    assert dump_tasks(tasks) == dump_tasks(again)


def test_unknown_scenario_rejected():
    with pytest.raises(ValueError):
        generate_workload("chaotic", num_tasks=3)
