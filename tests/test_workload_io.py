from pathlib import Path

import pytest

from schedsim.models import Process
from schedsim.workload_io import load_workload


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":2,"arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[0].priority == 1
    assert procs[1].priority == 0
    assert procs[1].arrival_time == 1


def test_load_csv_with_header(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\n1,0,3,1\n2,1,2,\n")
    procs = load_workload(p)
    assert procs[0].pid == 1
    assert procs[1].priority == 0


def test_load_headerless_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("1,5,0,2\n2,3,1\n\n3,8,2,3\n")
    procs = load_workload(p)
    assert procs == [
        Process(1, arrival_time=0, burst_time=5, priority=2),
        Process(2, arrival_time=1, burst_time=3, priority=0),
        Process(3, arrival_time=2, burst_time=8, priority=3),
    ]


def test_load_empty_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("")
    assert load_workload(p) == []


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("1,5,0\n")
    with pytest.raises(ValueError, match="Unsupported"):
        load_workload(p)


@pytest.mark.parametrize(
    "content",
    [
        "1,five,0\n",
        "1,5\n",
        "1,5,0,2,9\n",
        "1,0,0\n",
        "1,5,-1\n",
        ",5,0\n",
        "P1,5,0\n",
        "1a,5,0\n",
    ],
)
def test_malformed_rows_rejected(tmp_path: Path, content):
    p = tmp_path / "w.csv"
    p.write_text(content)
    with pytest.raises(ValueError):
        load_workload(p)


def test_json_must_be_list(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"pid": 1}')
    with pytest.raises(ValueError):
        load_workload(p)


def test_duplicate_pid_rejected(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("1,5,0\n1,3,1\n")
    with pytest.raises(ValueError, match="Duplicate"):
        load_workload(p)


def test_process_validation():
    with pytest.raises(ValueError):
        Process(1, arrival_time=-1, burst_time=3)
    with pytest.raises(ValueError):
        Process(1, arrival_time=0, burst_time=0)


def test_header_detected_by_column_names(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text(" PID , burst_time, arrival_time\n4,2,1\n")
    assert load_workload(p) == [Process(4, arrival_time=1, burst_time=2)]
