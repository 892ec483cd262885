import csv
import json
import tempfile
from pathlib import Path

from memlab import Simulation
from experiments.instrumentation import SimulationProfiler


def test_flush_writes_jsonl_and_csv():
    with tempfile.TemporaryDirectory() as tmpdir:
        profiler = SimulationProfiler(run_id="flush", output_dir=tmpdir)
        sim = Simulation(200, profiler=profiler)
        sim.allocate("P1", 50)
        sim.free("P1")
        profiler.flush()

        lines = (Path(tmpdir) / "flush.jsonl").read_text(encoding="utf-8").splitlines()
        records = [json.loads(line) for line in lines]
        assert [record["event"] for record in records] == ["allocate", "free"]
        assert [record["sequence"] for record in records] == [1, 2]
        assert records[1]["heap_free"] == 200

        with (Path(tmpdir) / "flush.csv").open(newline="", encoding="utf-8") as handle:
            rows = list(csv.DictReader(handle))
        assert len(rows) == 2
        assert rows[0]["name"] == "P1"


def test_write_immediately_appends():
    with tempfile.TemporaryDirectory() as tmpdir:
        profiler = SimulationProfiler(run_id="live", output_dir=tmpdir, write_immediately=True)
        profiler.record_event("allocate", {"name": "P1"})
        profiler.record_event("free", {"name": "P1"})
        lines = (Path(tmpdir) / "live.jsonl").read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2


def test_flush_without_directory_is_noop():
    profiler = SimulationProfiler(run_id="memory_only")
    profiler.record_event("allocate", {"name": "P1"})
    profiler.flush()
    assert profiler.count("allocate") == 1
