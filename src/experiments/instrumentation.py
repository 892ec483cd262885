from __future__ import annotations

import csv
import json
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional


@dataclass
class SimulationProfiler:
    """
    Event recorder for Simulation.

    Keeps every allocate/free/malformed event in memory, numbered in the order
    the simulation applied them, and writes them out as JSONL and CSV on flush.
    """

    run_id: str
    output_dir: Optional[str] = None
    write_immediately: bool = False
    events: List[Dict[str, object]] = field(default_factory=list)

    def record_event(self, event_type: str, payload: Dict[str, object]) -> None:
        record = {
            "sequence": len(self.events) + 1,
            "timestamp": time.time(),
            "run_id": self.run_id,
            "event": event_type,
            **payload,
        }
        self.events.append(record)
        if self.write_immediately and self.output_dir:
            with self._path("jsonl").open("a", encoding="utf-8") as handle:
                handle.write(json.dumps(record) + "\n")

    def count(self, event_type: str) -> int:
        return sum(1 for event in self.events if event["event"] == event_type)

    def flush(self) -> None:
        if not self.output_dir or not self.events:
            return
        with self._path("jsonl").open("w", encoding="utf-8") as handle:
            handle.writelines(json.dumps(record) + "\n" for record in self.events)
        # allocate and free events carry different keys; keep first-seen column order
        fieldnames: List[str] = []
        for event in self.events:
            fieldnames.extend(key for key in event if key not in fieldnames)
        with self._path("csv").open("w", newline="", encoding="utf-8") as handle:
            writer = csv.DictWriter(handle, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(self.events)

    def _path(self, suffix: str) -> Path:
        output_path = Path(self.output_dir)
        output_path.mkdir(parents=True, exist_ok=True)
        return output_path / f"{self.run_id}.{suffix}"
