import unittest

from memlab import AllocateRequest, FreeRequest
from memlab_datasets.trace_loader import parse_trace
from experiments.environment import SyntheticWorkload, WorkloadConfig


class SyntheticWorkloadTests(unittest.TestCase):
    def test_same_seed_same_stream(self) -> None:
        first = SyntheticWorkload(seed=3).generate(50)
        second = SyntheticWorkload(seed=3).generate(50)
        self.assertEqual(first, second)

    def test_sizes_respect_bounds(self) -> None:
        config = WorkloadConfig(min_size=4, max_size=9, steps=100)
        requests = SyntheticWorkload(config, seed=1).generate()
        sizes = [request.size for request in requests if isinstance(request, AllocateRequest)]
        self.assertTrue(sizes)
        self.assertTrue(all(4 <= size <= 9 for size in sizes))

    def test_zero_steps(self) -> None:
        self.assertEqual(SyntheticWorkload(seed=0).generate(0), [])

    def test_trace_lines_round_trip_through_parser(self) -> None:
        workload = SyntheticWorkload(WorkloadConfig(capacity=640, steps=30), seed=5)
        requests = workload.generate()
        trace = parse_trace(workload.to_trace_lines(requests))
        self.assertEqual(trace.capacity, 640)
        self.assertEqual(
            [(type(r), r.name) for r in trace.requests],
            [(type(r), r.name) for r in requests],
        )
        self.assertTrue(any(isinstance(r, FreeRequest) for r in trace.requests))


if __name__ == "__main__":
    unittest.main()
