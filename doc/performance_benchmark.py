"""
Performance Benchmark
=====================

Timing of the transfer core per commitment scheme:
- commit() for a single note
- verify() of one honest transfer
- verify_batch() over many transfers with a thread pool

Usage:
    python doc/performance_benchmark.py
"""

import json
import os
import sys
import time
from typing import Dict, List, Tuple

# make shielded_transfer importable when run from a checkout
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from shielded_transfer import setup, get_scheme, Note, Verifier
from shielded_transfer.commit import available_schemes
from shielded_transfer.constraints import PrivateWitness, PublicInputs, TransferInstance


class PerformanceBenchmark:

    def __init__(self, curve='BN254'):
        print(f"Initializing benchmark (curve: {curve})...")
        self.params = setup(curve)
        self.group = self.params['group']
        self.results = {}

    def measure_time(self, func, *args, num_runs=10, **kwargs) -> Tuple[float, float, object]:
        """
        Mean and standard deviation of the wall time of func, in seconds.

        Returns
        -------
        (mean, std_dev, result of the last run)
        """
        times = []
        result = None
        for _ in range(num_runs):
            start = time.perf_counter()
            result = func(*args, **kwargs)
            times.append(time.perf_counter() - start)

        avg_time = sum(times) / len(times)
        std_dev = (sum((t - avg_time) ** 2 for t in times) / len(times)) ** 0.5
        return avg_time, std_dev, result

    def honest_transfer(self, scheme, old_value=100, fee=10) -> TransferInstance:
        old_note = Note.random(old_value, scheme)
        new_note = Note.random(old_value - fee, scheme)
        return TransferInstance(
            PublicInputs(old_note.commitment(scheme), new_note.commitment(scheme), fee),
            PrivateWitness(old_note, new_note),
        )

    def benchmark_commit(self, scheme_names: List[str], num_runs=10):
        print(f"\ncommit() ({num_runs} runs each)")
        print("=" * 60)
        results = {}
        for name in scheme_names:
            scheme = get_scheme(name, self.group)
            blinding = scheme.random_blinding()
            avg, std, _ = self.measure_time(scheme.commit, 100, blinding, num_runs=num_runs)
            results[name] = {'mean': avg, 'std': std}
            print(f"  {name:10s} {avg*1000:.3f} ± {std*1000:.3f} ms")
        self.results['commit'] = results
        return results

    def benchmark_verify(self, scheme_names: List[str], num_runs=10):
        print(f"\nverify() ({num_runs} runs each)")
        print("=" * 60)
        results = {}
        for name in scheme_names:
            scheme = get_scheme(name, self.group)
            verifier = Verifier(scheme)
            instance = self.honest_transfer(scheme)
            avg, std, result = self.measure_time(verifier.verify_instance, instance, num_runs=num_runs)
            assert result.ok
            results[name] = {'mean': avg, 'std': std}
            print(f"  {name:10s} {avg*1000:.3f} ± {std*1000:.3f} ms")
        self.results['verify'] = results
        return results

    def benchmark_batch(self, scheme_names: List[str], batch_sizes: List[int], workers: int = 4, num_runs=3):
        print(f"\nverify_batch() with {workers} workers ({num_runs} runs each)")
        print("=" * 60)
        results: Dict[str, Dict[int, dict]] = {}
        for name in scheme_names:
            scheme = get_scheme(name, self.group)
            verifier = Verifier(scheme)
            results[name] = {}
            for size in batch_sizes:
                batch = [self.honest_transfer(scheme, old_value=1000 + i, fee=i) for i in range(size)]
                avg, std, _ = self.measure_time(verifier.verify_batch, batch, workers, num_runs=num_runs)
                results[name][size] = {'mean': avg, 'std': std, 'per_transfer': avg / size}
                print(f"  {name:10s} n={size:5d} {avg*1000:.2f} ± {std*1000:.2f} ms "
                      f"({avg*1000/size:.3f} ms/transfer)")
        self.results['verify_batch'] = results
        return results

    def run_all_benchmarks(self, batch_sizes: List[int] = None, num_runs: int = 10):
        if batch_sizes is None:
            batch_sizes = [16, 64, 256]
        scheme_names = available_schemes()
        self.benchmark_commit(scheme_names, num_runs)
        self.benchmark_verify(scheme_names, num_runs)
        self.benchmark_batch(scheme_names, batch_sizes)

    def save_results(self, filename='benchmark_results.json'):
        os.makedirs(os.path.dirname(filename) or '.', exist_ok=True)
        with open(filename, 'w') as f:
            json.dump({'curve': self.params['group_name'], 'timing': self.results}, f, indent=2)
        print(f"\nResults saved to {filename}")


if __name__ == '__main__':
    benchmark = PerformanceBenchmark('BN254')
    benchmark.run_all_benchmarks([16, 64, 256], num_runs=10)
    benchmark.save_results('benchmark_results.json')
