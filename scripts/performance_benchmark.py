#!/usr/bin/env python3
"""
Performance Benchmark for snowflake-ids

Measures generation throughput and checks the uniqueness guarantee under
contention:

- Sequential: >100,000 ids/sec from one thread
- Concurrent: no duplicates with 8 threads sharing one generator
- Exhaustion: 4096 ids in one frozen millisecond, then a clean rollover

Run:
    python scripts/performance_benchmark.py
"""

import threading
import time

from snowflake_ids import Snowflake
from snowflake_ids.kernel.layout import DEFAULT_CUSTOM_EPOCH, MAX_SEQUENCE
from snowflake_ids.kernel.time import TestClock


def benchmark_sequential() -> dict:
    """Benchmark single-threaded generation rate"""
    print("\n=== Benchmark: Sequential Generation ===")

    generator = Snowflake(1)
    num_ids = 200_000

    start_time = time.perf_counter()
    ids = [generator.next_id() for _ in range(num_ids)]
    elapsed = time.perf_counter() - start_time

    ids_per_sec = num_ids / elapsed if elapsed > 0 else 0
    ordered = ids == sorted(ids)

    print(f"  Ids generated: {num_ids}")
    print(f"  Time elapsed: {elapsed:.3f}s")
    print(f"  Ids/sec: {ids_per_sec:,.0f}")
    print(f"  Ordered: {ordered}")
    print(f"  Target: >100,000 ids/sec")
    print(f"  Status: {'✓ PASS' if ids_per_sec > 100_000 and ordered else '✗ FAIL'}")

    return {
        "test": "sequential",
        "ids": num_ids,
        "elapsed_sec": elapsed,
        "ids_per_sec": ids_per_sec,
        "pass": ids_per_sec > 100_000 and ordered,
    }


def benchmark_concurrent() -> dict:
    """Benchmark contended generation from several threads"""
    print("\n=== Benchmark: Concurrent Generation ===")

    generator = Snowflake(2)
    num_threads = 8
    per_thread = 25_000
    results: list[list[int]] = [[] for _ in range(num_threads)]

    def worker(slot: int) -> None:
        results[slot] = [generator.next_id() for _ in range(per_thread)]

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(num_threads)]

    start_time = time.perf_counter()
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    elapsed = time.perf_counter() - start_time

    all_ids = [i for chunk in results for i in chunk]
    unique = len(set(all_ids))

    print(f"  Threads: {num_threads}")
    print(f"  Ids generated: {len(all_ids)}")
    print(f"  Unique: {unique}")
    print(f"  Ids/sec: {len(all_ids) / elapsed:,.0f}")
    print(f"  Status: {'✓ PASS' if unique == len(all_ids) else '✗ FAIL'}")

    return {
        "test": "concurrent",
        "ids": len(all_ids),
        "unique": unique,
        "elapsed_sec": elapsed,
        "pass": unique == len(all_ids),
    }


def benchmark_exhaustion() -> dict:
    """Fill one frozen millisecond and verify the rollover"""
    print("\n=== Benchmark: Sequence Exhaustion ===")

    now = DEFAULT_CUSTOM_EPOCH + 1_000
    clock = TestClock(now)
    generator = Snowflake(3, clock=clock)

    ids = [generator.next_id() for _ in range(MAX_SEQUENCE + 1)]
    clock.schedule(now, now, now + 1)
    rollover = generator.parse(generator.next_id())

    passed = rollover.sequence == 0 and rollover.timestamp == now + 1 and len(set(ids)) == len(ids)

    print(f"  Ids in frozen millisecond: {len(ids)}")
    print(f"  Rollover: timestamp={rollover.timestamp} sequence={rollover.sequence}")
    print(f"  Status: {'✓ PASS' if passed else '✗ FAIL'}")

    return {"test": "exhaustion", "pass": passed}


def main() -> None:
    """Run all benchmarks"""
    print("\n" + "="*70)
    print("  snowflake-ids - Performance Benchmark Suite")
    print("="*70)

    results = []

    results.append(benchmark_sequential())
    results.append(benchmark_concurrent())
    results.append(benchmark_exhaustion())

    print("\n" + "="*70)
    print("  Summary")
    print("="*70)

    passed = sum(1 for r in results if r["pass"])
    total = len(results)

    for result in results:
        status = "✓ PASS" if result["pass"] else "✗ FAIL"
        print(f"  {result['test']:30s} {status}")

    print(f"\n  Tests passed: {passed}/{total}")
    print("\n" + "="*70 + "\n")


if __name__ == "__main__":
    main()
