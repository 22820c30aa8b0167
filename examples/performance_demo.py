#!/usr/bin/env python3
"""
Performance demonstration for geocurve

This example showcases the performance characteristics of geocurve,
including the curve transform itself and how the query depth trades range
lookups against candidate filtering.
"""

import gc
import random
import statistics
import time

import geocurve


def format_number(num: float) -> str:
    """Format large numbers with commas."""
    return f"{num:,.0f}"


def format_time(seconds: float) -> str:
    """Format time duration in human-readable format."""
    if seconds < 0.001:
        return f"{seconds * 1_000_000:.1f}us"
    elif seconds < 1:
        return f"{seconds * 1000:.1f}ms"
    else:
        return f"{seconds:.2f}s"


def benchmark_operation(func, *args, iterations: int = 100, warmup: int = 10):
    """Benchmark an operation with multiple iterations."""
    # Warmup
    for _ in range(warmup):
        func(*args)

    # Force garbage collection
    gc.collect()

    # Actual benchmark
    times = []
    for _ in range(iterations):
        start = time.perf_counter()
        result = func(*args)
        end = time.perf_counter()
        times.append(end - start)

    return {
        "mean": statistics.mean(times),
        "median": statistics.median(times),
        "min": min(times),
        "max": max(times),
        "std": statistics.stdev(times) if len(times) > 1 else 0,
        "result": result,
    }


def random_location(center: geocurve.Location, spread: float) -> geocurve.Location:
    return geocurve.Location(
        center.longitude + random.uniform(-spread, spread),
        center.latitude + random.uniform(-spread, spread),
    )


def benchmark_curve_operations():
    """Benchmark encode/decode."""
    print("[CURVE] Hilbert Curve Benchmark")
    print("=" * 50)

    for order in (8, 16, 24):
        size = 1 << order

        def encode_single(order=order, size=size):
            return geocurve.encode(random.randrange(size), random.randrange(size), order)

        def decode_single(order=order):
            return geocurve.decode(random.randrange(4 ** order))

        encode_stats = benchmark_operation(encode_single, iterations=10000)
        decode_stats = benchmark_operation(decode_single, iterations=10000)
        print(
            f"Order {order:2d} encode:     {format_time(encode_stats['mean'])} avg, {format_number(1 / encode_stats['mean'])} ops/sec"
        )
        print(
            f"Order {order:2d} decode:     {format_time(decode_stats['mean'])} avg, {format_number(1 / decode_stats['mean'])} ops/sec"
        )

    print()


def benchmark_bulk_operations():
    """Benchmark bulk insert and sort."""
    print("[BULK] Bulk Operations Benchmark")
    print("=" * 50)

    center = geocurve.Location(174.78, -41.29)
    locations = [random_location(center, 5.0) for _ in range(10000)]

    def bulk_insert_and_sort():
        index = geocurve.SpatialIndex.for_earth(order=16)
        index.extend(locations)
        index.sort()
        return index

    bulk_stats = benchmark_operation(bulk_insert_and_sort, iterations=5, warmup=1)
    ops_per_sec = len(locations) / bulk_stats["mean"]
    print(
        f"Insert + sort (10K): {format_time(bulk_stats['mean'])} total, {format_number(ops_per_sec)} points/sec"
    )

    print()


def benchmark_query_depth():
    """Benchmark query depth against range count."""
    print("[DEPTH] Query Depth Benchmark")
    print("=" * 50)

    center = geocurve.Location(174.78, -41.29)
    index = geocurve.SpatialIndex.for_earth(order=16)
    index.extend(random_location(center, 5.0) for _ in range(20000))
    index.sort()

    box = geocurve.Box.from_bounds((173.0, -43.0), (176.0, -40.0))

    for depth in (0, 4, 8, 10, 12, 14):

        def query_at_depth(d=depth):
            return index.query(box, d)

        depth_stats = benchmark_operation(query_at_depth, iterations=20, warmup=2)
        ranges = len(index.ranges(box, depth))
        result_count = len(depth_stats["result"])
        print(
            f"  depth {depth:2d}: {format_time(depth_stats['mean'])} avg, {ranges:5d} ranges, {result_count:5d} results"
        )

    print()


def benchmark_radius_queries():
    """Benchmark radius queries."""
    print("[MAP] Radius Query Benchmark")
    print("=" * 50)

    center = geocurve.Location(172.64, -43.53)
    index = geocurve.SpatialIndex.for_earth(order=16)
    index.extend(random_location(center, 1.0) for _ in range(10000))
    index.sort()

    print("Query performance by radius:")
    for radius in (1_000.0, 5_000.0, 10_000.0, 50_000.0):

        def query_with_radius(r=radius):
            return index.nearby(center, r)

        radius_stats = benchmark_operation(query_with_radius, iterations=20, warmup=2)
        result_count = len(radius_stats["result"])
        print(
            f"  {radius / 1000:5.1f}km radius:  {format_time(radius_stats['mean'])} avg, {result_count:5d} results"
        )

    print()


def main():
    """Run comprehensive performance demonstration."""
    print("[DEMO] geocurve Performance Demonstration")
    print("=" * 60)
    print(f"Using geocurve version: {geocurve.__version__}")
    print(f"Test started at: {time.strftime('%Y-%m-%d %H:%M:%S')}")
    print()

    try:
        benchmark_curve_operations()
        benchmark_bulk_operations()
        benchmark_query_depth()
        benchmark_radius_queries()

        print("[SUCCESS] Performance demonstration completed successfully!")
        print()
        print("Key Takeaways:")
        print("- Shallow queries do few range lookups but filter more candidates")
        print("- Deep queries filter little but walk more of the curve")
        print("- Insert is cheap; sort once after loading")

    except Exception as e:
        print(f"[ERROR] Error during performance testing: {e}")
        raise


if __name__ == "__main__":
    main()
