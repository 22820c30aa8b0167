#!/usr/bin/env python3
"""
Basic usage example for geocurve

This example demonstrates the core functionality of geocurve including:
- Creating an index over the Earth
- Inserting and sorting locations
- Rectangular range queries
- Radius queries
- Working with the Hilbert curve directly
"""

import geocurve


def main():
    print("=== geocurve Basic Usage Example ===\n")

    # 1. Create an index covering longitude -180..180 and latitude -90..90
    print("1. Creating index...")
    index = geocurve.SpatialIndex.for_earth(order=16)
    print(f"[OK] Index created: {index}")

    # 2. Insert some locations with payloads
    print("\n2. Inserting locations...")

    lake_tekapo = geocurve.Location(170.53, -43.89)
    lake_alexandrina = geocurve.Location(170.45, -43.94)
    christchurch = geocurve.Location(172.64, -43.53)
    sydney = geocurve.Location(151.21, -33.85)
    wellington = geocurve.Location(174.78, -41.29)

    index.insert(lake_tekapo, b"Lake Tekapo")
    index.insert(lake_alexandrina, b"Lake Alexandrina")
    index.insert(christchurch, b"Christchurch")
    index.insert(sydney, b"Sydney")
    index.insert(wellington, b"Wellington")

    print(f"[OK] Inserted {index.count()} locations (sorted: {index.sorted})")

    # Sorting is explicit: batch the inserts, then sort once
    index.sort()
    print(f"[OK] Sorted along the curve (sorted: {index.sorted})")

    for point in index:
        print(f"  - {point.value.decode():<18} curve index {point.curve_index}")

    # 3. Range queries
    print("\n3. Range queries...")

    south_island = geocurve.Box.from_bounds((166, -48), (180, -40.5))
    for depth in (0, 4, 10):
        ranges = index.ranges(south_island, depth)
        found = index.find(south_island, depth)
        names = ", ".join(point.value.decode() for point in found)
        print(f"[OK] depth {depth:>2}: {len(ranges):>3} curve ranges -> {names}")

    # 4. Radius queries
    print("\n4. Radius queries...")

    nearby = index.nearby(lake_tekapo, 200_000.0)
    print(f"[OK] Found {len(nearby)} locations within 200km of Lake Tekapo:")
    for point, distance in nearby:
        print(f"  - {point.value.decode()}: {distance / 1000:.1f}km away")

    # 5. The curve itself
    print("\n5. Hilbert curve...")

    for value in range(4):
        print(f"[OK] decode({value}) = {geocurve.decode(value)}")

    x, y = index.bounds.integral_offset(wellington, 2 ** index.order)
    print(f"[OK] Wellington sits in grid cell ({x}, {y})")
    print(f"[OK] encode({x}, {y}, {index.order}) = {geocurve.encode(x, y, index.order)}")

    # 6. Distance calculations
    print("\n6. Distance calculations...")
    print(f"[OK] Sydney to Wellington: {sydney.distance_from(wellington) / 1000:.0f}km")
    print(f"[OK] Tekapo to Alexandrina: {(lake_tekapo - lake_alexandrina) / 1000:.1f}km")

    print("\n=== Example completed successfully! ===")


if __name__ == "__main__":
    main()
