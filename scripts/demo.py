#!/usr/bin/env python3
"""
Demo script for the employee cache.

Walks through the cache-aside scenarios: read-through, cache hit,
out-of-band staleness, invalidation on write, not-found, cache outage
and miss-coalescing. Uses an in-memory key-value store unless
``--redis`` is given, in which case REDIS_URL is used.
"""

import argparse
import asyncio
import time

from employee_cache import (
    CacheAsideService,
    EmployeeCodec,
    EmployeeEntity,
    InMemoryEmployeeRepository,
    InMemoryKeyValueStore,
    RedisKeyValueStore,
    setup_logging,
)


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def timed_read(service: CacheAsideService, employee_id: int) -> None:
    start = time.perf_counter()
    employee = await service.read(employee_id)
    elapsed_ms = (time.perf_counter() - start) * 1000
    print(f"  read({employee_id}) -> {employee}  [{elapsed_ms:.2f} ms]")


async def run(use_redis: bool) -> None:
    store = RedisKeyValueStore.create() if use_redis else InMemoryKeyValueStore()
    repository = InMemoryEmployeeRepository([EmployeeEntity(name="John Doe")], latency=0.05)
    service = CacheAsideService.create(store=store, record_store=repository, codec=EmployeeCodec())

    await store.delete("employee:1")

    print_section("A: Read-through on an empty cache")
    await timed_read(service, 1)
    await service.drain()
    await timed_read(service, 1)

    print_section("B: Out-of-band change is not detected")
    repository.put(EmployeeEntity(id=1, name="Jane Doe"))
    await timed_read(service, 1)

    print_section("C: Write through the service invalidates the entry")
    await service.write(EmployeeEntity(id=1, name="Jane Doe"))
    await timed_read(service, 1)
    await service.drain()

    print_section("D: Unknown employee")
    await timed_read(service, 999)

    print_section("Miss-coalescing: 50 concurrent readers of a cold entry")
    await service.write(EmployeeEntity(id=1, name="Jane Doe"))
    results = await asyncio.gather(*(service.read(1) for _ in range(50)))
    print(f"  {len(results)} results, {service.get_stats()['coalesced_reads']} coalesced reads")
    await service.drain()

    if isinstance(store, InMemoryKeyValueStore):
        print_section("E: Cache outage")
        store.fail = True
        await service.write(EmployeeEntity(id=1, name="John Doe"))
        await timed_read(service, 1)
        store.fail = False

    print_section("Statistics")
    for name, value in service.get_stats().items():
        print(f"  {name}: {value}")

    if isinstance(store, RedisKeyValueStore):
        await store.close()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--redis", action="store_true", help="use Redis from REDIS_URL")
    args = parser.parse_args()

    setup_logging()
    asyncio.run(run(args.redis))


if __name__ == "__main__":
    main()
