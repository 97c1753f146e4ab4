#!/usr/bin/env python3
"""Benchmark context retrieval: latency (p50, p95, p99) and QPS.

Usage:
  export API_URL=http://localhost:8000
  python scripts/bench_retrieve.py [--num-sources 100] [--num-queries 50]
"""
from __future__ import annotations

import argparse
import os
import statistics
import sys
import time

import httpx

_TOPICS = ["databases", "gardening", "astronomy", "cooking", "music theory"]


def seed(client: httpx.Client, api_url: str, num_sources: int) -> int:
    """Ingest synthetic notes; returns chunks saved."""
    saved = 0
    for i in range(num_sources):
        topic = _TOPICS[i % len(_TOPICS)]
        text = " ".join(
            f"Note {i} sentence {j} about {topic}. It has a few more words to embed."
            for j in range(30)
        )
        r = client.post(
            f"{api_url}/v1/context/ingest",
            json={
                "source_type": "note",
                "source_id": f"bench-{i}",
                "title": f"Bench note {i} ({topic})",
                "content": text,
            },
        )
        r.raise_for_status()
        saved += r.json()["saved"]
    return saved


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark context retrieval")
    parser.add_argument("--num-sources", type=int, default=50, help="Notes to ingest before querying (0 skips seeding)")
    parser.add_argument("--num-queries", type=int, default=50, help="Number of retrieve requests")
    parser.add_argument("--threshold", type=float, default=0.7, help="Similarity threshold per query")
    parser.add_argument("--output", type=str, default="bench_retrieve.txt", help="Output file path")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")

    with httpx.Client(timeout=120.0) as client:
        if args.num_sources:
            print(f"Seeding {args.num_sources} notes...")
            chunks = seed(client, api_url, args.num_sources)
            print(f"Saved {chunks} chunks")

    latencies: list[float] = []
    errors = 0
    found = 0
    print(f"Running {args.num_queries} retrieve requests...")
    start_total = time.perf_counter()
    with httpx.Client(timeout=30.0) as client:
        for q in range(args.num_queries):
            t0 = time.perf_counter()
            r = client.post(
                f"{api_url}/v1/context/retrieve",
                json={"query": f"What do my notes say about {_TOPICS[q % len(_TOPICS)]}?", "threshold": args.threshold},
            )
            elapsed = time.perf_counter() - t0
            if r.status_code == 200:
                latencies.append(elapsed)
                found += r.json()["chunk_count"]
            else:
                errors += 1
    total_elapsed = time.perf_counter() - start_total

    n = len(latencies)
    if n == 0:
        print("No successful retrievals.")
        return 1

    qps = n / total_elapsed
    ordered = sorted(latencies)
    p50 = statistics.median(latencies) * 1000
    p95 = ordered[int(n * 0.95) - 1] * 1000 if n >= 20 else p50
    p99 = ordered[int(n * 0.99) - 1] * 1000 if n >= 100 else p95

    summary = (
        f"Retrieve benchmark (sources={args.num_sources}, queries={n}, errors={errors})\n"
        f"  Avg chunks per bundle: {found / n:.2f}\n"
        f"  QPS: {qps:.2f}\n"
        f"  Latency: p50={p50:.1f} ms, p95={p95:.1f} ms, p99={p99:.1f} ms\n"
        f"  Total time: {total_elapsed:.2f} s\n"
    )
    print(summary)

    try:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(summary)
        print(f"Wrote {args.output}")
    except OSError:
        pass

    return 0


if __name__ == "__main__":
    sys.exit(main())
