"""
Load test for the Career Suggestions Gateway.

Fires concurrent suggestion requests at a running gateway and reports:
- Success / failure counts (502s mean every model candidate was exhausted)
- Latency under load (P50, P95, P99), which includes upstream backoff
- Which model candidates actually served the requests

Usage:
    python benchmarks/load_test.py --url http://localhost:3000 --concurrency 5
    python benchmarks/load_test.py --url http://localhost:3000 --concurrency 20 --requests 60
"""

import argparse
import asyncio
import json
import time
from collections import Counter
from dataclasses import dataclass

import httpx


PREFERENCES = [
    "Python, data analysis, enjoy working with numbers, prefer remote work",
    "Drawing, storytelling, video editing, like collaborative teams",
    "Biology, caring for people, calm under pressure",
    "Electronics, tinkering with hardware, hands-on problem solving",
    "Public speaking, persuasion, interested in business and startups",
]


@dataclass
class RequestResult:
    model_used: str
    latency_ms: float
    status_code: int
    error: str | None = None


async def send_request(client: httpx.AsyncClient, url: str, preferences: str) -> RequestResult:
    """Send a single request and collect metrics."""
    start = time.perf_counter()
    try:
        resp = await client.post(f"{url}/api/suggestions", json={"preferences": preferences})
        latency = (time.perf_counter() - start) * 1000

        if resp.status_code == 200:
            data = resp.json()
            return RequestResult(
                model_used=data.get("modelUsed") or "unknown",
                latency_ms=latency,
                status_code=200,
            )
        return RequestResult(
            model_used="error",
            latency_ms=latency,
            status_code=resp.status_code,
            error=resp.text[:200],
        )
    except httpx.RequestError as e:
        latency = (time.perf_counter() - start) * 1000
        return RequestResult(
            model_used="error",
            latency_ms=latency,
            status_code=0,
            error=str(e)[:200],
        )


async def run_load_test(url: str, concurrency: int, total_requests: int):
    """Run the load test with given concurrency."""
    payloads = [PREFERENCES[i % len(PREFERENCES)] for i in range(total_requests)]

    print(f"\nRunning load test: {total_requests} requests, concurrency={concurrency}")
    print(f"Target: {url}\n")

    client = httpx.AsyncClient(timeout=180.0)
    semaphore = asyncio.Semaphore(concurrency)

    async def bounded_request(preferences):
        async with semaphore:
            return await send_request(client, url, preferences)

    start = time.perf_counter()
    results = await asyncio.gather(*(bounded_request(p) for p in payloads))
    total_time = time.perf_counter() - start

    await client.aclose()

    # --- Report ---
    successful = [r for r in results if r.status_code == 200]
    failed = [r for r in results if r.status_code != 200]

    print("=" * 60)
    print("LOAD TEST RESULTS")
    print("=" * 60)
    print(f"Total requests:  {len(results)}")
    print(f"Successful:      {len(successful)}")
    print(f"Failed:          {len(failed)}")
    print(f"Total time:      {total_time:.1f}s")
    print(f"Throughput:      {len(successful)/total_time:.2f} req/s")

    if successful:
        latencies = sorted(r.latency_ms for r in successful)
        print("\nLatency (ms):")
        print(f"  P50:  {latencies[len(latencies)//2]:.0f}")
        print(f"  P95:  {latencies[int(len(latencies)*0.95)]:.0f}")
        print(f"  P99:  {latencies[int(len(latencies)*0.99)]:.0f}")
        print(f"  Max:  {latencies[-1]:.0f}")

        print("\nModels used:")
        for model, count in Counter(r.model_used for r in successful).most_common():
            print(f"  {model:28s}: {count}")

    if failed:
        print("\nErrors:")
        for r in failed[:5]:
            print(f"  [{r.status_code}] {r.error}")

    # Fetch gateway metrics
    try:
        resp = httpx.get(f"{url}/metrics")
        if resp.status_code == 200:
            print("\nGateway metrics:")
            print(json.dumps(resp.json(), indent=2))
    except httpx.RequestError as e:
        print(f"\nCould not fetch gateway metrics: {e}")

    print("=" * 60)


def main():
    parser = argparse.ArgumentParser(description="Load test the career suggestions gateway")
    parser.add_argument("--url", default="http://localhost:3000")
    parser.add_argument("--concurrency", type=int, default=5)
    parser.add_argument("--requests", type=int, default=20)
    args = parser.parse_args()
    asyncio.run(run_load_test(args.url, args.concurrency, args.requests))


if __name__ == "__main__":
    main()
