"""
Batch example: queue many screenshots and run them with bounded concurrency.

Requests are dispatched in submission order with at most
``max_concurrency`` in flight; each outcome arrives through the
completed/failed listeners as soon as it resolves.

Set WEBSHOTAPI_API_KEY before running.
"""

import asyncio
import tempfile
from pathlib import Path
from typing import Any

from webshotapi import Result, WebshotClient

SITES = [
    "https://www.example.com",
    "https://www.python.org",
    "https://www.wikipedia.org",
    "https://www.mozilla.org",
    "https://not-existing-website-for-sure.example",
]


async def main() -> None:
    out_dir = Path(tempfile.mkdtemp(prefix="webshots_"))
    client = WebshotClient.builder().from_env().max_concurrency(3).request_timeout(120).build()

    @client.on_completed
    def save(result: Result, params: dict[str, Any], index: int) -> None:
        path = result.save(out_dir / f"file_{index}")
        print(f"[{index}] {params['link']} -> {path}")

    @client.on_failed
    def report(error: Exception, params: dict[str, Any], index: int) -> None:
        print(f"[{index}] {params.get('link')} failed: {error}")

    batch = client.multi()
    for site in SITES:
        batch.screenshot_jpg(site, {"width": 1280, "full_page": 1})

    monitor = client.multi_monitor(console_clear=False, interval=0.5)
    try:
        await client.exec()
        await client.join()
        await monitor.wait()
    finally:
        await client.close()

    print(client.multi_stats().as_dict())


if __name__ == "__main__":
    asyncio.run(main())
