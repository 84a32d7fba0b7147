"""
Basic example: one screenshot, one extraction, account info.

Set WEBSHOTAPI_API_KEY before running.
"""

import asyncio
import tempfile
from pathlib import Path

from webshotapi import RemoteError, WebshotClient
from webshotapi.telemetry import LogLevel, WebshotLogger


async def main() -> None:
    WebshotLogger.configure(level=LogLevel.INFO)
    out_dir = Path(tempfile.gettempdir())

    async with WebshotClient.from_env() as client:
        # PDF screenshot, saved with the extension matching the response
        result = await client.pdf(
            "https://www.example.com",
            {"remove_modals": 1, "ads": 1, "width": 1920, "no_cache": 1},
        )
        print("Saved", result.save(out_dir / "example"))

        # Words with their positions on the page
        words = await client.extract("https://www.example.com", {"extract_words": True})
        for word in words.json().get("words", [])[:10]:
            print(word)

        try:
            await client.project(0)
        except RemoteError as e:
            print(f"Project lookup failed ({e.status_code}): {e.message}")

        print("Requests remaining:", client.get_request_remaining())


if __name__ == "__main__":
    asyncio.run(main())
