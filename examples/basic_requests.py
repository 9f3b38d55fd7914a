"""
Example demonstrating easyhttp against a live endpoint.

This example shows how to use HttpClient with:
- Per-verb calls and a JSON callback
- A cookie jar file
- A concurrent batch with per-entry options
- Request lifecycle logging to a file

Set EASYHTTP_BASE_URL (defaults to https://httpbin.org) in the environment
or a .env file.
"""

import asyncio
import json
import os
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from easyhttp import FileHTTPLogger
from easyhttp import HttpClient
from easyhttp import Option

load_dotenv()

console = Console()


async def main() -> None:
    """Run a few requests and a batch."""
    console.print(Panel.fit("[bold blue]easyhttp example[/bold blue]"))

    base = os.getenv("EASYHTTP_BASE_URL", "https://httpbin.org").rstrip("/")
    log_file = Path("logs") / "http.log"

    # Echo is off so rich owns the console; the file still gets every line
    logger = FileHTTPLogger(log_file, echo=False)

    client = HttpClient(
        f"{base}/anything",
        headers={"Accept": "application/json"},
        cookie_file=Path("logs") / "cookies.jar",
        timeout=15,
        logger=logger,
    )
    client.add_header("User-Agent", "easyhttp-example")

    data = await client.get({"q": "hello world"}, callback=json.loads)
    console.print(f"[green]GET url:[/green] {data.get('url')}")

    data = await client.post({"name": "easyhttp"}, callback=json.loads)
    console.print(f"[green]POST form:[/green] {data.get('form')}")

    result = await client.send("DELETE")
    console.print(f"[green]DELETE status:[/green] {result.status}")

    results = await client.batch_results(
        [
            f"{base}/get",
            f"{base}/status/404",
            {"url": f"{base}/post", "options": {Option.POST_FIELDS: {"a": "1"}}},
            {"url": f"{base}/delay/2", "options": {Option.TIMEOUT: 1}},
        ]
    )

    table = Table(title="Batch")
    table.add_column("#", style="dim")
    table.add_column("Method")
    table.add_column("URL", style="cyan")
    table.add_column("Status")
    table.add_column("Error", style="red")
    for i, r in enumerate(results):
        table.add_row(str(i), r.method, r.url, str(r.status), r.error or "")
    console.print(table)

    console.print(f"[blue]Log written to: {log_file}[/blue]")


if __name__ == "__main__":
    asyncio.run(main())
