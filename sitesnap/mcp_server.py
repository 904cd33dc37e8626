"""MCP server exposing the site screenshot run as a tool."""

from __future__ import annotations

import io
import logging
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from .config import SnapshotConfig
from .snapshots import run_snapshots

logger = logging.getLogger("sitesnap.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="sitesnap")


@mcp.tool()
async def snapshot(
    site_dir: str,
    output_dir: str,
) -> str:
    """Screenshot every HTML page under site_dir into output_dir."""

    source = Path(site_dir).expanduser().resolve()
    destination = Path(output_dir).expanduser().resolve()
    config = SnapshotConfig(site_dir=str(source), output_dir=str(destination))

    # MCP talks over stdout, so progress goes nowhere
    summary = await run_snapshots(config, progress_stream=io.StringIO())
    if summary.failures:
        raise RuntimeError(
            f"{len(summary.failures)} of {summary.total} pages failed: "
            f"{summary.failures[0].error}"
        )
    written = sum(len(result.written) for result in summary.results)
    return (
        f"Wrote {written} screenshots for {summary.total} pages to "
        f"{destination} in {summary.elapsed_seconds:.1f}s"
    )


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
