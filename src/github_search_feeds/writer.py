"""
Feed file writer.

Writes rendered documents into the output directory without blocking the
event loop.
"""

import asyncio
from pathlib import Path


class FeedWriter:
    """Writes feed documents into a single output directory."""

    def __init__(self, output_dir: str | Path = "dist"):
        """
        Initialize the writer

        Args:
            output_dir: Directory that receives the feed files
        """
        self.output_dir = Path(output_dir)

        # Create output directory if it doesn't exist
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, filename: str) -> Path:
        return self.output_dir / filename

    async def write(self, filename: str, content: str) -> Path:
        """Write content as UTF-8 text and return the file path."""
        path = self.path_for(filename)
        await asyncio.to_thread(path.write_text, content, encoding="utf-8")
        return path

    async def remove(self, filename: str) -> None:
        """Delete a previously written file, if present."""
        path = self.path_for(filename)
        await asyncio.to_thread(path.unlink, missing_ok=True)
