"""
Download the MCC dataset.

Fetches the three dataset files from a base URL and writes them into a
data directory that a Collection can load from.
"""

import argparse
import asyncio
import json
import logging
from pathlib import Path

import httpx

from mcc_registry.config import settings
from mcc_registry.errors import DataLoadError
from mcc_registry.services.data_loader import CATEGORIES_FILE, CODES_FILE, RANGES_FILE

logger = logging.getLogger(__name__)

# File name -> expected top-level JSON type
EXPECTED_SHAPES: dict[str, type] = {
    CODES_FILE: list,
    RANGES_FILE: list,
    CATEGORIES_FILE: dict,
}


async def download_dataset(
    base_url: str,
    output_dir: Path,
    client: httpx.AsyncClient | None = None,
) -> list[Path]:
    """
    Download all dataset files into output_dir.

    Every file is fetched and checked before any is written, so a failed
    download never leaves a half-updated directory.

    Args:
        base_url: URL the dataset file names are appended to
        output_dir: Directory to write the files into
        client: Optional shared HTTP client

    Returns:
        Paths of the written files.

    Raises:
        httpx.HTTPError: If a request fails
        DataLoadError: If a file is not JSON of the expected shape
    """
    base = base_url.rstrip("/")
    bodies: dict[str, bytes] = {}

    async def fetch(http: httpx.AsyncClient) -> None:
        for name, expected in EXPECTED_SHAPES.items():
            url = f"{base}/{name}"
            logger.info("Fetching %s", url)
            response = await http.get(url)
            response.raise_for_status()
            try:
                data = response.json()
            except ValueError as e:
                raise DataLoadError(url, e) from e
            if not isinstance(data, expected):
                raise DataLoadError(
                    url,
                    TypeError(f"expected a JSON {expected.__name__}, got {type(data).__name__}"),
                )
            bodies[name] = json.dumps(data, indent=2, ensure_ascii=False).encode("utf-8")

    if client is None:
        async with httpx.AsyncClient(timeout=30.0) as http:
            await fetch(http)
    else:
        await fetch(client)

    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for name, body in bodies.items():
        path = output_dir / name
        path.write_bytes(body)
        written.append(path)

    return written


async def run_download(base_url: str, output_dir: Path) -> None:
    """Download the dataset, logging the outcome."""
    logger.info("Downloading MCC dataset from %s", base_url)

    try:
        paths = await download_dataset(base_url, output_dir)
        logger.info("Downloaded %d dataset files to %s", len(paths), output_dir)
    except Exception as e:
        logger.error("Failed to download MCC dataset: %s", e)
        raise


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Download the MCC dataset files.")
    parser.add_argument("--url", default=settings.data_source_url, help="Base URL of the dataset")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path(settings.data_path),
        help="Directory to write the files into",
    )
    args = parser.parse_args(argv)

    if not args.url:
        parser.error("no dataset URL given (use --url or set MCC_DATA_SOURCE_URL)")

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_download(args.url, args.output))


if __name__ == "__main__":
    main()
