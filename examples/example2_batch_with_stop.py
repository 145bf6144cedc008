#!/usr/bin/env python3
"""
Example 2: Batch Generation With a Stop Limit

This example loads a folder of images, shows which ones already carry stock
metadata, and generates metadata for the rest. The batch is stopped after a
given number of files, the way a user would press "Stop" in an interactive
session; the remaining files stay pending for a later run.
"""

import sys
import asyncio
import argparse
from pathlib import Path

# Add the parent directory to sys.path to import the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from stock_metadata.batch_processor import BatchProcessor
from stock_metadata.cli import collect_image_paths
from stock_metadata.config import load_config
from stock_metadata.logging_setup import setup_logging
from stock_metadata.metadata_service import MetadataService
from stock_metadata.models import FileStatus


async def run_batch(processor, paths, stop_after):
    processor.add_files(paths)
    await processor.load_all_previews()

    for item in processor.files:
        if item.has_existing_metadata:
            print(f"{item.file_name}: already has metadata ({item.existing_metadata.tag_count} tags)")

    def on_progress(progress, item):
        print(f"[{progress.current}/{progress.total}] {item.file_name}: {item.status.value}")
        if stop_after and progress.current >= stop_after:
            processor.stop()

    processor.on_progress = on_progress
    return await processor.generate_all_metadata()


def batch_example():
    """Batch example."""
    parser = argparse.ArgumentParser(description="Batch example for the stock metadata tool")
    parser.add_argument("folder", help="Folder with JPEG or PNG images")
    parser.add_argument("--stop-after", type=int, default=None,
                        help="Stop the batch after this many files")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    config_path = Path(__file__).parent.parent / "config.json"
    config = load_config(str(config_path), required=False)
    if args.debug:
        config.debug_mode = True
        config.log_level = "DEBUG"

    setup_logging(config)

    paths = collect_image_paths([args.folder])
    if not paths:
        print(f"Error: No supported images in {args.folder}")
        return 1

    service = MetadataService(config)
    processor = BatchProcessor(service, config)
    try:
        stats = asyncio.run(run_batch(processor, paths, args.stop_after))
    finally:
        service.close()

    print("\nBatch finished!")
    print(f"State: {processor.state.value}")
    print(f"Successfully processed: {stats['successful_images']}")
    print(f"Failed to process: {stats['failed_images']}")
    print(f"Still pending: {len(processor.get_pending_files())}")

    for item in processor.files:
        if item.status == FileStatus.DONE:
            print(f"\n{item.file_name} (score {item.metadata.score})")
            print(f"  {item.metadata.title}")
        elif item.status == FileStatus.ERROR:
            print(f"\n{item.file_name}: {item.error}")

    return 0


if __name__ == "__main__":
    sys.exit(batch_example())
