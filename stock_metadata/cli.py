"""
Command-line interface for the stock metadata tool.
"""

import argparse
import asyncio
import json
import os
from typing import List

from tqdm import tqdm

from .batch_processor import BatchProcessor
from .config import AppConfig, load_config, save_config
from .constants import MAX_FILE_SIZE_BYTES, MIN_RESOLUTION, SUPPORTED_LANGUAGES
from .file_processors import get_processor, get_supported_extensions
from .logging_setup import setup_logging, get_logger
from .metadata_service import MetadataService
from .models import FileStatus
from .normalizer import validate_metadata
from .scorer import get_score_rating
from .utils import format_file_size, truncate

logger = get_logger(__name__)


def parse_arguments(argv: List[str] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="Generate stock photography metadata with AI and embed it into images"
    )

    parser.add_argument(
        "--config",
        default="config.json",
        help="Path to configuration JSON file (default: config.json)"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode regardless of config setting"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate metadata for images")
    generate.add_argument("paths", nargs="+", help="Image files or directories")
    generate.add_argument("--write", action="store_true", help="Embed the generated metadata into the files")
    generate.add_argument("--no-backup", action="store_true", help="Do not back up files before writing")
    generate.add_argument("--language", choices=sorted(SUPPORTED_LANGUAGES), help="Override metadata language")
    generate.add_argument("--model", help="Override the AI model")
    generate.add_argument("--json", action="store_true", help="Print results as JSON")

    show = subparsers.add_parser("show", help="Show the metadata embedded in an image")
    show.add_argument("path", help="Image file")

    strip = subparsers.add_parser("strip", help="Remove all metadata from images")
    strip.add_argument("paths", nargs="+", help="Image files")
    strip.add_argument("--no-backup", action="store_true", help="Do not back up files first")

    delete_tags = subparsers.add_parser("delete-tags", help="Delete specific tags from an image")
    delete_tags.add_argument("path", help="Image file")
    delete_tags.add_argument("--tags", nargs="+", required=True, help="Tag names to delete")
    delete_tags.add_argument("--no-backup", action="store_true", help="Do not back up the file first")

    init_config = subparsers.add_parser("init-config", help="Write a configuration file with default settings")
    init_config.add_argument("output", help="Where to write the configuration")

    return parser.parse_args(argv)


def process_arguments(args: argparse.Namespace, config: AppConfig) -> AppConfig:
    """
    Process command-line arguments and override config values.

    Args:
        args: Parsed arguments
        config: Loaded configuration

    Returns:
        Updated configuration
    """
    if args.debug:
        config.debug_mode = True
        config.log_level = "DEBUG"
    if getattr(args, "no_backup", False):
        config.backup_enabled = False
    if getattr(args, "language", None):
        config.metadata_language = args.language
    if getattr(args, "model", None):
        config.provider.model = args.model

    return config


def collect_image_paths(paths: List[str]) -> List[str]:
    """
    Expand directories and drop unsupported files.

    Args:
        paths: Files and directories given on the command line

    Returns:
        Absolute paths of supported image files
    """
    extensions = tuple(get_supported_extensions())
    collected = []

    for path in paths:
        path = os.path.abspath(os.path.expanduser(path))
        if os.path.isdir(path):
            for name in sorted(os.listdir(path)):
                if name.lower().endswith(extensions):
                    collected.append(os.path.join(path, name))
        elif get_processor(path) is None:
            logger.warning(f"Skipping unsupported file: {path}")
        elif not os.path.exists(path):
            logger.warning(f"File not found: {path}")
        else:
            collected.append(path)

    return [path for path in collected if _within_size_limit(path)]


def _within_size_limit(path: str) -> bool:
    size = os.path.getsize(path)
    if size > MAX_FILE_SIZE_BYTES:
        logger.warning(f"Skipping {path}: {format_file_size(size)} exceeds {format_file_size(MAX_FILE_SIZE_BYTES)}")
        return False
    return True


def _update_progress_bar(progress_bar: tqdm, item) -> None:
    progress_bar.set_postfix_str(truncate(item.file_name, 30))
    progress_bar.update(1)


async def _generate(args: argparse.Namespace, config: AppConfig, service: MetadataService) -> int:
    paths = collect_image_paths(args.paths)
    if not paths:
        logger.error("No supported image files given")
        return 1

    with tqdm(total=len(paths), desc="Generating", unit="file") as progress_bar:
        processor = BatchProcessor(
            service, config,
            on_progress=lambda progress, item: _update_progress_bar(progress_bar, item)
        )
        processor.add_files(paths)
        stats = await processor.generate_all_metadata()

    results = []
    for item in processor.files:
        entry = {"file": item.file_path, "status": item.status.value}
        if item.status == FileStatus.DONE:
            entry.update(item.metadata.to_dict())
            entry["rating"] = get_score_rating(item.metadata.score)
            entry["warnings"] = validate_metadata(item.metadata).warnings
            if args.write:
                try:
                    await processor.save_file(item.id, item.metadata)
                    entry["written"] = True
                except Exception as e:
                    logger.error(f"Failed to write metadata to {item.file_name}: {str(e)}")
                    entry["written"] = False
                    entry["write_error"] = str(e)
        else:
            entry["error"] = item.error
        results.append(entry)

    if args.json:
        print(json.dumps(results, indent=2, ensure_ascii=False))
    else:
        for entry in results:
            print(f"\n{entry['file']}: {entry['status']}")
            if entry["status"] == FileStatus.DONE.value:
                print(f"  Score: {entry['score']}/100 ({entry['rating']})")
                print(f"  Title: {entry['title']}")
                print(f"  Description: {entry['description']}")
                print(f"  Keywords ({len(entry['keywords'])}): {', '.join(entry['keywords'])}")
                for warning in entry["warnings"]:
                    print(f"  Warning: {warning}")
            else:
                print(f"  Error: {entry['error']}")

    logger.info(f"Successfully processed: {stats['successful_images']}/{stats['total_images']}")
    return 0 if stats['failed_images'] == 0 else 2


def _show(args: argparse.Namespace, service: MetadataService) -> int:
    raw = service.exiftool.read_all_metadata(args.path)
    dimensions = service.image_processor.get_image_dimensions(args.path)

    print(f"File: {args.path}")
    print(f"Dimensions: {dimensions['width']}x{dimensions['height']} ({dimensions['format']})")
    if min(dimensions['width'], dimensions['height']) < MIN_RESOLUTION:
        print(f"  Warning: below the {MIN_RESOLUTION}px minimum accepted by stock platforms")
    print(f"File size: {format_file_size(os.path.getsize(args.path))}")
    print(f"Total tags in file: {raw.tag_count}")
    print("\n[Stock Metadata]")
    print(f"  Title: {raw.stock.title}")
    print(f"  Description: {raw.stock.description}")
    print(f"  Keywords: {', '.join(raw.stock.keywords)}")
    print("\n[Technical Info]")
    for key, value in raw.technical.to_dict().items():
        print(f"  {key}: {value}")
    if raw.other:
        print(f"\n[Other Tags ({len(raw.other)})]")
        for key, value in sorted(raw.other.items()):
            print(f"  {key}: {value}")
    return 0


def run_cli(argv: List[str] = None) -> int:
    """
    Run the command-line interface.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    service = None
    config = None
    try:
        args = parse_arguments(argv)

        if args.command == "init-config":
            save_config(load_config(args.config, required=False), args.output)
            print(f"Configuration written to {args.output}")
            return 0

        config = load_config(args.config, required=False)
        config = process_arguments(args, config)

        setup_logging(config)

        service = MetadataService(config)

        if args.command == "generate":
            if not config.provider.api_key:
                logger.error("API key not configured (set openrouter_api_key or OPENROUTER_API_KEY)")
                return 1
            return asyncio.run(_generate(args, config, service))

        if args.command == "show":
            return _show(args, service)

        if args.command == "strip":
            for path in args.paths:
                service.strip_all_metadata_sync(path)
                print(f"Stripped metadata from {path}")
            return 0

        if args.command == "delete-tags":
            service.delete_metadata_tags_sync(args.path, args.tags)
            print(f"Deleted {', '.join(args.tags)} from {args.path}")
            return 0

        return 1

    except Exception as e:
        logger.error(f"Script execution failed: {str(e)}")
        if config is not None and config.debug_mode:
            import traceback
            logger.error(f"Traceback: {traceback.format_exc()}")
        return 1
    finally:
        if service is not None:
            service.close()
