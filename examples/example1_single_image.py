#!/usr/bin/env python3
"""
Example 1: Generate, Review and Save Metadata for One Image

This example generates metadata for a single image, shows its score and
validation warnings, lets you add extra keywords through the editor and
finally embeds the result into the file.
"""

import os
import sys
import asyncio
import argparse
from pathlib import Path

# Add the parent directory to sys.path to import the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from stock_metadata.config import load_config
from stock_metadata.editor import MetadataEditor
from stock_metadata.logging_setup import setup_logging
from stock_metadata.metadata_service import MetadataService
from stock_metadata.normalizer import validate_metadata
from stock_metadata.scorer import get_score_rating


async def review_image(service, image_path, extra_keywords, save):
    result = await service.generate_for_file(image_path)

    print(f"\nScore: {result.score}/100 ({get_score_rating(result.score)})")
    print(f"Title: {result.title}")
    print(f"Description: {result.description}")
    print(f"Keywords ({len(result.keywords)}): {', '.join(result.keywords)}")

    editor = MetadataEditor()
    editor.load_from_metadata(result)
    for keyword in extra_keywords:
        if not editor.add_keyword(keyword):
            print(f"Skipped keyword: {keyword}")

    if editor.has_changes:
        print(f"Score after edits: {editor.score()}/100")

    for warning in validate_metadata(editor.get_metadata()).warnings:
        print(f"Warning: {warning}")

    if save:
        await service.write_metadata(image_path, editor.get_metadata())
        print(f"\nMetadata written to {image_path}")


def single_image_example():
    """Single image example."""
    parser = argparse.ArgumentParser(description="Single image example for the stock metadata tool")
    parser.add_argument("image_path", help="Path to a JPEG or PNG image")
    parser.add_argument("--add-keyword", action="append", default=[],
                        help="Keyword to append before saving (repeatable)")
    parser.add_argument("--save", action="store_true", help="Embed the metadata into the image")
    parser.add_argument("--language", default=None, help="Metadata language code")
    args = parser.parse_args()

    if not os.path.exists(args.image_path):
        print(f"Error: Image not found: {args.image_path}")
        return 1

    config_path = os.path.join(Path(__file__).parent.parent, "config.json")
    config = load_config(config_path, required=False)
    if args.language:
        config.metadata_language = args.language

    if not config.provider.api_key:
        print("Error: set openrouter_api_key in config.json or OPENROUTER_API_KEY")
        return 1

    setup_logging(config)

    service = MetadataService(config)
    try:
        asyncio.run(review_image(service, args.image_path, args.add_keyword, args.save))
    finally:
        service.close()

    return 0


if __name__ == "__main__":
    sys.exit(single_image_example())
