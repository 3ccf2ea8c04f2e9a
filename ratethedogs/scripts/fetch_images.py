"""
Dog CEO image fetcher.
Downloads the full breed image catalog from the Dog CEO API and writes it to
breed-images.json (plus breed-stats.json) for the seeding script.

The Dog CEO data has a few quirks handled here:
- nested breed list ("bulldog" with sub-breeds "french", "english")
- parent breeds listing sub-breed images ("pug" containing "puggle" images)
- one breed listed twice ("bulldog-boston" and "terrier-boston")
"""

import argparse
import asyncio
import json
import sys
import time
from pathlib import Path
from typing import Any, Dict, Optional
from loguru import logger

from ..config import settings
from ..utils.api_clients import DogCeoAPIError, DogCeoClient
from ..utils.dog_ceo_breeds import get_readable_breed_name
from ..utils.dog_ceo_utils import (
    calculate_stats,
    filter_duplicate_images,
    find_invalid_urls,
    flatten_breed_list,
    merge_duplicate_breed_names,
)


def print_stats(stats: Dict[str, Any]) -> None:
    """Log a human-readable summary of the catalog."""
    logger.info("=" * 50)
    logger.info("STATISTICS")
    logger.info("=" * 50)
    logger.info(f"Total breeds: {stats['total_breeds']}")
    logger.info(f"Total images: {stats['total_images']:,}")
    logger.info(f"Duplicates removed: {stats['duplicates_removed']}")
    logger.info(f"Empty breeds removed: {stats['empty_breeds_removed']}")
    if stats["total_breeds"]:
        logger.info(
            f"Average images per breed: {round(stats['total_images'] / stats['total_breeds'])}"
        )

    logger.info("Top 10 breeds by image count:")
    for i, breed in enumerate(stats["breed_stats"][:10], start=1):
        logger.info(f"  {i}. {breed['breed']}: {breed['count']} images")

    logger.info("Bottom 5 breeds by image count:")
    for breed in stats["breed_stats"][-5:]:
        logger.info(f"  - {breed['breed']}: {breed['count']} images")


async def build_catalog(client: DogCeoClient) -> Dict[str, Any]:
    """
    Fetch and clean the breed image catalog.

    Args:
        client: Dog CEO API client

    Returns:
        {"breed_images": BreedImages, "stats": dict}
    """
    breeds = await client.fetch_breed_list()
    breed_list = flatten_breed_list(breeds)
    logger.info(f"Found {len(breed_list)} breeds (including sub-breeds)")

    raw_images = await client.fetch_all_images(breed_list)

    logger.info("Filtering duplicate images...")
    filter_result = filter_duplicate_images(raw_images)
    if filter_result["empty_breeds"]:
        logger.info(f"Breeds without images: {', '.join(filter_result['empty_breeds'])}")

    logger.info("Merging breeds with the same display name...")
    merge_result = merge_duplicate_breed_names(filter_result["filtered"], get_readable_breed_name)
    breed_images = merge_result["merged"]

    invalid = find_invalid_urls(breed_images)
    for breed, urls in invalid.items():
        logger.warning(f"{breed}: {len(urls)} invalid image URLs")

    stats = calculate_stats(
        breed_images,
        duplicates_removed=filter_result["removed_count"],
        empty_breeds_removed=len(filter_result["empty_breeds"]),
    )
    return {"breed_images": breed_images, "stats": stats}


def write_catalog(catalog: Dict[str, Any], output_path: Path) -> Path:
    """Write breed-images.json and breed-stats.json next to it."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(catalog["breed_images"], indent=2))

    stats_path = output_path.with_name("breed-stats.json")
    stats_path.write_text(json.dumps(catalog["stats"], indent=2))
    return stats_path


async def run(
    output_path: Path,
    batch_size: Optional[int] = None,
    batch_delay: Optional[float] = None,
) -> bool:
    start = time.time()
    client = DogCeoClient(batch_size=batch_size, batch_delay=batch_delay)

    try:
        catalog = await build_catalog(client)
    except DogCeoAPIError as e:
        logger.error(f"✗ Fetch failed: {e}")
        return False

    print_stats(catalog["stats"])

    logger.info(f"Writing to {output_path}...")
    stats_path = write_catalog(catalog, output_path)

    size_mb = output_path.stat().st_size / 1024 / 1024
    logger.info(f"✓ Done in {time.time() - start:.1f}s ({size_mb:.2f} MB)")
    logger.info(f"Stats written to {stats_path}")
    return True


def main():
    """Main entry point for the script."""
    parser = argparse.ArgumentParser(
        description="Fetch every Dog CEO breed image into breed-images.json",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Fetch into the default location (BREED_IMAGES_PATH)
  ratethedogs-fetch-images

  # Smaller batches with a longer pause between them
  ratethedogs-fetch-images --batch-size 5 --batch-delay 2
        """
    )
    parser.add_argument(
        "--output",
        default=settings.breed_images_path,
        help=f"Output JSON path (default: {settings.breed_images_path})"
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        help=f"Breeds fetched concurrently (default: {settings.fetch_batch_size})"
    )
    parser.add_argument(
        "--batch-delay",
        type=float,
        help=f"Seconds between batches (default: {settings.fetch_batch_delay})"
    )
    args = parser.parse_args()

    logger.remove()
    logger.add(sys.stderr, format="<level>{message}</level>", level=settings.log_level.upper())

    success = asyncio.run(run(
        Path(args.output),
        batch_size=args.batch_size,
        batch_delay=args.batch_delay,
    ))
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
