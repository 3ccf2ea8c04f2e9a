"""
Dog CEO database seeding script.
Reads breed-images.json (written by ratethedogs-fetch-images) and populates
the breeds and dogs tables.
"""

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional
from loguru import logger
from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import settings
from ..constants import DOG_STATUS_APPROVED, IMAGE_SOURCE_DOG_CEO
from ..db.models import Breed, Dog, Rating, Skip, utcnow
from ..db.session import SessionLocal, init_db, init_engine
from ..utils.dog_ceo_breeds import get_api_path, get_breed_slug, get_readable_breed_name
from ..utils.dog_ceo_utils import BreedImages


STATEMENTS_PER_BATCH = 500


def load_breed_images(path: Path) -> BreedImages:
    """
    Load the breed image catalog.

    Raises:
        FileNotFoundError: If the catalog has not been fetched yet
    """
    if not path.exists():
        raise FileNotFoundError(
            f"{path} not found. Run ratethedogs-fetch-images first."
        )
    with open(path, "r") as f:
        return json.load(f)


def clean_dog_ceo_data(db: Session) -> int:
    """
    Delete all Dog CEO dogs (with their ratings and skips) and reset breed sync info.

    Returns:
        Number of dogs deleted
    """
    dog_ids = select(Dog.id).where(Dog.image_source == IMAGE_SOURCE_DOG_CEO)
    db.execute(delete(Rating).where(Rating.dog_id.in_(dog_ids)))
    db.execute(delete(Skip).where(Skip.dog_id.in_(dog_ids)))
    result = db.execute(delete(Dog).where(Dog.image_source == IMAGE_SOURCE_DOG_CEO))
    db.execute(
        update(Breed)
        .where(Breed.dog_ceo_path.is_not(None))
        .values(image_count=0, last_synced_at=None)
    )
    db.commit()
    return result.rowcount or 0


def _upsert_breed(db: Session, breed_key: str) -> Breed:
    """
    Insert or update a breed by slug.

    Raises:
        ValueError: If another breed already uses the display name
    """
    slug = get_breed_slug(breed_key)
    name = get_readable_breed_name(breed_key)

    clash = db.scalar(select(Breed).where(Breed.name == name, Breed.slug != slug))
    if clash is not None:
        raise ValueError(f'name "{name}" is already used by breed {clash.slug}')

    breed = db.scalar(select(Breed).where(Breed.slug == slug))
    if breed is None:
        breed = Breed(slug=slug)
        db.add(breed)
    breed.name = name
    breed.dog_ceo_path = get_api_path(breed_key)
    db.flush()
    return breed


def seed_database(
    db: Session,
    breed_images: BreedImages,
    limit: int = 50,
    dry_run: bool = False,
    clean: bool = False,
) -> Dict[str, Any]:
    """
    Seed breeds and dogs from a breed image catalog.

    Breeds are upserted by slug. Dogs are inserted as approved dog_ceo dogs,
    skipping image URLs already present. Inserts are committed in batches.

    Args:
        db: Database session
        breed_images: Map of breed key -> image URLs
        limit: Images per breed (0 for unlimited)
        dry_run: Only count what would be inserted
        clean: Delete existing Dog CEO data first

    Returns:
        {"total_breeds", "total_dogs", "skipped_dogs", "errors"}
    """
    stats: Dict[str, Any] = {"total_breeds": 0, "total_dogs": 0, "skipped_dogs": 0, "errors": []}

    def images_for(breed_key: str) -> List[str]:
        images = breed_images[breed_key] or []
        return images[:limit] if limit > 0 else images

    if dry_run:
        logger.info("[DRY RUN] No database changes will be made")
        for breed_key in breed_images:
            stats["total_breeds"] += 1
            stats["total_dogs"] += len(images_for(breed_key))
        return stats

    if clean:
        logger.info("Cleaning existing Dog CEO data...")
        removed = clean_dog_ceo_data(db)
        logger.info(f"Removed {removed} Dog CEO dogs")

    existing_urls = set(
        db.scalars(select(Dog.image_url).where(Dog.image_source == IMAGE_SOURCE_DOG_CEO)).all()
    )
    now = utcnow()
    pending = 0
    seeded_breeds: List[Breed] = []

    for breed_key in breed_images:
        try:
            breed = _upsert_breed(db, breed_key)
        except ValueError as e:
            stats["errors"].append(f"{breed_key}: {e}")
            logger.error(f"✗ Failed to upsert breed {breed_key}: {e}")
            continue

        seeded_breeds.append(breed)
        stats["total_breeds"] += 1

        for image_url in images_for(breed_key):
            if image_url in existing_urls:
                stats["skipped_dogs"] += 1
                continue
            existing_urls.add(image_url)
            db.add(Dog(
                image_url=image_url,
                image_source=IMAGE_SOURCE_DOG_CEO,
                breed_id=breed.id,
                status=DOG_STATUS_APPROVED,
            ))
            stats["total_dogs"] += 1
            pending += 1

            if pending >= STATEMENTS_PER_BATCH:
                db.commit()
                logger.info(f"  Dogs: {stats['total_dogs']} inserted...")
                pending = 0

    db.commit()

    logger.info("Updating breed statistics...")
    for breed in seeded_breeds:
        breed.image_count = db.scalar(
            select(func.count(Dog.id)).where(
                Dog.breed_id == breed.id,
                Dog.image_source == IMAGE_SOURCE_DOG_CEO,
            )
        ) or 0
        breed.last_synced_at = now
    db.commit()

    return stats


def report(stats: Dict[str, Any], dry_run: bool, elapsed: float) -> None:
    logger.info("================================")
    logger.info("[DRY RUN] Would have seeded:" if dry_run else "Seeding complete!")
    logger.info(f"  Breeds: {stats['total_breeds']}")
    logger.info(f"  Dogs: {stats['total_dogs']}")
    if stats["skipped_dogs"]:
        logger.info(f"  Already present: {stats['skipped_dogs']}")
    logger.info(f"  Time: {elapsed:.1f}s")

    errors = stats["errors"]
    if errors:
        logger.warning(f"Errors ({len(errors)}):")
        for error in errors[:10]:
            logger.warning(f"  - {error}")
        if len(errors) > 10:
            logger.warning(f"  ... and {len(errors) - 10} more")


def run(
    input_path: Path,
    limit: int,
    dry_run: bool = False,
    clean: bool = False,
    database_url: Optional[str] = None,
) -> bool:
    start = time.time()

    try:
        breed_images = load_breed_images(input_path)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"✗ {e}")
        return False
    logger.info(f"Loaded {len(breed_images)} breeds from {input_path}")

    if not dry_run:
        init_db(init_engine(database_url))

    db = SessionLocal()
    try:
        stats = seed_database(db, breed_images, limit=limit, dry_run=dry_run, clean=clean)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"✗ Seeding failed: {e}")
        return False
    finally:
        db.close()

    report(stats, dry_run, time.time() - start)
    return not stats["errors"]


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError("must be 0 or greater")
    return number


def main():
    """Main entry point for the script."""
    parser = argparse.ArgumentParser(
        description="Seed the database with Dog CEO breeds and dogs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Preview what would be inserted
  ratethedogs-seed --dry-run

  # Replace existing Dog CEO dogs, 100 images per breed
  ratethedogs-seed --clean --limit 100

  # Everything
  ratethedogs-seed --limit 0
        """
    )
    parser.add_argument("--dry-run", action="store_true", help="Show what would be inserted without writing")
    parser.add_argument(
        "--limit",
        type=_non_negative_int,
        default=settings.seed_default_limit,
        help=f"Images per breed (default: {settings.seed_default_limit}, 0 for unlimited)"
    )
    parser.add_argument("--clean", action="store_true", help="Delete existing Dog CEO data before seeding")
    parser.add_argument(
        "--input",
        default=settings.breed_images_path,
        help=f"Breed images JSON (default: {settings.breed_images_path})"
    )
    parser.add_argument("--database-url", help="Database URL (default: DATABASE_URL setting)")
    args = parser.parse_args()

    logger.remove()
    logger.add(sys.stderr, format="<level>{message}</level>", level=settings.log_level.upper())

    logger.info("Dog CEO Database Seeding Script")
    logger.info(f"  Dry run: {args.dry_run}")
    logger.info(f"  Limit per breed: {'unlimited' if args.limit == 0 else args.limit}")
    logger.info(f"  Clean existing: {args.clean}")

    success = run(
        Path(args.input),
        limit=args.limit,
        dry_run=args.dry_run,
        clean=args.clean,
        database_url=args.database_url,
    )
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
