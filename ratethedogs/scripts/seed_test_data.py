"""
Quick test data seeding for smoke tests.
Creates the handful of breeds and approved dogs needed for the rating flow.
"""

import argparse
import sys
from typing import Dict, List
from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..constants import DOG_STATUS_APPROVED, IMAGE_SOURCE_DOG_CEO
from ..db.models import Breed, Dog
from ..db.session import SessionLocal, init_db, init_engine


TEST_DOGS: List[Dict[str, str]] = [
    {
        "breed": "Golden Retriever",
        "slug": "golden-retriever",
        "image": "https://images.dog.ceo/breeds/retriever-golden/n02099601_1.jpg",
    },
    {
        "breed": "Labrador",
        "slug": "labrador",
        "image": "https://images.dog.ceo/breeds/labrador/n02099712_1.jpg",
    },
    {
        "breed": "Beagle",
        "slug": "beagle",
        "image": "https://images.dog.ceo/breeds/beagle/n02088364_1.jpg",
    },
    {
        "breed": "Poodle",
        "slug": "poodle",
        "image": "https://images.dog.ceo/breeds/poodle-standard/n02113799_1.jpg",
    },
    {
        "breed": "Bulldog",
        "slug": "bulldog",
        "image": "https://images.dog.ceo/breeds/bulldog-english/jager-1.jpg",
    },
]


def seed_test_data(db: Session) -> Dict[str, int]:
    """
    Insert the fixed test breeds and dogs.

    Existing breeds (by slug) and dogs (by image URL) are left alone, so the
    seed can be re-run.

    Returns:
        {"breeds": inserted breed count, "dogs": inserted dog count}
    """
    inserted = {"breeds": 0, "dogs": 0}

    for entry in TEST_DOGS:
        breed = db.scalar(select(Breed).where(Breed.slug == entry["slug"]))
        if breed is None:
            breed = Breed(name=entry["breed"], slug=entry["slug"])
            db.add(breed)
            db.flush()
            inserted["breeds"] += 1

        exists = db.scalar(select(Dog.id).where(Dog.image_url == entry["image"]))
        if exists is None:
            db.add(Dog(
                image_url=entry["image"],
                image_source=IMAGE_SOURCE_DOG_CEO,
                breed_id=breed.id,
                status=DOG_STATUS_APPROVED,
            ))
            inserted["dogs"] += 1

    db.commit()
    return inserted


def main():
    """Main entry point for the script."""
    parser = argparse.ArgumentParser(description="Seed minimal test data (5 dogs)")
    parser.add_argument("--database-url", help="Database URL (default: DATABASE_URL setting)")
    args = parser.parse_args()

    logger.remove()
    logger.add(sys.stderr, format="<level>{message}</level>", level="INFO")

    logger.info("Seeding test data...")
    init_db(init_engine(args.database_url))

    db = SessionLocal()
    try:
        inserted = seed_test_data(db)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"✗ Seed failed: {e}")
        sys.exit(1)
    finally:
        db.close()

    logger.info(f"✓ Seeded {inserted['breeds']} breeds and {inserted['dogs']} dogs")
    sys.exit(0)


if __name__ == "__main__":
    main()
