"""Seed database with sample authors and courses.

Usage:
    python -m app.scripts.seed_database

The script is idempotent - authors that already exist (matched by ID) are
skipped.
"""

import asyncio
import uuid
from datetime import date

from sqlalchemy import text

from app.database import async_session_maker, create_tables, engine
from app.models import Author, Course

SAMPLE_AUTHORS = [
    {
        "id": uuid.UUID("d28888e9-2ba9-473a-a40f-e38cb54f9b35"),
        "first_name": "Berry",
        "last_name": "Griffin Beak Eldritch",
        "date_of_birth": date(1650, 7, 23),
        "main_category": "Ships",
        "courses": [
            ("Commandeering a Ship Without Getting Caught", "Commandeering a ship in rough waters isn't easy."),
            ("Overthrowing Mutiny", "In this course, the author provides tips to avoid, or, if needed, overthrow pirate mutiny."),
        ],
    },
    {
        "id": uuid.UUID("da2fd609-d754-4feb-8acd-c4f9ff13ba96"),
        "first_name": "Nancy",
        "last_name": "Swashbuckler Rye",
        "date_of_birth": date(1668, 5, 21),
        "main_category": "Rum",
        "courses": [
            ("Avoiding Brawls While Drinking as Much Rum as You Desire", "Every good pirate loves rum, but it also has a tendency to get you into trouble."),
        ],
    },
    {
        "id": uuid.UUID("2902b665-1190-4c70-9915-b9c2d7680450"),
        "first_name": "Eli",
        "last_name": "Ivory Bones Sweet",
        "date_of_birth": date(1701, 12, 16),
        "main_category": "Singing",
        "courses": [
            ("Singalong Pirate Hits", "In this course you'll learn how to sing all-time favourite pirate songs."),
        ],
    },
    {
        "id": uuid.UUID("102b566b-ba1f-404c-b2df-e2cde39ade09"),
        "first_name": "Arnold",
        "last_name": "The Unseen Stafford",
        "date_of_birth": date(1702, 3, 6),
        "main_category": "Singing",
        "courses": [],
    },
    {
        "id": uuid.UUID("5b3621c0-7b12-4e80-9c8b-3398cba7ee05"),
        "first_name": "Seabury",
        "last_name": "Toxic Reyson",
        "date_of_birth": date(1690, 11, 23),
        "main_category": "Maps",
        "courses": [],
    },
    {
        "id": uuid.UUID("2aadd2df-7caf-45ab-9355-7f6332985a87"),
        "first_name": "Rutherford",
        "last_name": "Fearless Cloven",
        "date_of_birth": date(1723, 4, 5),
        "main_category": "General debauchery",
        "courses": [],
    },
]


async def verify_connection() -> bool:
    """Verify the database connection is working."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        print("  Database: connected")
    except Exception as e:
        print(f"  Database: FAILED - {e}")
        return False
    return True


async def seed_database() -> dict[str, int]:
    """
    Seed database with the sample authors.

    Returns:
        Dictionary with counts: authors_loaded, courses_loaded, authors_skipped.
    """
    stats = {"authors_loaded": 0, "courses_loaded": 0, "authors_skipped": 0}

    print("\nVerifying database connection...")
    if not await verify_connection():
        raise RuntimeError("Database connection verification failed")

    await create_tables()

    async with async_session_maker() as session:
        for sample in SAMPLE_AUTHORS:
            if await session.get(Author, sample["id"]) is not None:
                stats["authors_skipped"] += 1
                continue

            author = Author(
                id=sample["id"],
                first_name=sample["first_name"],
                last_name=sample["last_name"],
                date_of_birth=sample["date_of_birth"],
                main_category=sample["main_category"],
                courses=[Course(title=title, description=description) for title, description in sample["courses"]],
            )
            session.add(author)
            print(f"  Added {author.first_name} {author.last_name}")

            stats["authors_loaded"] += 1
            stats["courses_loaded"] += len(sample["courses"])

        await session.commit()

    return stats


def main() -> None:
    """Main entry point for the seed script."""
    print("=" * 50)
    print("Course Library Database Seeding")
    print("=" * 50)

    stats = asyncio.run(seed_database())

    print("\n" + "=" * 50)
    print("Summary")
    print("=" * 50)
    print(f"  Authors loaded: {stats['authors_loaded']}")
    print(f"  Courses loaded: {stats['courses_loaded']}")
    print(f"  Authors skipped: {stats['authors_skipped']}")
    print("\nDatabase seeding complete!")


if __name__ == "__main__":
    main()
