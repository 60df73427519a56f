"""
Populate the database with demo accounts for local testing. Run from project root:
  python -m app.scripts.seed_users --count 200
All generated users share one password (default: password123); about one in ten is an admin.
"""

import argparse
import logging
import random
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.logging import configure_logging
from app.core.security import hash_password
from app.models import User

logger = logging.getLogger(__name__)

FIRST_NAMES = [
    "john", "jane", "mike", "sarah", "david", "lisa", "robert", "emma",
    "james", "olivia", "william", "ava", "joseph", "mia", "thomas", "sophia",
    "charles", "isabella", "daniel", "emily",
]
LAST_NAMES = [
    "smith", "johnson", "williams", "brown", "jones", "garcia", "miller", "davis",
    "rodriguez", "martinez", "hernandez", "lopez", "gonzalez", "wilson", "anderson",
    "thomas", "taylor", "moore", "jackson", "martin",
]


def generate_usernames(count: int, taken: set[str], rng: random.Random) -> list[str]:
    """Return count distinct first.lastNNN usernames not in taken."""
    capacity = len(FIRST_NAMES) * len(LAST_NAMES) * 1000 - len(taken)
    if count > capacity:
        raise ValueError(f"Cannot generate {count} unique usernames")
    names: list[str] = []
    used = set(taken)
    while len(names) < count:
        name = f"{rng.choice(FIRST_NAMES)}.{rng.choice(LAST_NAMES)}{rng.randrange(1000)}"
        if name not in used:
            used.add(name)
            names.append(name)
    return names


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create demo users.")
    parser.add_argument("--count", type=int, default=200)
    parser.add_argument("--password", default="password123")
    parser.add_argument("--admin-ratio", type=float, default=0.1)
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible runs")
    args = parser.parse_args(argv)
    if args.count < 1:
        print("--count must be at least 1.", file=sys.stderr)
        return 1

    configure_logging(get_settings())
    rng = random.Random(args.seed)
    # One hash for all rows: bcrypt per user would take minutes.
    password_hash = hash_password(args.password)

    db = SessionLocal()
    try:
        taken = {name for (name,) in db.query(User.username).all()}
        for username in generate_usernames(args.count, taken, rng):
            db.add(
                User(
                    username=username,
                    email=f"{username}@example.com",
                    password_hash=password_hash,
                    is_admin=rng.random() < args.admin_ratio,
                )
            )
        db.commit()
        logger.info("Successfully created %s users", args.count)
        return 0
    except Exception as e:
        db.rollback()
        logger.exception("Error seeding users: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
