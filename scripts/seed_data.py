#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with the default roles and users, plus sample
authors and books for development.

USAGE:
    # From the project root with venv activated
    python scripts/seed_data.py
    python scripts/seed_data.py --no-catalogue   # roles and users only
    python scripts/seed_data.py --clear          # wipe authors/books first

This script:
1. Creates tables if they don't exist
2. Seeds the Administrator/Customer roles and the admin/customer users
3. Optionally creates sample authors and books
"""

import argparse
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import SessionLocal, create_tables
from app.models import Author, Book
from app.services.seed import seed

CATALOGUE = [
    {
        "first_name": "George",
        "last_name": "Orwell",
        "bio": "English novelist and essayist, journalist and critic.",
        "books": [
            {"title": "1984", "year": 1949, "isbn": "9780451524935",
             "summary": "A dystopian novel set in a totalitarian society under constant surveillance.",
             "image": "1984.jpg"},
            {"title": "Animal Farm", "year": 1945, "isbn": "9780451526342",
             "summary": "An allegorical novella reflecting events leading up to the Russian Revolution."},
        ],
    },
    {
        "first_name": "Jane",
        "last_name": "Austen",
        "bio": "English novelist known for her six major novels.",
        "books": [
            {"title": "Pride and Prejudice", "year": 1813, "isbn": "9780141439518",
             "summary": "A romantic novel following the emotional development of Elizabeth Bennet."},
        ],
    },
    {
        "first_name": "Isaac",
        "last_name": "Asimov",
        "bio": "American writer and professor of biochemistry.",
        "books": [
            {"title": "Foundation", "year": 1951, "isbn": "9780553293357",
             "summary": "The first novel in the Foundation series."},
            {"title": "I, Robot", "year": 1950, "isbn": "9780553382563",
             "summary": "A collection of nine science fiction short stories about robots."},
        ],
    },
]


def clear_catalogue(db: Session) -> None:
    """Clear all existing authors and books."""
    print("Clearing existing authors and books...")
    db.query(Book).delete()
    db.query(Author).delete()
    db.commit()


def create_catalogue(db: Session) -> tuple[int, int]:
    """Create sample authors and their books."""
    print("Creating authors and books...")
    book_count = 0
    for data in CATALOGUE:
        books = [Book(**book) for book in data["books"]]
        author = Author(
            first_name=data["first_name"],
            last_name=data["last_name"],
            bio=data["bio"],
            books=books,
        )
        db.add(author)
        book_count += len(books)
    db.commit()
    return len(CATALOGUE), book_count


def seed_database(with_catalogue: bool = True, clear_existing: bool = False) -> None:
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()
    db = SessionLocal()

    try:
        seed(db, get_settings().seed_password)
        print("Default roles and users are in place.")

        if clear_existing:
            clear_catalogue(db)

        if with_catalogue:
            authors, books = create_catalogue(db)
            print(f"  - Authors: {authors}")
            print(f"  - Books: {books}")

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the BookStore database")
    parser.add_argument("--no-catalogue", action="store_true", help="Only seed roles and users")
    parser.add_argument("--clear", action="store_true", help="Delete authors and books first")
    args = parser.parse_args()

    seed_database(with_catalogue=not args.no_catalogue, clear_existing=args.clear)
