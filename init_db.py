#!/usr/bin/env python
"""Database initialization script for the blog backend.

Creates the blog_posts and translation_cache tables from the SQLAlchemy
models. Production databases should use the Alembic migrations instead.

Usage:
    python init_db.py
"""

import os
import sys
from radikal import create_app, db


def init_database():
    """Initialize the database by creating all tables."""
    config_name = os.getenv('FLASK_ENV', 'development')
    app = create_app(config_name)

    print(f"\n{'='*60}")
    print(f"Database Initialization for {config_name.upper()} Environment")
    print(f"{'='*60}\n")

    with app.app_context():
        try:
            print(f"Database URI: {app.config['SQLALCHEMY_DATABASE_URI']}\n")
            db.create_all()

            tables_info = [
                ("blog_posts", "Blog posts and stored translations"),
                ("translation_cache", "DeepL translation cache"),
            ]
            print("Created tables:")
            for table_name, description in tables_info:
                print(f"  ✓ {table_name:<25} - {description}")
            print()
            return True

        except Exception as e:
            print(f"❌ Error creating database: {type(e).__name__}: {e}\n")
            return False


if __name__ == '__main__':
    success = init_database()
    sys.exit(0 if success else 1)
