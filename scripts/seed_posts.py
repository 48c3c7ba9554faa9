#!/usr/bin/env python3
"""Seed a development database with a few published posts."""

import sys
import os

# Add parent directory to path to import radikal modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from radikal import create_app, db
from radikal.models import BlogPost

POSTS_DATA = [
    {
        'slug': 'iisus-hristos-este-domnul',
        'title': 'Iisus Hristos este Domnul',
        'excerpt': 'Despre mărturisirea care stă la temelia credinței.',
        'content': '<p>Mărturisirea că Iisus Hristos este Domnul schimbă totul.</p>',
        'tags': ['credință', 'evanghelie'],
    },
    {
        'slug': 'rugaciunea-in-vremuri-grele',
        'title': 'Rugăciunea în vremuri grele',
        'title_en': 'Prayer in hard times',
        'excerpt': 'Cum ne ține rugăciunea aproape de Dumnezeu.',
        'excerpt_en': 'How prayer keeps us close to God.',
        'content': '<p>Rugăciunea nu este o formalitate.</p>',
        'tags': ['rugăciune'],
    },
    {
        'slug': 'harul-si-adevarul',
        'title': 'Harul și adevărul',
        'excerpt': 'Două cuvinte care nu pot fi despărțite.',
        'content': '<p>Legea a fost dată prin Moise, harul și adevărul au venit prin Iisus Hristos.</p>',
        'tags': ['har'],
    },
]


def seed_posts():
    app = create_app(os.getenv('FLASK_ENV', 'development'))
    with app.app_context():
        created = 0
        for data in POSTS_DATA:
            if BlogPost.query.filter_by(slug=data['slug']).first():
                continue
            db.session.add(BlogPost(published=True, author='RADIKAL', **data))
            created += 1
        db.session.commit()
        print(f"✅ Seeded {created} post(s) ({len(POSTS_DATA) - created} already present)")


if __name__ == '__main__':
    seed_posts()
