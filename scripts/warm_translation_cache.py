#!/usr/bin/env python3
"""Pre-translate published posts so visitors never hit a cold cache.

Translates every post's title and excerpt from the origin language into
each other supported language. Texts already cached cost nothing; the
rest go to DeepL in one batch per language.

Usage:
    python scripts/warm_translation_cache.py            # all languages
    python scripts/warm_translation_cache.py en de      # selected languages
"""

import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from radikal import create_app
from radikal.models import BlogPost
from radikal.services.exceptions import TranslationError
from radikal.services.languages import Language
from radikal.services.translation import get_translator

WARM_FIELDS = ('title', 'excerpt')


def collect_texts(posts) -> list[str]:
    texts = []
    for post in posts:
        for field in WARM_FIELDS:
            value = getattr(post, field)
            if value and value.strip() and value not in texts:
                texts.append(value)
    return texts


def warm_translation_cache(languages=None) -> dict:
    """Returns {lang: (cached_count, translated_count)}; -1 marks a failed language."""
    app = create_app(os.getenv('FLASK_ENV', 'development'))
    stats = {}
    with app.app_context():
        origin = app.config['ORIGIN_LANG']
        languages = languages or [lang.value for lang in Language if lang.value != origin]
        try:
            translator = get_translator()
        except TranslationError as e:
            print(f"❌ {e}")
            return stats
        texts = collect_texts(BlogPost.published_query().all())
        print(f"🌐 Warming {len(texts)} text(s) into: {', '.join(languages)}")

        for lang in languages:
            try:
                result = translator.translate(texts, lang, origin)
                stats[lang] = (result.cached_count, result.translated_count)
                print(f"  ✓ {lang}: {result.translated_count} new, {result.cached_count} cached")
            except TranslationError as e:
                stats[lang] = (-1, -1)
                print(f"  ⚠️  {lang}: {e}")
    return stats


if __name__ == '__main__':
    warm_translation_cache(sys.argv[1:] or None)
