"""Localize blog posts for display.

Pre-stored `<field>_<lang>` columns win. Everything else is translated
from the origin language in one batched call, and any field that cannot
be translated is shown in the original.
"""
import logging

from flask import current_app

from radikal.services.languages import normalize_lang
from radikal.services.translation import translate_or_original

logger = logging.getLogger(__name__)

SUMMARY_FIELDS = ('title', 'excerpt')
DETAIL_FIELDS = ('title', 'excerpt', 'content')


def _origin_lang():
    return current_app.config.get('ORIGIN_LANG', 'ro')


def localize_posts(posts, lang, fields=SUMMARY_FIELDS, translator=None) -> list[dict]:
    """Return dicts for `posts` with `fields` in `lang`.

    Each dict gets `language` and `translated` (True when at least one field
    differs from the origin text).
    """
    lang = normalize_lang(lang) or _origin_lang()
    serialize = (lambda p: p.to_dict()) if 'content' in fields else (lambda p: p.to_summary_dict())
    localized = []
    for post in posts:
        data = serialize(post)
        data['language'] = lang
        data['translated'] = False
        localized.append(data)

    if lang == _origin_lang():
        return localized

    # (position in `localized`, field, origin text) for every field to translate
    wanted = []
    for position, post in enumerate(posts):
        for field in fields:
            stored = post.stored_translation(field, lang)
            if stored:
                localized[position][field] = stored
                localized[position]['translated'] = True
                continue
            original = getattr(post, field)
            if original and original.strip():
                wanted.append((position, field, original))

    if not wanted:
        return localized

    translated = translate_or_original([text for _, _, text in wanted], lang,
                                       _origin_lang(), translator=translator)

    for (position, field, original), text in zip(wanted, translated):
        localized[position][field] = text
        if text != original:
            localized[position]['translated'] = True

    return localized


def localize_post(post, lang, translator=None) -> dict:
    """Full post (title, excerpt, content) in `lang`."""
    return localize_posts([post], lang, fields=DETAIL_FIELDS, translator=translator)[0]
