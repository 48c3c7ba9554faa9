"""Content-addressed translation cache.

Entries are keyed by (md5 of the exact source text, source language,
target language). Reads never raise: any storage problem is a miss.
Writes are best-effort and only logged on failure.
"""
import hashlib
import logging
from datetime import datetime

from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

logger = logging.getLogger(__name__)

# Only this much of the original text is persisted
SNIPPET_LENGTH = 1000


def get_text_hash(text: str) -> str:
    """Stable 128-bit hex digest of the full, untruncated text."""
    return hashlib.md5(text.encode('utf-8')).hexdigest()


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches literally."""
    return value.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')


class TranslationCacheStore:
    """Storage interface used by the translator (read/write) and search (read)."""

    def get(self, text: str, source_lang: str, target_lang: str) -> str | None:
        raise NotImplementedError

    def put(self, original_text: str, translated_text: str, source_lang: str, target_lang: str) -> None:
        raise NotImplementedError

    def find_by_translated_substring(self, target_lang: str, needle: str, limit: int = 10) -> list[tuple[str, str]]:
        """Return up to `limit` (original snippet, translated text) pairs whose
        translation contains `needle`, case-insensitively."""
        raise NotImplementedError


class SQLTranslationCacheStore(TranslationCacheStore):
    """Cache backed by the translation_cache table."""

    def __init__(self, session=None):
        from radikal import db
        self.session = session or db.session

    def get(self, text, source_lang, target_lang):
        try:
            from radikal.models import TranslationCacheEntry
            cached = self.session.query(TranslationCacheEntry).filter_by(
                original_text_hash=get_text_hash(text),
                source_lang=source_lang,
                target_lang=target_lang
            ).first()
            if cached:
                logger.debug(f'Cache HIT {source_lang}->{target_lang}')
                return cached.translated_text
            return None
        except Exception as e:
            logger.debug(f'Cache lookup error: {e}')
            return None

    def put(self, original_text, translated_text, source_lang, target_lang):
        try:
            values = {
                'original_text_hash': get_text_hash(original_text),
                'source_lang': source_lang,
                'target_lang': target_lang,
                'original_text': original_text[:SNIPPET_LENGTH],
                'translated_text': translated_text,
                'updated_at': datetime.utcnow(),
            }
            dialect = self.session.get_bind().dialect.name
            if dialect in ('postgresql', 'sqlite'):
                self._upsert(dialect, values)
            else:
                self._select_then_write(values)
            self.session.commit()
            logger.debug(f'Cache SAVED {source_lang}->{target_lang}')
        except Exception as e:
            logger.warning(f'Failed to cache translation: {e}')
            try:
                self.session.rollback()
            except Exception as rollback_error:
                logger.debug(f'Rollback after cache write failed: {rollback_error}')

    def _upsert(self, dialect, values):
        from radikal.models import TranslationCacheEntry
        insert = postgresql_insert if dialect == 'postgresql' else sqlite_insert
        stmt = insert(TranslationCacheEntry.__table__).values(
            created_at=values['updated_at'], **values
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=['original_text_hash', 'source_lang', 'target_lang'],
            set_={
                'original_text': stmt.excluded.original_text,
                'translated_text': stmt.excluded.translated_text,
                'updated_at': stmt.excluded.updated_at,
            }
        )
        self.session.execute(stmt)

    def _select_then_write(self, values):
        from radikal.models import TranslationCacheEntry
        existing = self.session.query(TranslationCacheEntry).filter_by(
            original_text_hash=values['original_text_hash'],
            source_lang=values['source_lang'],
            target_lang=values['target_lang']
        ).first()
        if existing:
            existing.original_text = values['original_text']
            existing.translated_text = values['translated_text']
            existing.updated_at = values['updated_at']
        else:
            self.session.add(TranslationCacheEntry(**values))

    def find_by_translated_substring(self, target_lang, needle, limit=10):
        from radikal.models import TranslationCacheEntry
        rows = self.session.query(
            TranslationCacheEntry.original_text,
            TranslationCacheEntry.translated_text
        ).filter(
            TranslationCacheEntry.target_lang == target_lang,
            TranslationCacheEntry.translated_text.ilike(f'%{escape_like(needle)}%', escape='\\')
        ).limit(limit).all()
        return [(row.original_text, row.translated_text) for row in rows]


class InMemoryTranslationCacheStore(TranslationCacheStore):
    """Dict-backed cache for tests."""

    def __init__(self):
        self._entries: dict[tuple[str, str, str], tuple[str, str]] = {}

    def get(self, text, source_lang, target_lang):
        entry = self._entries.get((get_text_hash(text), source_lang, target_lang))
        return entry[1] if entry else None

    def put(self, original_text, translated_text, source_lang, target_lang):
        key = (get_text_hash(original_text), source_lang, target_lang)
        self._entries[key] = (original_text[:SNIPPET_LENGTH], translated_text)

    def find_by_translated_substring(self, target_lang, needle, limit=10):
        needle = needle.lower()
        matches = []
        for (_, _, lang), (snippet, translated) in self._entries.items():
            if lang == target_lang and needle in translated.lower():
                matches.append((snippet, translated))
                if len(matches) >= limit:
                    break
        return matches

    def __len__(self):
        return len(self._entries)


def get_translation_cache(app=None) -> TranslationCacheStore | None:
    """Cache store for the current app, or None when caching is disabled
    or no database is configured."""
    from flask import current_app
    app = app or current_app
    if not app.config.get('TRANSLATION_CACHE_ENABLED', True):
        return None
    if not app.config.get('DATABASE_CONFIGURED', True):
        return None
    return SQLTranslationCacheStore()
