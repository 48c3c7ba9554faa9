"""Translation with a content-addressed cache in front of DeepL.

FAST PATHS (no DeepL call):
- source language equals target language (identity)
- empty / whitespace-only texts
- every remaining text found in the cache

Everything that misses the cache goes to DeepL in a single batched call.
"""
import logging
from dataclasses import dataclass, field

from flask import current_app

from radikal.services.deepl import DeepLClient
from radikal.services.exceptions import TranslationNotConfiguredError, UpstreamTranslationError
from radikal.services.languages import from_provider_code, normalize_lang, to_provider_code
from radikal.services.translation_cache import get_translation_cache

logger = logging.getLogger(__name__)


@dataclass
class TranslationResult:
    """Outcome of one translate() call. `translated_text` mirrors the input shape."""
    translated_text: str | list[str]
    from_cache: bool = False
    detected_source_lang: str | None = None
    cached_count: int = 0
    translated_count: int = 0
    upstream_called: bool = False
    detected_languages: list[str | None] = field(default_factory=list)

    def to_dict(self):
        data = {
            'translatedText': self.translated_text,
            'fromCache': self.from_cache,
        }
        if self.upstream_called:
            data['detectedSourceLang'] = self.detected_source_lang
        data['cachedCount'] = self.cached_count
        data['translatedCount'] = self.translated_count
        return data


def _is_blank(text) -> bool:
    return not text or not str(text).strip()


class Translator:
    """Resolves texts via cache-or-DeepL.

    The cache is optional; without one every non-empty text is a miss.
    """

    def __init__(self, client, cache=None, default_source_lang: str = 'ro'):
        self.client = client
        self.cache = cache
        self.default_source_lang = default_source_lang

    def translate(self, texts, target_lang: str, source_lang: str | None = None,
                  auto_detect: bool = False) -> TranslationResult:
        """Translate one string or a list of strings into `target_lang`.

        Raises UpstreamTranslationError when the DeepL call fails; its
        `partial` attribute carries what the cache already resolved.
        """
        is_batch = isinstance(texts, (list, tuple))
        items = list(texts) if is_batch else [texts]

        target_lang = normalize_lang(target_lang)
        source_lang = normalize_lang(source_lang) or self.default_source_lang

        provider_target = to_provider_code(target_lang)
        provider_source = to_provider_code(source_lang)

        # Translating a language into itself is the identity
        if not auto_detect and provider_source == provider_target:
            return TranslationResult(translated_text=texts)

        results: list = [None] * len(items)
        pending: list[tuple[int, str]] = []

        for index, text in enumerate(items):
            if _is_blank(text):
                results[index] = text
                continue

            # No cache key can be built before detection
            if not auto_detect and self.cache is not None:
                cached = self.cache.get(text, source_lang, target_lang)
                if cached is not None:
                    results[index] = cached
                    continue

            pending.append((index, text))

        cached_count = len(items) - len(pending)

        if not pending:
            logger.info(f'All {len(items)} translation(s) served from cache')
            return TranslationResult(
                translated_text=results if is_batch else results[0],
                from_cache=True,
                cached_count=cached_count,
            )

        logger.info(
            f'DeepL: translating {len(pending)} new text(s) to {provider_target}'
            f'{" (auto-detect)" if auto_detect else ""}'
        )

        try:
            translations = self.client.translate(
                [text for _, text in pending],
                provider_target,
                None if auto_detect else provider_source,
            )
        except UpstreamTranslationError as e:
            e.partial = results if is_batch else results[0]
            raise

        detected_languages = []
        for position, (index, original_text) in enumerate(pending):
            translation = translations[position] if position < len(translations) else None
            translated_text = translation.get('text') if translation else None
            detected = from_provider_code(translation.get('detected_source_language')) if translation else None
            detected_languages.append(detected)

            if not translated_text:
                # Missing entry in DeepL's answer: show the original, cache nothing
                results[index] = original_text
                continue

            results[index] = translated_text
            if self.cache is not None:
                cache_source = (detected or source_lang) if auto_detect else source_lang
                self.cache.put(original_text, translated_text, cache_source, target_lang)

        logger.info(f'DeepL: translation successful ({len(pending)} new, {cached_count} cached)')

        return TranslationResult(
            translated_text=results if is_batch else results[0],
            from_cache=False,
            detected_source_lang=detected_languages[0] if detected_languages else None,
            cached_count=cached_count,
            translated_count=len(pending),
            upstream_called=True,
            detected_languages=detected_languages,
        )


def is_translation_configured(app=None) -> bool:
    app = app or current_app
    key = app.config.get('DEEPL_API_KEY') or ''
    return bool(key.strip())


def get_translator(app=None) -> Translator:
    """Build a Translator from the app config."""
    app = app or current_app
    if not is_translation_configured(app):
        raise TranslationNotConfiguredError('Translation service not configured')

    client = DeepLClient(
        api_key=app.config['DEEPL_API_KEY'],
        api_url=app.config['DEEPL_API_URL'],
        timeout=app.config['DEEPL_TIMEOUT'],
    )
    return Translator(
        client,
        cache=get_translation_cache(app),
        default_source_lang=app.config.get('ORIGIN_LANG', 'ro'),
    )


def translate_or_original(texts: list[str], target_lang: str, source_lang: str | None = None,
                          translator: Translator | None = None) -> list[str]:
    """Translate a list, falling back to the untranslated string wherever
    translation is unavailable. Cache hits survive a DeepL outage."""
    if not texts:
        return texts

    try:
        translator = translator or get_translator()
        return translator.translate(list(texts), target_lang, source_lang).translated_text
    except TranslationNotConfiguredError:
        return list(texts)
    except UpstreamTranslationError as e:
        logger.warning(f'Translation failed ({e.status_code}), using original text')
        partial = e.partial or [None] * len(texts)
        return [resolved if resolved is not None else original
                for resolved, original in zip(partial, texts)]
