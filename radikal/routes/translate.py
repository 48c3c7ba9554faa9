"""DeepL translation endpoint with database caching."""

from flask import Blueprint, request, jsonify, current_app
from radikal import limiter
from radikal.services.exceptions import TranslationNotConfiguredError, UpstreamTranslationError
from radikal.services.languages import normalize_lang
from radikal.services.translation import get_translator, is_translation_configured
from radikal.services.translation_cache import get_translation_cache
import logging

logger = logging.getLogger(__name__)

translate_bp = Blueprint('translate', __name__)


def _valid_text(text) -> bool:
    if isinstance(text, str):
        return True
    return isinstance(text, list) and all(isinstance(t, str) or t is None for t in text)


@translate_bp.route('', methods=['POST'])
@limiter.limit(lambda: current_app.config['TRANSLATE_RATE_LIMIT'])
def translate():
    """Translate one text or a batch of texts.

    Body:
        - text: string or list of strings (required)
        - targetLang: de, en, ro, ru (required)
        - sourceLang: defaults to the origin language
        - autoDetect: let DeepL detect the source language (skips cache reads)
    """
    try:
        if not is_translation_configured():
            logger.error('DeepL API key not configured')
            return jsonify({'error': 'Translation service not configured'}), 500

        data = request.get_json(silent=True) or {}
        text = data.get('text')
        target_lang = data.get('targetLang')
        source_lang = data.get('sourceLang')
        auto_detect = data.get('autoDetect', False)

        if not text or not target_lang:
            return jsonify({'error': 'Missing required fields: text and targetLang'}), 400

        if not _valid_text(text) or not isinstance(target_lang, str) \
                or (source_lang is not None and not isinstance(source_lang, str)) \
                or not isinstance(auto_detect, bool):
            return jsonify({'error': 'Invalid field types'}), 400

        target_lang = normalize_lang(target_lang)
        if target_lang is None:
            return jsonify({'error': 'Missing required fields: text and targetLang'}), 400

        translator = get_translator()
        result = translator.translate(text, target_lang, source_lang, auto_detect)
        return jsonify(result.to_dict()), 200

    except TranslationNotConfiguredError:
        return jsonify({'error': 'Translation service not configured'}), 500
    except UpstreamTranslationError as e:
        return jsonify({'error': 'Translation failed', 'details': e.details}), e.status_code
    except Exception as e:
        logger.error(f'Translation error: {e}', exc_info=True)
        return jsonify({'error': 'Internal server error'}), 500


@translate_bp.route('', methods=['GET'])
def translate_health():
    """Health probe for the translation service."""
    return jsonify({
        'status': 'ok',
        'message': 'DeepL Translation API with Caching is running',
        'configured': is_translation_configured(),
        'cacheEnabled': get_translation_cache() is not None,
    }), 200
