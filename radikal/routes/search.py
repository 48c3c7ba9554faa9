"""Post search endpoint with multilingual fuzzy matching."""

from flask import Blueprint, request, jsonify, current_app
from radikal import limiter
from radikal.services.languages import normalize_lang
from radikal.services.search import search_posts
from radikal.services.translation_cache import get_translation_cache
import logging

logger = logging.getLogger(__name__)

search_bp = Blueprint('search', __name__)

DEFAULT_LIMIT = 10
MAX_LIMIT = 50


@search_bp.route('', methods=['GET'])
@limiter.limit(lambda: current_app.config['SEARCH_RATE_LIMIT'])
def search():
    """Search published posts.

    Query params:
        - q: Search query (at least 2 characters, otherwise empty results)
        - limit: Max results (default 10)
        - lang: Display language (default: origin language)
    """
    try:
        if not current_app.config.get('DATABASE_CONFIGURED'):
            logger.error('Database credentials missing')
            return jsonify({
                'success': False,
                'error': 'Database not configured',
                'results': []
            }), 500

        origin_lang = current_app.config.get('ORIGIN_LANG', 'ro')
        query = request.args.get('q', '')
        limit = request.args.get('limit', DEFAULT_LIMIT, type=int)
        lang = normalize_lang(request.args.get('lang')) or origin_lang

        if limit is None or limit < 1:
            limit = DEFAULT_LIMIT
        limit = min(limit, MAX_LIMIT)

        result = search_posts(
            query,
            limit=limit,
            lang=lang,
            cache=get_translation_cache(),
            origin_lang=origin_lang,
        )
        return jsonify(result), 200

    except Exception as e:
        logger.error(f'Search API error: {e}', exc_info=True)
        return jsonify({
            'success': False,
            'error': 'Search failed',
            'message': str(e),
            'results': []
        }), 500
