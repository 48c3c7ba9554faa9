"""Post search with prefix fuzzing and translation-cache lookups.

Features:
- Case-insensitive substring matching on title/excerpt (origin + English)
- Prefix fuzzing: 'jesus' also tries 'jesu', 'jes', 'je'
- Multilingual: for non-origin languages, cached translations containing
  the term are mapped back to origin-language snippets, which are then
  searched for in the posts
- Every storage step degrades to "no results" on error
"""
import logging

from radikal.services.translation_cache import escape_like

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
MIN_TERM_LENGTH = 2

# Cache-assisted matching
CACHE_CANDIDATES = 5
CACHE_ROWS_PER_CANDIDATE = 10
MAX_CACHE_SNIPPETS = 10
SNIPPET_PREVIEW_LENGTH = 100
SNIPPET_WORDS = 3
MATCHES_PER_SNIPPET = 3

DIRECT_COLUMNS = ('title', 'title_en', 'excerpt', 'excerpt_en')
SNIPPET_COLUMNS = ('title', 'excerpt')

SCORE_WEIGHTS = (
    ('title', 100),
    ('title_en', 90),
    ('excerpt', 30),
    ('excerpt_en', 25),
)
CACHE_MATCH_BONUS = 50
CACHE_BONUS_PREFIX = 30


def tokenize_query(query: str) -> list[str]:
    """Lower-cased whitespace tokens of at least MIN_TERM_LENGTH characters."""
    return [t for t in query.strip().lower().split() if len(t) >= MIN_TERM_LENGTH]


def create_fuzzy_terms(term: str) -> list[str]:
    """The term followed by each of its prefixes, longest first, down to 2 chars.

    'jesus' -> ['jesus', 'jesu', 'jes', 'je']
    """
    terms = [term]
    for length in range(len(term) - 1, MIN_TERM_LENGTH - 1, -1):
        terms.append(term[:length])
    return terms


def _recover_session():
    try:
        from radikal import db
        db.session.rollback()
    except Exception as e:
        logger.debug(f'Session rollback failed: {e}')


def _find_posts(patterns, columns, limit, step):
    """Run one post query; any storage error yields an empty list."""
    from radikal.models import BlogPost
    try:
        escaped = [escape_like(p) for p in patterns]
        return BlogPost.search_published(escaped, columns, limit)
    except Exception as e:
        logger.warning(f'Search step "{step}" failed: {e}')
        _recover_session()
        return []


def find_direct_matches(fuzzy_terms, limit):
    return _find_posts(fuzzy_terms, DIRECT_COLUMNS, limit, 'direct')


def find_cache_snippets(cache, lang, fuzzy_terms) -> list[str]:
    """Origin-language snippets whose cached `lang` translation contains a term.

    Unique, in discovery order, at most MAX_CACHE_SNIPPETS.
    """
    snippets: list[str] = []
    if cache is None:
        return snippets

    for candidate in fuzzy_terms[:CACHE_CANDIDATES]:
        try:
            rows = cache.find_by_translated_substring(lang, candidate, CACHE_ROWS_PER_CANDIDATE)
        except Exception as e:
            logger.warning(f'Translation cache search error for "{candidate}": {e}')
            _recover_session()
            continue

        if rows:
            logger.info(f'Found {len(rows)} cached translation(s) matching "{candidate}"')

        for original, _ in rows:
            snippet = (original or '')[:SNIPPET_PREVIEW_LENGTH].strip()
            if snippet and snippet not in snippets:
                snippets.append(snippet)
            if len(snippets) >= MAX_CACHE_SNIPPETS:
                return snippets

    return snippets


def _longest_word(snippet: str) -> str | None:
    words = [w for w in snippet.split() if len(w) > 3]
    return max(words, key=len) if words else None


def find_posts_by_snippets(snippets):
    """Posts whose origin title/excerpt contain the leading words of a snippet,
    falling back to the snippet's longest word."""
    posts = []
    for snippet in snippets:
        words = ' '.join(snippet.split()[:SNIPPET_WORDS])
        matched = _find_posts([words], SNIPPET_COLUMNS, MATCHES_PER_SNIPPET, 'snippet')

        if not matched:
            fallback = _longest_word(snippet)
            if fallback:
                logger.debug(f'Fallback search with word: "{fallback}"')
                matched = _find_posts([fallback], SNIPPET_COLUMNS, MATCHES_PER_SNIPPET, 'snippet fallback')

        posts.extend(matched)
    return posts


def score_post(post: dict, tokens, snippets) -> int:
    """Relevance of one post; a pure function of its title/excerpt text."""
    fields = {name: (post.get(name) or '').lower() for name, _ in SCORE_WEIGHTS}

    score = 0
    for token in tokens:
        for name, weight in SCORE_WEIGHTS:
            if token in fields[name]:
                score += weight

    title = fields['title']
    if any(s[:CACHE_BONUS_PREFIX].lower() in title for s in snippets if s):
        score += CACHE_MATCH_BONUS

    return score


def rank_posts(posts, tokens, snippets) -> list[dict]:
    """Deduplicate by id (first wins), score, and sort by descending score."""
    seen = set()
    unique = []
    for post in posts:
        if post['id'] in seen:
            continue
        seen.add(post['id'])
        unique.append(post)

    for post in unique:
        post['relevanceScore'] = score_post(post, tokens, snippets)

    # list.sort is stable: ties keep discovery order
    unique.sort(key=lambda p: p['relevanceScore'], reverse=True)
    return unique


def search_posts(query: str, limit: int = 10, lang: str = 'ro', cache=None,
                 origin_lang: str = 'ro') -> dict:
    """Search published posts; returns the response payload."""
    query = query or ''
    if len(query.strip()) < MIN_QUERY_LENGTH:
        return {'success': True, 'results': [], 'total': 0, 'message': 'Query too short'}

    tokens = tokenize_query(query)
    if not tokens:
        return {'success': True, 'results': [], 'total': 0}

    fuzzy_terms = create_fuzzy_terms(tokens[0])
    logger.info(f'Searching posts for "{query}" ({lang}), fuzzy terms: {fuzzy_terms}')

    direct = find_direct_matches(fuzzy_terms, limit)

    snippets: list[str] = []
    additional = []
    if lang != origin_lang:
        snippets = find_cache_snippets(cache, lang, fuzzy_terms)
        logger.info(f'Total translation cache matches: {len(snippets)}')
        if snippets:
            additional = find_posts_by_snippets(snippets)

    candidates = [p.to_summary_dict() for p in direct + additional]
    ranked = rank_posts(candidates, tokens, snippets)

    return {
        'success': True,
        'results': ranked[:limit],
        'total': len(ranked),
        'query': query,
        'searchTerms': tokens,
        'language': lang,
    }
