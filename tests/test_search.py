"""
Tests for post search (GET /api/search and the search service).
"""

from datetime import datetime, timedelta

from radikal.models import BlogPost
from radikal.services.search import (
    create_fuzzy_terms,
    find_cache_snippets,
    rank_posts,
    score_post,
    search_posts,
    tokenize_query,
)
from radikal.services.translation_cache import InMemoryTranslationCacheStore, SQLTranslationCacheStore


def _post_dict(id, title='', title_en='', excerpt='', excerpt_en=''):
    return {'id': id, 'title': title, 'title_en': title_en, 'excerpt': excerpt, 'excerpt_en': excerpt_en}


class TestQueryParsing:

    def test_tokenize_drops_short_tokens(self):
        assert tokenize_query('  Iisus a  Hristos ') == ['iisus', 'hristos']

    def test_fuzzy_terms_are_prefixes_down_to_two(self):
        assert create_fuzzy_terms('jesus') == ['jesus', 'jesu', 'jes', 'je']

    def test_fuzzy_terms_for_two_letter_term(self):
        assert create_fuzzy_terms('je') == ['je']


class TestScoring:

    def test_weights_per_field(self):
        post = _post_dict(1, title='Har', title_en='Grace and har', excerpt='har', excerpt_en='HAR')
        assert score_post(post, ['har'], []) == 100 + 90 + 30 + 25

    def test_every_token_counts(self):
        post = _post_dict(1, title='Harul și adevărul')
        assert score_post(post, ['harul', 'adevărul'], []) == 200

    def test_cache_snippet_bonus(self):
        post = _post_dict(1, title='Iisus Hristos este Domnul')
        assert score_post(post, ['jes'], ['Iisus Hristos este Domnul']) == 50

    def test_rank_deduplicates_and_sorts(self):
        posts = [
            _post_dict('a', excerpt='har'),
            _post_dict('b', title='har'),
            _post_dict('a', title='har'),
        ]
        ranked = rank_posts(posts, ['har'], [])

        assert [p['id'] for p in ranked] == ['b', 'a']
        assert [p['relevanceScore'] for p in ranked] == [100, 30]

    def test_scores_are_deterministic(self):
        posts = [_post_dict(i, title=f'har {i}', excerpt='har' if i % 2 else '') for i in range(6)]

        first = rank_posts([dict(p) for p in posts], ['har'], [])
        second = rank_posts([dict(p) for p in posts], ['har'], [])

        assert [(p['id'], p['relevanceScore']) for p in first] == \
            [(p['id'], p['relevanceScore']) for p in second]


class TestCacheSnippets:

    def test_unique_and_capped(self):
        cache = InMemoryTranslationCacheStore()
        for i in range(15):
            cache.put(f'Rugăciune {i}', f'Prayer {i}', 'ro', 'en')

        snippets = find_cache_snippets(cache, 'en', ['prayer', 'praye'])

        assert len(snippets) == 10
        assert len(set(snippets)) == 10

    def test_only_first_five_candidates_are_tried(self):
        class RecordingCache(InMemoryTranslationCacheStore):
            needles = []

            def find_by_translated_substring(self, target_lang, needle, limit=10):
                self.needles.append(needle)
                return []

        cache = RecordingCache()
        find_cache_snippets(cache, 'en', create_fuzzy_terms('blessing'))

        assert cache.needles == ['blessing', 'blessin', 'blessi', 'bless', 'bles']

    def test_stops_querying_once_full(self):
        class FullCache(InMemoryTranslationCacheStore):
            needles = []

            def find_by_translated_substring(self, target_lang, needle, limit=10):
                self.needles.append(needle)
                return [(f'Binecuvântare {i}', f'Blessing {i}') for i in range(limit)]

        cache = FullCache()
        snippets = find_cache_snippets(cache, 'en', create_fuzzy_terms('blessing'))

        assert len(snippets) == 10
        assert cache.needles == ['blessing']

    def test_cache_errors_are_skipped(self):
        class BrokenCache(InMemoryTranslationCacheStore):
            def find_by_translated_substring(self, target_lang, needle, limit=10):
                raise RuntimeError('cache down')

        assert find_cache_snippets(BrokenCache(), 'en', ['jes']) == []


class TestSearchService:

    def test_short_query_touches_no_storage(self, db_session, monkeypatch):
        calls = []
        monkeypatch.setattr(BlogPost, 'search_published', lambda *a, **k: calls.append(a) or [])

        class NoCache(InMemoryTranslationCacheStore):
            def find_by_translated_substring(self, *args, **kwargs):
                calls.append(args)
                return []

        result = search_posts(' a ', lang='en', cache=NoCache())

        assert result == {'success': True, 'results': [], 'total': 0, 'message': 'Query too short'}
        assert calls == []

    def test_query_without_usable_tokens(self, db_session):
        result = search_posts('a b c', lang='ro')

        assert result == {'success': True, 'results': [], 'total': 0}

    def test_storage_errors_degrade_to_empty(self, db_session, make_post, monkeypatch):
        make_post(title='Harul lui Dumnezeu')

        def broken(*args, **kwargs):
            raise RuntimeError('database unavailable')

        monkeypatch.setattr(BlogPost, 'search_published', broken)

        result = search_posts('harul', lang='ro')

        assert result['success'] is True
        assert result['results'] == []


class TestSearchEndpoint:
    """GET /api/search"""

    def test_short_query(self, client, db_session):
        response = client.get('/api/search?q=a')

        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert data['results'] == []
        assert data['total'] == 0

    def test_no_matches(self, client, make_post):
        make_post(title='Harul și adevărul', excerpt='Două cuvinte')

        response = client.get('/api/search?q=xyznonexistent123')

        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert data['results'] == []
        assert data['total'] == 0

    def test_echoes_query_terms_and_language(self, client, make_post):
        make_post(title='Harul și adevărul')

        data = client.get('/api/search', query_string={'q': 'Harul Adevărul', 'lang': 'de'}).get_json()

        assert data['query'] == 'Harul Adevărul'
        assert data['searchTerms'] == ['harul', 'adevărul']
        assert data['language'] == 'de'

    def test_language_defaults_to_origin(self, client, make_post):
        make_post(title='Harul și adevărul')

        assert client.get('/api/search?q=harul').get_json()['language'] == 'ro'

    def test_prefix_expansion_finds_shorter_stored_word(self, client, make_post):
        post = make_post(title='Numele lui Jesu', excerpt='Despre nume')

        data = client.get('/api/search?q=jesus').get_json()

        assert [r['id'] for r in data['results']] == [post.id]

    def test_unpublished_posts_are_invisible(self, client, make_post):
        make_post(title='Rugăciunea ascunsă', published=False)

        assert client.get('/api/search?q=rugăciunea').get_json()['total'] == 0

    def test_results_ranked_by_score(self, client, make_post):
        now = datetime.utcnow()
        in_excerpt = make_post(title='Despre viață', excerpt='Cuvinte despre har', created_at=now)
        in_title = make_post(title='Har peste har', excerpt='Despre viață', created_at=now - timedelta(days=3))

        data = client.get('/api/search?q=har').get_json()

        assert [r['id'] for r in data['results']] == [in_title.id, in_excerpt.id]
        assert data['results'][0]['relevanceScore'] == 100
        assert data['results'][1]['relevanceScore'] == 30

    def test_limit_keeps_newest_direct_matches(self, client, make_post):
        now = datetime.utcnow()
        oldest = make_post(title='Har vechi', created_at=now - timedelta(days=2))
        middle = make_post(title='Har de ieri', created_at=now - timedelta(days=1))
        newest = make_post(title='Har de azi', created_at=now)

        data = client.get('/api/search?q=har&limit=2').get_json()

        assert [r['id'] for r in data['results']] == [newest.id, middle.id]
        assert oldest.id not in [r['id'] for r in data['results']]

    def test_translated_match_found_through_cache(self, client, make_post):
        post = make_post(title='Iisus Hristos este Domnul', excerpt='Mărturisirea credinței')
        SQLTranslationCacheStore().put('Iisus Hristos este Domnul', 'Jesus Christ is Lord', 'ro', 'en')

        data = client.get('/api/search?q=Jes&lang=en').get_json()

        assert [r['id'] for r in data['results']] == [post.id]
        assert data['results'][0]['relevanceScore'] == 50

    def test_unpublished_posts_are_invisible_through_cache(self, client, make_post):
        make_post(title='Iisus Hristos este Domnul', excerpt='Mărturisirea credinței', published=False)
        SQLTranslationCacheStore().put('Iisus Hristos este Domnul', 'Jesus Christ is Lord', 'ro', 'en')

        assert client.get('/api/search?q=jesus&lang=en').get_json()['total'] == 0

    def test_each_snippet_contributes_at_most_three_posts(self, client, make_post):
        for i in range(5):
            make_post(title=f'Iisus Hristos este Domnul {i}', excerpt='Mărturisirea credinței')
        SQLTranslationCacheStore().put('Iisus Hristos este Domnul', 'Jesus Christ is Lord', 'ro', 'en')

        data = client.get('/api/search?q=Jes&lang=en').get_json()

        assert data['total'] == 3

    def test_cache_is_not_used_for_origin_language(self, client, make_post):
        make_post(title='Iisus Hristos este Domnul', excerpt='Mărturisirea credinței')
        SQLTranslationCacheStore().put('Iisus Hristos este Domnul', 'Jesus Christ is Lord', 'ro', 'en')

        assert client.get('/api/search?q=Jes&lang=ro').get_json()['total'] == 0

    def test_post_matched_twice_appears_once(self, client, make_post):
        post = make_post(title='Iisus Hristos este Domnul', title_en='Jesus Christ is Lord')
        SQLTranslationCacheStore().put('Iisus Hristos este Domnul', 'Jesus Christ is Lord', 'ro', 'en')

        data = client.get('/api/search?q=jesus&lang=en').get_json()

        assert [r['id'] for r in data['results']] == [post.id]
        assert data['total'] == 1
        assert data['results'][0]['relevanceScore'] == 90 + 50

    def test_snippet_fallback_uses_longest_word(self, client, make_post):
        post = make_post(title='Mântuirea prin credință', excerpt='Despre har')
        # First three words of the snippet do not occur in any post
        SQLTranslationCacheStore().put(
            'Cuvânt despre har și Mântuirea', 'A word about grace and Salvation', 'ro', 'en'
        )

        data = client.get('/api/search?q=salvation&lang=en').get_json()

        assert post.id in [r['id'] for r in data['results']]

    def test_wildcards_in_query_are_literal(self, client, make_post):
        make_post(title='Harul și adevărul')

        assert client.get('/api/search?q=%25%25').get_json()['total'] == 0

    def test_missing_database_configuration(self, app, client, db_session, monkeypatch):
        monkeypatch.setitem(app.config, 'DATABASE_CONFIGURED', False)

        response = client.get('/api/search?q=harul')

        assert response.status_code == 500
        assert response.get_json()['success'] is False
