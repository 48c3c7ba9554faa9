"""
Tests for the localized post endpoints (/api/posts).
"""

from datetime import datetime, timedelta

from radikal.services.translation_cache import SQLTranslationCacheStore


class TestListPosts:
    """GET /api/posts"""

    def test_origin_language_is_returned_as_stored(self, client, make_post, deepl):
        post = make_post(title='Harul', excerpt='Despre har')

        response = client.get('/api/posts')

        assert response.status_code == 200
        data = response.get_json()
        assert data['total'] == 1
        item = data['posts'][0]
        assert item['id'] == post.id
        assert item['title'] == 'Harul'
        assert item['language'] == 'ro'
        assert item['translated'] is False
        assert deepl.calls == []

    def test_newest_first_and_unpublished_hidden(self, client, make_post):
        now = datetime.utcnow()
        older = make_post(title='Vechi', created_at=now - timedelta(days=2))
        newer = make_post(title='Nou', created_at=now)
        make_post(title='Ciornă', published=False)

        data = client.get('/api/posts').get_json()

        assert [p['id'] for p in data['posts']] == [newer.id, older.id]

    def test_pagination_caps_page_size(self, client, make_post):
        for i in range(3):
            make_post(title=f'Articol {i}')

        data = client.get('/api/posts?per_page=2&page=2').get_json()

        assert data['total'] == 3
        assert data['pages'] == 2
        assert data['current_page'] == 2
        assert len(data['posts']) == 1

    def test_stored_column_wins_over_translation(self, client, make_post, deepl):
        make_post(title='Harul', title_en='Grace', excerpt='Despre har')

        item = client.get('/api/posts?lang=en').get_json()['posts'][0]

        assert item['title'] == 'Grace'
        assert item['excerpt'] == 'Despre har [EN]'
        assert item['language'] == 'en'
        assert item['translated'] is True
        assert deepl.sent_texts == [['Despre har']]

    def test_all_posts_translated_in_one_call(self, client, make_post, deepl):
        now = datetime.utcnow()
        make_post(title='Primul', excerpt='Unu', created_at=now)
        make_post(title='Al doilea', excerpt='Doi', created_at=now - timedelta(hours=1))

        posts = client.get('/api/posts?lang=de').get_json()['posts']

        assert len(deepl.calls) == 1
        assert deepl.sent_texts[0] == ['Primul', 'Unu', 'Al doilea', 'Doi']
        assert deepl.calls[0]['json']['source_lang'] == 'RO'
        assert [p['title'] for p in posts] == ['Primul [DE]', 'Al doilea [DE]']

    def test_translation_outage_falls_back_to_original(self, client, make_post, deepl):
        make_post(title='Harul', excerpt='Despre har')
        deepl.status_code = 503
        deepl.error_body = 'Service unavailable'

        response = client.get('/api/posts?lang=en')

        assert response.status_code == 200
        item = response.get_json()['posts'][0]
        assert item['title'] == 'Harul'
        assert item['excerpt'] == 'Despre har'
        assert item['translated'] is False

    def test_cached_translation_survives_outage(self, client, make_post, deepl):
        make_post(title='Harul', excerpt='Despre har')
        SQLTranslationCacheStore().put('Harul', 'Grace', 'ro', 'en')
        deepl.status_code = 503

        item = client.get('/api/posts?lang=en').get_json()['posts'][0]

        assert item['title'] == 'Grace'
        assert item['excerpt'] == 'Despre har'


class TestGetPost:
    """GET /api/posts/<slug>"""

    def test_detail_in_origin_language(self, client, make_post):
        post = make_post(title='Harul', excerpt='Despre har', content='<p>Text</p>', tags=['har'])

        response = client.get(f'/api/posts/{post.slug}')

        assert response.status_code == 200
        data = response.get_json()
        assert data['content'] == '<p>Text</p>'
        assert data['tags'] == ['har']
        assert data['translated'] is False

    def test_detail_translates_content(self, client, make_post, deepl):
        post = make_post(title='Harul', title_de='Die Gnade', excerpt='Despre har', content='Text')

        data = client.get(f'/api/posts/{post.slug}?lang=DE').get_json()

        assert data['title'] == 'Die Gnade'
        assert data['excerpt'] == 'Despre har [DE]'
        assert data['content'] == 'Text [DE]'
        assert data['language'] == 'de'
        assert deepl.sent_texts == [['Despre har', 'Text']]

    def test_missing_post(self, client, db_session):
        response = client.get('/api/posts/does-not-exist')

        assert response.status_code == 404
        assert response.get_json()['error'] == 'Post not found'

    def test_unpublished_post_is_not_found(self, client, make_post):
        post = make_post(title='Ciornă', published=False)

        assert client.get(f'/api/posts/{post.slug}').status_code == 404
