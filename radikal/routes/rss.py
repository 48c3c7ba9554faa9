"""RSS 2.0 feed of published posts."""

from email.utils import format_datetime
from datetime import datetime, timezone
from xml.sax.saxutils import escape

from flask import Blueprint, Response, request, current_app
from radikal.models import BlogPost
from radikal.services.languages import is_supported, normalize_lang
import logging
import re

logger = logging.getLogger(__name__)

rss_bp = Blueprint('rss', __name__)

FEED_SIZE = 50
DESCRIPTION_LENGTH = 500
DEFAULT_AUTHOR = "Don't lie to yourself"

_XML_ENTITIES = {'"': '&quot;', "'": '&apos;'}
_TAG_RE = re.compile(r'<[^>]*>')


def escape_xml(text: str) -> str:
    return escape(text or '', _XML_ENTITIES)


def strip_html(html: str) -> str:
    return _TAG_RE.sub('', html or '')[:DESCRIPTION_LENGTH]


def _rfc822(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value, usegmt=True)


def _field(post, field, lang):
    return post.stored_translation(field, lang) or getattr(post, field) or ''


def render_item(post, site_url, lang) -> str:
    link = f'{site_url}/blogs/{post.slug}'
    description = strip_html(_field(post, 'excerpt', lang) or _field(post, 'content', lang))
    enclosure = f'\n      <enclosure url="{escape_xml(post.image_url)}" type="image/jpeg"/>' if post.image_url else ''
    return f"""
    <item>
      <title>{escape_xml(_field(post, 'title', lang) or 'Untitled')}</title>
      <link>{escape_xml(link)}</link>
      <guid isPermaLink="true">{escape_xml(link)}</guid>
      <description>{escape_xml(description)}</description>
      <pubDate>{_rfc822(post.created_at)}</pubDate>
      <author>{escape_xml(post.author or DEFAULT_AUTHOR)}</author>{enclosure}
    </item>"""


def render_feed(posts, site_url, lang) -> str:
    now = _rfc822(datetime.now(timezone.utc))
    items = ''.join(render_item(post, site_url, lang) for post in posts)
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">
  <channel>
    <title>RADIKAL</title>
    <link>{escape_xml(site_url)}</link>
    <description>Christliche Gedanken und Reflexionen - Christian Thoughts and Reflections - Gânduri și Reflecții Creștine</description>
    <language>{escape_xml(lang)}</language>
    <lastBuildDate>{now}</lastBuildDate>
    <ttl>60</ttl>
    <atom:link href="{escape_xml(site_url)}/api/rss" rel="self" type="application/rss+xml"/>{items}
  </channel>
</rss>"""


@rss_bp.route('', methods=['GET'])
def rss_feed():
    """Newest published posts as RSS; `lang` picks stored translations."""
    try:
        lang = normalize_lang(request.args.get('lang'))
        if not is_supported(lang):
            lang = current_app.config.get('ORIGIN_LANG', 'ro')
        site_url = current_app.config['SITE_URL'].rstrip('/')
        posts = BlogPost.published_query().order_by(BlogPost.created_at.desc()).limit(FEED_SIZE).all()

        return Response(
            render_feed(posts, site_url, lang),
            status=200,
            mimetype='application/xml',
            headers={'Cache-Control': 'public, max-age=3600'}
        )
    except Exception as e:
        logger.error(f'RSS generation error: {e}', exc_info=True)
        return Response('Error generating RSS feed', status=500, mimetype='text/plain')
