"""Blog post model. Plain columns hold the origin-language text."""

from datetime import datetime
from uuid import uuid4
from sqlalchemy import or_
from radikal import db

LOCALIZED_FIELDS = ('title', 'excerpt', 'content')
STORED_LANGUAGES = ('de', 'en', 'ru')

# Columns returned by search and list endpoints
SUMMARY_COLUMNS = ('id', 'title', 'title_en', 'excerpt', 'excerpt_en', 'image_url', 'created_at', 'slug')


class BlogPost(db.Model):
    """A published or draft blog post."""

    __tablename__ = 'blog_posts'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid4()))
    slug = db.Column(db.String(255), nullable=False, unique=True, index=True)

    title = db.Column(db.String(500), nullable=False)
    title_de = db.Column(db.String(500), nullable=True)
    title_en = db.Column(db.String(500), nullable=True)
    title_ru = db.Column(db.String(500), nullable=True)

    excerpt = db.Column(db.Text, nullable=True)
    excerpt_de = db.Column(db.Text, nullable=True)
    excerpt_en = db.Column(db.Text, nullable=True)
    excerpt_ru = db.Column(db.Text, nullable=True)

    content = db.Column(db.Text, nullable=True)
    content_de = db.Column(db.Text, nullable=True)
    content_en = db.Column(db.Text, nullable=True)
    content_ru = db.Column(db.Text, nullable=True)

    tags = db.Column(db.JSON, nullable=True)  # Array of tags
    author = db.Column(db.String(255), nullable=True)
    image_url = db.Column(db.String(1000), nullable=True)
    published = db.Column(db.Boolean, default=False, nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def stored_translation(self, field: str, lang: str) -> str | None:
        """Return the pre-stored `<field>_<lang>` column, if the post has one."""
        if lang not in STORED_LANGUAGES:
            return None
        return getattr(self, f'{field}_{lang}', None) or None

    def to_summary_dict(self):
        """Fields used by search results and post lists."""
        return {
            'id': self.id,
            'title': self.title,
            'title_en': self.title_en,
            'excerpt': self.excerpt,
            'excerpt_en': self.excerpt_en,
            'image_url': self.image_url,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'slug': self.slug,
        }

    def to_dict(self):
        """Convert post to dictionary."""
        data = self.to_summary_dict()
        data.update({
            'content': self.content,
            'tags': self.tags or [],
            'author': self.author,
            'published': self.published,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        })
        for field in LOCALIZED_FIELDS:
            for lang in STORED_LANGUAGES:
                data[f'{field}_{lang}'] = getattr(self, f'{field}_{lang}')
        return data

    @classmethod
    def published_query(cls):
        return cls.query.filter(cls.published.is_(True))

    @classmethod
    def search_published(cls, patterns, columns, limit, newest_first=True):
        """Published posts where any column contains any pattern (case-insensitive).

        Patterns must already be LIKE-escaped with backslash.
        """
        conditions = [
            getattr(cls, column).ilike(f'%{pattern}%', escape='\\')
            for pattern in patterns
            for column in columns
        ]
        query = cls.published_query().filter(or_(*conditions))
        if newest_first:
            query = query.order_by(cls.created_at.desc())
        return query.limit(limit).all()

    @classmethod
    def get_published_by_slug(cls, slug):
        return cls.published_query().filter_by(slug=slug).first()

    def __repr__(self):
        return f'<BlogPost {self.slug}>'
