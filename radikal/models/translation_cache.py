"""Translation cache model for storing translated content."""
from datetime import datetime
from radikal import db


class TranslationCacheEntry(db.Model):
    """One cached translation, keyed by (text hash, source, target)."""
    __tablename__ = 'translation_cache'

    id = db.Column(db.Integer, primary_key=True)
    original_text_hash = db.Column(db.String(32), nullable=False, index=True)
    source_lang = db.Column(db.String(5), nullable=False)
    target_lang = db.Column(db.String(5), nullable=False, index=True)
    # Only the first SNIPPET_LENGTH characters; lookups go through the hash
    original_text = db.Column(db.Text, nullable=False)
    translated_text = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.UniqueConstraint(
            'original_text_hash', 'source_lang', 'target_lang',
            name='unique_translation'
        ),
    )

    def __repr__(self):
        return f'<TranslationCacheEntry {self.source_lang}->{self.target_lang} {self.original_text_hash}>'
