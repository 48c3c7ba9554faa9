"""DeepL API client. One POST per batch of texts."""
import logging
import requests

from radikal.services.exceptions import UpstreamTranslationError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = 'https://api.deepl.com/v2/translate'


class DeepLClient:
    """Thin wrapper around the DeepL /v2/translate endpoint."""

    def __init__(self, api_key: str, api_url: str = DEFAULT_API_URL, timeout: float = 10):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout

    def translate(self, texts: list[str], target_lang: str, source_lang: str | None = None) -> list[dict]:
        """Translate a batch. Language codes are in DeepL's upper-case form.

        Returns DeepL's `translations` list: one
        `{'text': ..., 'detected_source_language': ...}` per input text.
        Omit `source_lang` to let DeepL detect it.
        """
        body = {
            'text': texts,
            'target_lang': target_lang,
        }
        if source_lang:
            body['source_lang'] = source_lang

        headers = {
            'Authorization': f'DeepL-Auth-Key {self.api_key}',
            'Content-Type': 'application/json',
        }

        try:
            response = requests.post(self.api_url, json=body, headers=headers, timeout=self.timeout)
        except requests.Timeout:
            logger.warning(f'DeepL timeout after {self.timeout}s')
            raise UpstreamTranslationError(504, 'DeepL request timed out')
        except requests.RequestException as e:
            logger.warning(f'DeepL request error: {e}')
            raise UpstreamTranslationError(502, str(e))

        if not response.ok:
            logger.error(f'DeepL API error: {response.status_code} {response.text}')
            raise UpstreamTranslationError(response.status_code, response.text)

        try:
            return response.json().get('translations', [])
        except ValueError:
            raise UpstreamTranslationError(502, 'DeepL returned a malformed response')
