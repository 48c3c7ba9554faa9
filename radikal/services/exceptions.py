"""Errors raised by the translation service."""


class TranslationError(Exception):
    """Base class for translation failures."""


class TranslationNotConfiguredError(TranslationError):
    """No DeepL API key is configured."""


class UpstreamTranslationError(TranslationError):
    """DeepL answered with a non-2xx status or could not be reached.

    `partial` holds the results already resolved before the upstream call,
    positionally aligned with the input; positions that needed the upstream
    call are None.
    """

    def __init__(self, status_code: int, details: str = '', partial=None):
        super().__init__(f'Translation failed with status {status_code}')
        self.status_code = status_code
        self.details = details
        self.partial = partial
