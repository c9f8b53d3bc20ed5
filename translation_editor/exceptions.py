class TranslationEditorError(Exception):
    """Base error of the translations editor."""


class EmptyLocalesError(TranslationEditorError, ValueError):
    def __init__(self) -> None:
        super().__init__(
            "The translation editor requires at least a single locale specified."
        )
