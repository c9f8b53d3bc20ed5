from django.apps import AppConfig


class TranslationEditorConfig(AppConfig):
    name = "translation_editor"
    verbose_name = "Translations editor"
