from __future__ import annotations

import pytest
from django import forms

from tests.models import ArticleTranslationForm, LabelTranslationForm
from translation_editor.errors import ErrorTree, collect_error_tree
from translation_editor.i18n import create_translator_hub


def _runner(locale: str):
    return create_translator_hub(["en", "de"], root_locale="en").get_translator_by_locale(locale)


class DomainLabelForm(forms.Form):
    translation_domain = "messages"

    name = forms.CharField(label="translations-editor-null-locale")


class DatesForm(forms.Form):
    starts = forms.IntegerField(label="Starts")
    ends = forms.IntegerField(label="Ends")

    def clean(self):
        cleaned = super().clean()
        if cleaned.get("starts") and cleaned.get("ends") and cleaned["starts"] > cleaned["ends"]:
            raise forms.ValidationError("Starts after it ends.")
        return cleaned


def test_field_errors_are_labelled() -> None:
    form = ArticleTranslationForm(data={"title": "", "body": "Text"})

    tree = collect_error_tree(form)

    assert tree.messages == []
    assert list(tree.children) == ["title"]
    assert tree.children["title"].label == "Title"
    assert tree.children["title"].errors.messages == ["This field is required."]


def test_form_level_errors_are_messages() -> None:
    tree = collect_error_tree(DatesForm(data={"starts": "5", "ends": "1"}))
    assert tree.messages == ["Starts after it ends."]
    assert tree.children == {}


def test_labels_are_translated_for_translation_domain() -> None:
    tree = collect_error_tree(DomainLabelForm(data={}), _runner("de"))
    assert tree.children["name"].label == "Standard"


def test_label_without_translation_keeps_its_text() -> None:
    tree = collect_error_tree(LabelTranslationForm(data={}), _runner("de"))
    assert tree.children["name"].label == "name-label"


def test_unbound_and_valid_forms_give_empty_tree() -> None:
    assert not collect_error_tree(ArticleTranslationForm())
    assert not collect_error_tree(ArticleTranslationForm(data={"title": "Hello"}))


def test_plain_formset_children_are_keyed_by_index() -> None:
    FormSet = forms.formset_factory(ArticleTranslationForm, extra=0)
    data = {
        "form-TOTAL_FORMS": "2",
        "form-INITIAL_FORMS": "0",
        "form-0-title": "Hello",
        "form-1-body": "No title",
    }

    tree = collect_error_tree(FormSet(data), labels={"1": "Second"})

    assert list(tree.children) == ["1"]
    assert tree.children["1"].label == "Second"
    assert tree.children["1"].errors.children["title"].label == "Title"


def test_as_dict_mirrors_tree() -> None:
    tree = collect_error_tree(ArticleTranslationForm(data={}))
    assert tree.as_dict() == {
        "messages": [],
        "children": {
            "title": {
                "label": "Title",
                "errors": {"messages": ["This field is required."], "children": {}},
            }
        },
    }
    assert ErrorTree().as_dict() == {"messages": [], "children": {}}


def test_other_objects_are_rejected() -> None:
    with pytest.raises(TypeError):
        collect_error_tree(object())
