from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from django.forms import BaseForm
from django.forms.formsets import BaseFormSet

from translation_editor.config import settings
from translation_editor.i18n import translate


@dataclass
class ErrorBranch:
    label: Optional[str]
    errors: "ErrorTree"


@dataclass
class ErrorTree:
    """Validation messages of a form node and the branches of its invalid children."""

    messages: List[str] = field(default_factory=list)
    children: Dict[str, ErrorBranch] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.messages or self.children)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "messages": list(self.messages),
            "children": {
                name: {"label": branch.label, "errors": branch.errors.as_dict()}
                for name, branch in self.children.items()
            },
        }


def _translate_label(label: Any, owner: Any, translator: Any) -> Optional[str]:
    if not label:
        return None
    text = str(label)
    if getattr(owner, "translation_domain", None):
        return translate(translator, text, text)
    return text


def _formset_children(formset: BaseFormSet) -> Iterable[Tuple[str, BaseForm]]:
    keyed = getattr(formset, "forms_by_locale", None)
    if isinstance(keyed, Mapping):
        for locale, form in keyed.items():
            yield (locale if locale is not None else settings.null_locale_key), form
    else:
        for index, form in enumerate(formset.forms):
            yield str(index), form


def collect_error_tree(
    node: Any,
    translator: Any = None,
    labels: Optional[Mapping[str, str]] = None,
) -> ErrorTree:
    """
    Gathers the errors of a form or formset and of all its invalid children.

    ``labels`` names formset children (e.g. locale titles); field children are
    labelled with their bound field label, translated when the form declares
    a ``translation_domain``.
    """
    tree = ErrorTree()
    labels = labels or {}

    if isinstance(node, BaseFormSet):
        tree.messages.extend(str(message) for message in node.non_form_errors())
        for name, form in _formset_children(node):
            if form.is_bound and form.errors:
                tree.children[name] = ErrorBranch(
                    label=labels.get(name),
                    errors=collect_error_tree(form, translator),
                )
        return tree

    if isinstance(node, BaseForm):
        tree.messages.extend(str(message) for message in node.non_field_errors())
        if not node.is_bound:
            return tree
        for bound_field in node:
            field_errors = node.errors.get(bound_field.name)
            if not field_errors:
                continue
            tree.children[bound_field.name] = ErrorBranch(
                label=_translate_label(bound_field.label, node, translator),
                errors=ErrorTree(messages=[str(message) for message in field_errors]),
            )
        return tree

    raise TypeError(f"Cannot collect errors of {type(node).__name__}")
