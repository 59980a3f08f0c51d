from __future__ import annotations

from typing import Iterable

from errwrap.rewrite.model import DEFAULT_WRAP_FORMS, WrapCategory, WrapForm


def classify(
    token: str,
    forms: Iterable[WrapForm] = DEFAULT_WRAP_FORMS,
) -> WrapCategory | None:
    for form in forms:
        if form.matches(token):
            return form.category
    return None


def is_wrappable(token: str, forms: Iterable[WrapForm] = DEFAULT_WRAP_FORMS) -> bool:
    return classify(token, forms) is not None


def build_wrap_forms(
    *,
    error_identifier: str = "err",
    new_error_prefixes: Iterable[str] = ("errors.New",),
    formatted_error_prefixes: Iterable[str] = ("fmt.Errorf",),
    logged_error_prefixes: Iterable[str] = ("log.Error",),
) -> tuple[WrapForm, ...]:
    forms: list[WrapForm] = []
    if error_identifier:
        forms.append(WrapForm(WrapCategory.CURRENT_ERROR, "exact", error_identifier))
    for category, prefixes in (
        (WrapCategory.NEW_ERROR, new_error_prefixes),
        (WrapCategory.FORMATTED_ERROR, formatted_error_prefixes),
        (WrapCategory.LOGGED_ERROR, logged_error_prefixes),
    ):
        forms.extend(WrapForm(category, "prefix", prefix) for prefix in prefixes if prefix)
    return tuple(forms)
