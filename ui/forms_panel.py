# ui/forms_panel.py
from typing import Optional

import streamlit as st

from ui.navigation import force_rerun, go, link_button
from views.view_models import ConfirmViewModel, FormViewModel, Redirect


def _errors_key(vm) -> str:
    return f"{vm.form_id}:{vm.task_id}:errors"


def _widget(field, label: str, key: str):
    if field.type == "textfield":
        return st.text_input(label, value=field.default or "", key=key,
                             max_chars=field.max_length, help=field.description or None)
    if field.type == "textarea":
        height = 40 * field.rows if field.rows else None
        return st.text_area(label, value=field.default or "", key=key,
                            height=height, help=field.description or None)
    if field.type == "date":
        return st.date_input(label, value=field.default, key=key)
    if field.type == "checkbox":
        return st.checkbox(label, value=bool(field.default), key=key)
    raise ValueError(f"Unsupported field type: {field.type}")


def render_form(vm: FormViewModel) -> Optional[dict]:
    """Draw a form view model; returns the submitted values, else None."""
    st.subheader(vm.title)
    errors = st.session_state.pop(_errors_key(vm), {})
    values = {}
    with st.form(f"{vm.form_id}_{vm.task_id}", clear_on_submit=False):
        for field in vm.fields:
            label = f"{field.label} *" if field.required else field.label
            values[field.name] = _widget(field, label, key=f"{vm.form_id}:{vm.task_id}:{field.name}")
            if errors.get(field.name):
                st.error(errors[field.name])
        submitted = st.form_submit_button(vm.submit_label, type="primary")

    cols = st.columns(max(1, len(vm.links)) + 3)
    for col, link in zip(cols, vm.links):
        with col:
            link_button(link, key=f"{vm.form_id}_link_{link.route}")
    return values if submitted else None


def handle_outcome(vm: FormViewModel, outcome):
    """Redirects navigate; a returned form means re-show it with errors."""
    if isinstance(outcome, Redirect):
        go(outcome)
        return
    st.session_state[_errors_key(vm)] = outcome.errors
    force_rerun()


def render_confirm(vm: ConfirmViewModel) -> bool:
    st.subheader(vm.question)
    if vm.check_in_count > 0:
        st.warning(vm.description)
    else:
        st.write(vm.description)
    c1, c2, _ = st.columns([1, 1, 4])
    confirmed = c1.button(vm.confirm_label, key=f"{vm.form_id}_confirm", type="primary")
    with c2:
        link_button(vm.cancel, key=f"{vm.form_id}_cancel")
    return confirmed
