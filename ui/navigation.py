# ui/navigation.py
import streamlit as st

from utils.messages import ERROR, Messenger


def force_rerun():
    fn = getattr(st, "rerun", None) or getattr(st, "experimental_rerun", None)
    if fn:
        fn()


def get_messenger() -> Messenger:
    if "messenger" not in st.session_state:
        st.session_state["messenger"] = Messenger()
    return st.session_state["messenger"]


def render_messages():
    for m in get_messenger().drain():
        if m.level == ERROR:
            st.error(m.text)
        else:
            st.success(m.text)


def go(target):
    """Follow a Link or Redirect: swap the query string and rerun."""
    params = {"page": target.route}
    if target.task_id is not None:
        params["id"] = str(target.task_id)
    st.query_params.from_dict(params)
    force_rerun()


def link_button(link, key: str, use_container_width: bool = False):
    kind = "primary" if link.style == "primary" else "secondary"
    if st.button(link.title, key=key, type=kind, use_container_width=use_container_width):
        go(link)
