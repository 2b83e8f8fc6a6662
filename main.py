# main.py

#============================================================#
#                   Daily Progress Tracker                   #
#============================================================#
# Purpose     : Track recurring daily tasks with check-ins,  #
#               progress tables and Plotly charts            #
#               (SQLite/PostgreSQL powered)                  #
#============================================================#

import streamlit as st

import config
import routes
from logger import setup_logger
from services import build_services
from ui.forms_panel import handle_outcome, render_confirm, render_form
from ui.navigation import force_rerun, get_messenger, go, render_messages
from ui.resize import bind_chart_resize
from ui.tasks_panel import render_task_list
from views.view_models import Redirect

st.set_page_config(
    page_title=config.APP_TITLE,
    layout="wide",
    initial_sidebar_state="collapsed",
)

logger = setup_logger()


@st.cache_resource
def _services():
    return build_services()


services = _services()


# ======================  IDENTITY  ======================
def full_screen_sign_in():
    _, col, _ = st.columns([1, 2.2, 1])
    with col:
        st.markdown(f"<h2 style='text-align:center;'>{config.APP_TITLE}</h2>", unsafe_allow_html=True)
        with st.form("sign_in_form", clear_on_submit=False):
            name = st.text_input("Your name", placeholder="Who is checking in?")
            submitted = st.form_submit_button("Continue", use_container_width=True)
        if submitted:
            if not name.strip():
                st.warning("Please enter your name.")
            else:
                st.session_state["user"] = name.strip()
                logger.info("Session started for %(uid)s", {"uid": name.strip()})
                force_rerun()


user = st.session_state.get("user")
if not user:
    full_screen_sign_in()
    st.stop()

with st.sidebar:
    st.caption(f"Signed in as **{user}**")
    if st.button("Sign out"):
        st.session_state.pop("user", None)
        force_rerun()


# ======================  ROUTING  ======================
messenger = get_messenger()
route, task_id = routes.resolve(st.query_params.to_dict())
render_messages()

if route == routes.LIST:
    now = services.clock.now()
    vm = services.task_list().build(now)
    render_task_list(vm, services, now)
    bind_chart_resize()

elif route in (routes.ADD, routes.EDIT):
    form = services.task_form(messenger, current_user=user)
    vm = form.build(task_id if route == routes.EDIT else None)
    if isinstance(vm, Redirect):
        go(vm)
    else:
        values = render_form(vm)
        if values is not None:
            handle_outcome(vm, form.submit(values, vm.task_id))

elif route == routes.CHECKIN:
    form = services.checkin_form(messenger)
    vm = form.build(task_id)
    if isinstance(vm, Redirect):
        go(vm)
    else:
        values = render_form(vm)
        if values is not None:
            handle_outcome(vm, form.submit(vm.task_id, values))

elif route == routes.DELETE:
    form = services.delete_form(messenger)
    vm = form.build(task_id)
    if isinstance(vm, Redirect):
        go(vm)
    elif render_confirm(vm):
        go(form.submit(vm.task_id))
