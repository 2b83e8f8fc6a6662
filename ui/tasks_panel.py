# ui/tasks_panel.py
import pandas as pd
import streamlit as st

from ui.charts_panel import render_charts_panel
from ui.navigation import link_button
from views.view_models import TaskListViewModel


def task_rows_df(vm: TaskListViewModel) -> pd.DataFrame:
    cols = vm.header[:3]
    data = [[r.title, r.timeframe, r.progress] for r in vm.rows]
    return pd.DataFrame(data, columns=cols)


def render_task_list(vm: TaskListViewModel, services, now: int):
    st.title(vm.title)
    link_button(vm.add_link, key="add_task")

    if not vm.rows:
        st.info(vm.empty_text)
    else:
        st.dataframe(task_rows_df(vm), use_container_width=True, hide_index=True)

        st.markdown(f"**{vm.header[3]}**")
        for row in vm.rows:
            c0, *cols = st.columns([3] + [1] * len(row.operations))
            c0.write(row.title)
            for col, link in zip(cols, row.operations):
                with col:
                    link_button(link, key=f"op_{link.route}_{row.task_id}", use_container_width=True)

    st.markdown("---")
    render_charts_panel(services, vm.rows, now)
