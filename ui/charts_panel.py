# ui/charts_panel.py
import plotly.graph_objects as go
import streamlit as st

from utils.charts import BAR, LINE, ChartData

SERIES_COLORS = ["#2563EB", "#16A34A", "#F59E0B", "#DC2626"]


def chart_figure(chart: ChartData) -> go.Figure:
    fig = go.Figure()
    for i, series in enumerate(chart.series):
        color = SERIES_COLORS[i % len(SERIES_COLORS)]
        if chart.chart_type == LINE:
            fig.add_trace(go.Scatter(x=chart.labels, y=series.data, name=series.title,
                                     mode="lines+markers", line=dict(color=color)))
        else:
            fig.add_trace(go.Bar(x=chart.labels, y=series.data, name=series.title,
                                 marker_color=color))

    y_scale = chart.options.get("scales", {}).get("y", {})
    if "min" in y_scale and "max" in y_scale:
        fig.update_yaxes(range=[y_scale["min"], y_scale["max"]])
    if chart.chart_type == LINE:
        fig.update_yaxes(rangemode="tozero")
    fig.update_layout(
        title=chart.title,
        margin=dict(l=20, r=20, t=50, b=30),
        height=380,
        autosize=bool(chart.options.get("responsive", True)),
        showlegend=len(chart.series) > 1,
    )
    return fig


def render_chart(chart: ChartData, empty_text: str, key: str):
    if chart.is_empty:
        st.info(empty_text)
        return
    st.plotly_chart(chart_figure(chart), use_container_width=True, key=key,
                    config={"displaylogo": False, "responsive": True})


def render_charts_panel(services, tasks, now: int):
    st.subheader("Progress charts")
    render_chart(services.charts.overall_chart(now),
                 "Add a task to see overall progress.", key="overall_chart")

    if not tasks:
        return
    by_label = {f"{row.title} (#{row.task_id})": row.task_id for row in tasks}
    choice = st.selectbox("Task progress over time", list(by_label.keys()), key="chart_task")
    res = services.tasks.get(by_label[choice])
    if res.ok and res.value is not None:
        render_chart(services.charts.task_chart(res.value),
                     "No check-ins yet for this task.", key=f"task_chart_{res.value.id}")
