import streamlit as st
from core.i18n import t
from core.trends import chart_points, direction, marker_trends
from core.types import AppContext

id = "trends"
title = "trends"

ARROWS = {"up": ("↑", "#d97706"), "down": ("↓", "#059669")}


def render(ctx: AppContext) -> None:
    lang = ctx.prefs.language
    st.header(t("trends", lang))
    st.caption(t("trend_graph", lang))

    trends = marker_trends(ctx.reports.all())
    if not trends:
        st.info(t("no_trends", lang))
        return

    cols = st.columns(2)
    for i, (name, points) in enumerate(trends.items()):
        with cols[i % 2].container(border=True):
            head, arrow = st.columns([4, 1])
            head.markdown(f"**{name}**")
            head.caption(t("history", lang))
            d = direction(points)
            if d:
                sym, col = ARROWS[d]
                arrow.markdown(f'<span style="color:{col};font-size:1.6rem;font-weight:800;">{sym}</span>', unsafe_allow_html=True)
            shown = chart_points(points)
            st.bar_chart(
                {"date": [f"{j + 1}. {p.date[:10]}" for j, p in enumerate(shown)], "value": [p.value for p in shown]},
                x="date",
                y="value",
                height=160,
            )
