import nedc_dashboard.bootstrap_env  # must be first to set env/secrets
import streamlit as st

from nedc_dashboard.config import TABS, get_settings
from nedc_dashboard.data.aggregation import summarize
from nedc_dashboard.data.filters import active_filter_count, apply_filters, describe_filters
from nedc_dashboard.data.loader import ConfigError, RecordFetchError, load_projects
from nedc_dashboard.observability import configure_logging
from nedc_dashboard.ui.layout import setup_page, sidebar_filters_ui
from nedc_dashboard.ui.pages import (
    analytics,
    assistant,
    data_quality,
    geography,
    indicators,
    overview,
    projects,
)
from nedc_dashboard.ui.pages.context import PageContext

SNAPSHOT_KEY = "nedc_projects"
LOAD_ERROR_KEY = "nedc_load_error"

PAGE_RENDERERS = {
    "overview": overview.render,
    "projects": projects.render,
    "analytics": analytics.render,
    "geography": geography.render,
    "indicators": indicators.render,
    "assistant": assistant.render,
    "data_quality": data_quality.render,
}


def _load_snapshot(settings):
    """Fetch once per session; the snapshot stays until Refresh or Retry."""
    if SNAPSHOT_KEY in st.session_state:
        return st.session_state[SNAPSHOT_KEY]
    with st.spinner("Loading projects..."):
        try:
            frame = load_projects(settings)
        except (RecordFetchError, ConfigError) as exc:
            st.session_state[LOAD_ERROR_KEY] = str(exc)
            return None
    st.session_state.pop(LOAD_ERROR_KEY, None)
    st.session_state[SNAPSHOT_KEY] = frame
    return frame


def _active_filter_summary(filters, total_rows: int) -> None:
    if active_filter_count(filters):
        st.markdown(f"**Active Filters:** {describe_filters(filters)}")
    else:
        st.markdown("**Active Filters:** All projects")
    st.caption(f"{total_rows:,} projects after filters.")


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    setup_page()
    st.title("NEDC Monitoring & Evaluation Dashboard")

    if st.sidebar.button("🔄 Refresh Data"):
        st.session_state.pop(SNAPSHOT_KEY, None)

    raw_df = _load_snapshot(settings)
    if raw_df is None:
        st.error(f"Failed to load projects: {st.session_state.get(LOAD_ERROR_KEY)}")
        if st.button("Retry", type="primary"):
            st.rerun()
        st.stop()

    filters = sidebar_filters_ui(raw_df)
    filtered_df = apply_filters(raw_df, filters)

    if raw_df.empty:
        st.warning("No projects found in the record source.")

    _active_filter_summary(filters, len(filtered_df))

    context = PageContext(
        raw_df=raw_df,
        filters=filters,
        stats=summarize(filtered_df),
        settings=settings,
    )

    streamlit_tabs = st.tabs([tab.label for tab in TABS])
    for streamlit_tab, tab_config in zip(streamlit_tabs, TABS):
        renderer = PAGE_RENDERERS.get(tab_config.key)
        if renderer is None:
            continue
        with streamlit_tab:
            renderer(filtered_df, context)


if __name__ == "__main__":
    main()
