"""PlanetCatalog: Streamlit app for browsing SWAPI planets."""

import asyncio
import html
import logging
import os

import httpx
import streamlit as st
from dotenv import load_dotenv
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from planetcatalog.i18n import t  # noqa: E402
from planetcatalog.loader import MAX_AUTO_LOADS, LoadState, PlanetLoader  # noqa: E402
from planetcatalog.renderers.cards import render_planet_grid  # noqa: E402
from planetcatalog.renderers.plotly_2d import render_orbit_chart  # noqa: E402
from planetcatalog.sort import sort_planets  # noqa: E402
from planetcatalog.swapi import SwapiClient  # noqa: E402

logging.basicConfig(
    level=os.environ.get("PLANETCATALOG_LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# --- Language detection (browser-first via streamlit-js-eval) ---
# navigator.language is read once and cached in session_state.
# On the first run the JS call returns None; the rerun triggered by
# streamlit_js_eval fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

_lang: str = st.session_state.get("lang", "en")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="🪐",
    layout="wide",
)

# --- Session state initialization ---
if "loader" not in st.session_state:
    st.session_state.loader = PlanetLoader(SwapiClient())
    st.session_state.needs_initial_load = True
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None
if "unsubscribe" not in st.session_state:
    st.session_state.unsubscribe = None
if "auto_load_paused" not in st.session_state:
    st.session_state.auto_load_paused = False

loader: PlanetLoader = st.session_state.loader

st.markdown(
    """
    <style>
    iframe[src*="streamlit_js_eval"] { display: none !important; }
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #0d1b35 !important;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] { display: none !important; }
    label, [data-testid="stWidgetLabel"] p {
        color: #aaaaaa !important;
        font-size: 0.85rem !important;
    }
    [data-testid="stButton"] button {
        background-color: rgba(126, 200, 227, 0.2) !important;
        color: #7ec8e3 !important;
        border: 1px solid #7ec8e3 !important;
        border-radius: 6px !important;
        font-weight: 600;
    }
    .pc-status { color: #aaaaaa; font-size: 0.85rem; margin: 0.4rem 0 0.8rem; }
    .pc-error {
        border: 1px solid #ff6b6b; color: #ff9999; border-radius: 8px;
        padding: 0.8rem 1.2rem; margin-bottom: 0.8rem;
    }
    .pc-loading { color: #e8d5a3; text-align: center; padding: 1rem; }
    .pc-scroll-sentinel { height: 1px; }
    </style>
    """,
    unsafe_allow_html=True,
)

st.markdown(f"## {t('page_title', _lang)}")

loading_placeholder = st.empty()


def _on_state_change(state: LoadState) -> None:
    if state.pending:
        loading_placeholder.markdown(
            f"<div class='pc-loading'>{t('loading', _lang)}…</div>",
            unsafe_allow_html=True,
        )
    else:
        loading_placeholder.empty()


# Listeners hold references to this run's placeholders; swap the old one out.
if st.session_state.unsubscribe is not None:
    st.session_state.unsubscribe()
st.session_state.unsubscribe = loader.subscribe(_on_state_change)


def _run_trigger(coro) -> bool:
    """Drive one loader trigger to completion, surfacing fetch errors in the page.

    Returns:
        False if the fetch failed.
    """
    try:
        asyncio.run(coro)
    except httpx.HTTPError as e:
        logger.warning("Planet fetch failed: %s", e)
        st.session_state.error_msg = t("error_fetch", _lang).format(
            error=html.escape(str(e))
        )
        return False
    st.session_state.error_msg = None
    st.session_state.auto_load_paused = False
    return True


if st.session_state.get("needs_initial_load"):
    st.session_state.needs_initial_load = False
    _run_trigger(loader.reset())

# --- Search bar ---
col1, col2, col3, col4, col5 = st.columns([3, 1, 1, 2, 2])
with col1:
    term = st.text_input(
        t("label_search", _lang),
        value=loader.state.search_term,
        placeholder=t("placeholder_search", _lang),
        key="search_input",
    )
with col2:
    st.markdown("<div style='height:1.9rem'></div>", unsafe_allow_html=True)
    search_clicked = st.button(t("btn_search", _lang), key="search_btn")
with col3:
    st.markdown("<div style='height:1.9rem'></div>", unsafe_allow_html=True)
    reset_clicked = st.button(t("btn_reset", _lang), key="reset_btn")
with col4:
    sort_field = st.selectbox(
        t("label_sort", _lang),
        options=["population", "distance_from_sun"],
        format_func=lambda f: t(f"sort_{f}", _lang),
        index=None,
        key="sort_field",
    )
with col5:
    sort_order = st.selectbox(
        t("label_order", _lang),
        options=["asc", "desc"],
        format_func=lambda o: t(f"order_{o}", _lang),
        key="sort_order",
    )

if reset_clicked:
    st.session_state.pop("search_input", None)
    _run_trigger(loader.reset())
    st.rerun()
elif search_clicked or term != loader.state.search_term:
    _run_trigger(loader.search(term))
    st.rerun()

# --- Error message ---
if st.session_state.error_msg:
    st.markdown(
        f"<div class='pc-error'>{st.session_state.error_msg}</div>",
        unsafe_allow_html=True,
    )

state = loader.state
planets = state.results
if sort_field:
    planets = sort_planets(planets, sort_field, sort_order)

if not planets and not state.pending and not st.session_state.error_msg:
    st.markdown(
        f"<div class='pc-status'>{t('no_results', _lang)}</div>",
        unsafe_allow_html=True,
    )
else:
    st.markdown(
        f"<div class='pc-status'>"
        f"{t('showing_count', _lang).format(shown=len(planets), total=state.total_count)}"
        f"</div>",
        unsafe_allow_html=True,
    )

# --- Results ---
cards_col, chart_col = st.columns([3, 2])
with chart_col:
    if planets:
        st.plotly_chart(
            render_orbit_chart(planets, title=t("chart_title", _lang)),
            use_container_width=True,
            config={"displayModeBar": False},
        )
with cards_col:
    st.markdown(render_planet_grid(planets, _lang), unsafe_allow_html=True)

# --- Continuation ---
# Automatic: a JS scroll check resolves once the sentinel below the cards scrolls
# into view. The key changes per loaded page so each page gets a fresh check.
# A failed automatic load pauses the check until the next successful fetch.
if state.show_scroll_trigger and not st.session_state.auto_load_paused:
    st.markdown("<div class='pc-scroll-sentinel'></div>", unsafe_allow_html=True)
    in_view = streamlit_js_eval(
        js_expressions=(
            "new Promise(function(resolve) {"
            " var el = window.parent.document.querySelector('.pc-scroll-sentinel');"
            " if (!el) { resolve(false); return; }"
            " var ob = new IntersectionObserver(function(entries) {"
            "  if (entries.some(function(e) { return e.isIntersecting; })) {"
            "   ob.disconnect(); resolve(true); } });"
            " ob.observe(el); })"
        ),
        key=f"_scroll_check_{state.generation}_{len(state.results)}",
        height=0,
    )
    if in_view:
        if not _run_trigger(loader.load_more(is_automatic=True)):
            st.session_state.auto_load_paused = True
        st.rerun()
elif state.show_load_button or (
    st.session_state.auto_load_paused and state.has_more and not state.pending
):
    if state.show_load_button:
        st.markdown(
            f"<div class='pc-status'>"
            f"{t('auto_load_exhausted', _lang).format(limit=MAX_AUTO_LOADS)}</div>",
            unsafe_allow_html=True,
        )
    if st.button(t("btn_load_more", _lang), key="load_more_btn"):
        _run_trigger(loader.load_more(is_automatic=False))
        st.rerun()
