# app.py
from __future__ import annotations
import datetime
import logging

import extra_streamlit_components as stx
import streamlit as st

from core.settings import load_settings
from core.db import get_engine, init_db
from core.context import AppContext, build_context
from core.nav_registry import sections_for
from core.navigation import PAGES_KEY, build_pages
from core.session import CLIENT_COOKIE, resolve_client_id
from core.ui import hide_sidebar, render_footer_global

logger = logging.getLogger(__name__)

CLIENT_COOKIE_DAYS = 30


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _client_id() -> str:
    """
    Stable id for this browser. It lives in a cookie so a reload finds the
    stored session again while a copied URL does not.
    """
    cid, needs_cookie = resolve_client_id(st.session_state, st.context.cookies)
    if needs_cookie:
        expires = datetime.datetime.now() + datetime.timedelta(days=CLIENT_COOKIE_DAYS)
        stx.CookieManager(key="client_cookies").set(
            CLIENT_COOKIE, cid, expires_at=expires, key="client_cookie_set")
    return cid


def _ensure_engine(settings):
    if "engine" not in st.session_state:
        engine = get_engine(settings.db.url)
        st.session_state["engine"] = engine
    return st.session_state["engine"]


def _ensure_context() -> AppContext:
    ctx = st.session_state.get("ctx")
    if ctx is None:
        settings = load_settings()
        _configure_logging(settings.app.log_level)
        engine = _ensure_engine(settings)

        # Run storage initialization ONCE per session.
        if "db_initialized" not in st.session_state:
            try:
                init_db(engine)
            except Exception as e:
                st.error("Client storage initialization failed. See details below.")
                with st.expander("Diagnostics"):
                    st.exception(e)
                st.stop()
            st.session_state["db_initialized"] = True

        ctx = build_context(settings, engine, _client_id(), st.session_state)
        ctx.sessions.load()
        st.session_state["ctx"] = ctx
    else:
        _client_id()
    return ctx


def _render_sidebar(ctx: AppContext) -> None:
    session = ctx.session
    if session is None:
        hide_sidebar()
        return
    with st.sidebar:
        st.markdown(f"### 🎓 {ctx.settings.app.name}")
        who = session.name or session.email or "Signed in"
        st.caption(f"**{who}** · _{session.role}_")
        for section in sections_for(session.role):
            st.markdown(f"**{section.title}**")
            for route in section.routes:
                if route.in_sidebar:
                    st.page_link(ctx.state[PAGES_KEY][route.path], label=route.label, icon=route.icon)
        st.divider()
        st.page_link(ctx.state[PAGES_KEY]["/logout"], label="Logout", icon="🚪")


def main():
    try:
        st.set_page_config(page_title="Scholarship Portal", layout="wide", page_icon="🎓")
    except Exception:
        logger.debug("Page config already set")

    ctx = _ensure_context()
    pages = build_pages(lambda: st.session_state["ctx"])
    nav = st.navigation(list(pages.values()), position="hidden")
    _render_sidebar(ctx)
    nav.run()
    render_footer_global(ctx.settings.app.name)


if __name__ == "__main__":
    main()
