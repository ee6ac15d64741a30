# core/navigation.py
import logging
import traceback
from typing import TYPE_CHECKING, Callable, Dict

import streamlit as st

from core.router import resolve

if TYPE_CHECKING:
    from core.nav_registry import Route

logger = logging.getLogger(__name__)

PAGES_KEY = "_pages_by_path"

def go(path: str):
    """Switch to the page registered for a logical path."""
    pages: Dict[str, "st.Page"] = st.session_state.get(PAGES_KEY) or {}
    page = pages.get(path)
    if page is None:
        logger.error("No page registered for %s", path)
        st.error(f"Page not found: {path}")
        st.stop()
    st.switch_page(page)

def guarded(route: "Route", get_ctx: Callable[[], object]) -> Callable[[], None]:
    """Wrap a renderer so the role gate runs before every render."""
    def _page():
        ctx = get_ctx()
        decision = resolve(route.path, ctx.session)
        if not decision.allowed:
            logger.debug("Redirecting %s -> %s", route.path, decision.redirect_to)
            go(decision.redirect_to)
            return
        ctx.notifier.flush()
        try:
            route.render(ctx)
        except Exception as e:
            logger.exception("Page %s failed", route.key)
            st.error(f"{route.label} failed: {e}")
            st.code(traceback.format_exc())
        ctx.modal.render()
    _page.__name__ = route.key
    return _page

def build_pages(get_ctx: Callable[[], object]) -> Dict[str, "st.Page"]:
    # screens import `go` from here, so the registry is loaded late
    from core.nav_registry import SECTIONS

    pages = {}
    for section in SECTIONS:
        for route in section.routes:
            pages[route.path] = st.Page(
                guarded(route, get_ctx),
                title=route.label,
                icon=route.icon,
                url_path=route.key,
                default=(route.path == "/login"),
            )
    st.session_state[PAGES_KEY] = pages
    return pages
