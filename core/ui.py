# core/ui.py
"""Shared Streamlit rendering for list screens."""
from __future__ import annotations
import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

import pandas as pd
import streamlit as st

from core.list_controller import EntityListController

T = TypeVar("T")


def _df_or_empty(rows: List[Dict[str, Any]], columns: Sequence[str]) -> pd.DataFrame:
    if not rows:
        return pd.DataFrame(columns=list(columns))
    return pd.DataFrame(rows, columns=list(columns))


def render_search(ctl: EntityListController, key: str, placeholder: str = "Search...") -> None:
    """Search only runs on submit."""
    def _submit():
        ctl.on_search_submit(st.session_state.get(f"{key}_q", ""))

    with st.form(f"{key}_search_form", clear_on_submit=False, border=False):
        c1, c2 = st.columns([0.8, 0.2])
        with c1:
            st.text_input("Search", value=ctl.state.search_term, placeholder=placeholder,
                          key=f"{key}_q", label_visibility="collapsed")
        with c2:
            st.form_submit_button("🔍 Search", on_click=_submit, use_container_width=True)


def render_status_filter(ctl: EntityListController, key: str, options: Sequence[str],
                         format_func: Callable[[str], str] = str.capitalize) -> None:
    """Filter changes refetch immediately."""
    def _changed():
        ctl.on_filter_change(st.session_state[f"{key}_status"])

    current = ctl.state.status_filter if ctl.state.status_filter in options else options[0]
    st.selectbox("Status", options=list(options), index=list(options).index(current),
                 format_func=format_func, key=f"{key}_status", on_change=_changed)


def render_table(ctl: EntityListController[T], to_row: Callable[[T], Dict[str, Any]],
                 columns: Sequence[str], key: str) -> bool:
    """Render the current page. Returns True when there are rows on screen."""
    s = ctl.state

    if s.error and not s.loaded:
        st.error(f"Could not load {ctl.noun}: {s.error}")
        st.button("🔄 Retry", key=f"{key}_retry", on_click=ctl.refresh)
        return False

    if s.error:
        st.warning(f"Showing the last loaded {ctl.noun}. {s.error}")

    empty = ctl.empty_message()
    if empty:
        st.info(empty)
        return False

    df = _df_or_empty([to_row(item) for item in s.items], columns)
    st.dataframe(df, use_container_width=True, hide_index=True)
    return not df.empty


def render_pagination(ctl: EntityListController, key: str) -> None:
    p = ctl.state.pagination
    if p is None or p.total_pages <= 1:
        if p is not None:
            st.caption(f"{p.total_items} result(s)")
        return
    c1, c2, c3 = st.columns([0.2, 0.6, 0.2])
    with c1:
        st.button("◀ Previous", key=f"{key}_prev", disabled=not p.has_prev,
                  on_click=ctl.on_page_change, args=(-1,), use_container_width=True)
    with c2:
        st.caption(f"Page {p.page} of {p.total_pages} · {p.total_items} result(s)")
    with c3:
        st.button("Next ▶", key=f"{key}_next", disabled=not p.has_next,
                  on_click=ctl.on_page_change, args=(1,), use_container_width=True)


def pick_item(ctl: EntityListController[T], key: str, label: Callable[[T], str]) -> Optional[T]:
    """Row selector for the actions below a table."""
    items = ctl.state.items
    if not items:
        return None
    idx = st.selectbox("Select a row", options=list(range(len(items))),
                       format_func=lambda i: label(items[i]), key=f"{key}_pick")
    if idx is None or idx >= len(items):
        return None
    return items[idx]


def fmt_date(value: Any) -> str:
    if value is None or value == "":
        return "—"
    if isinstance(value, datetime.datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    if isinstance(value, datetime.date):
        return value.isoformat()
    return str(value)


def fmt_amount(value: Any) -> str:
    if value is None:
        return "—"
    return f"₱{value:,.2f}"


def hide_sidebar() -> None:
    st.markdown("""
        <style>
            section[data-testid="stSidebar"] {
                display: none;
            }
        </style>
    """, unsafe_allow_html=True)


def render_footer_global(app_name: str) -> None:
    year = str(datetime.datetime.now().year)
    st.markdown(
        f"""
        <div style="margin-top: 2rem; padding: 0.75rem 0; font-size: 0.9rem;
                    border-top: 1px solid rgba(0,0,0,0.15); opacity: 0.9;">
          <span>© {year} • {app_name}</span>
        </div>
        """,
        unsafe_allow_html=True,
    )


# ------------------------------------------------------------
# Modal helpers
# ------------------------------------------------------------
def finish_modal(ctx, ok: bool) -> None:
    """Close on success; otherwise show the queued error inside the dialog."""
    if ok:
        ctx.modal.close()
    else:
        ctx.notifier.flush()


def _confirm_body(ctx, prompt: str, confirm_key: str, action: Callable[[], bool]) -> None:
    if ctx.notifier.confirm(prompt, key=confirm_key):
        finish_modal(ctx, action())


def open_confirm(ctx, key: str, title: str, prompt: str, action: Callable[[], bool]) -> None:
    ctx.modal.open(key, title, _confirm_body, show_close=False,
                   ctx=ctx, prompt=prompt, confirm_key=key, action=action)
