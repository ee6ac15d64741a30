from __future__ import annotations
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional
import streamlit as st


def show_errors(errors: List[str]) -> bool:
    """Render validation errors; True when there were none."""
    for e in errors:
        st.error(e)
    return not errors

def _blank(v: Any) -> bool:
    return v is None or (isinstance(v, str) and not v.strip())

def require(values: Mapping[str, Any], labels: Mapping[str, str]) -> List[str]:
    return [f"{label} is required." for key, label in labels.items() if _blank(values.get(key))]

def passwords_match(password: str, confirm: str) -> List[str]:
    if (password or "") != (confirm or ""):
        return ["Passwords do not match."]
    return []

def date_order(start: Optional[date], end: Optional[date]) -> List[str]:
    if start and end and end < start:
        return ["End date must be on or after the start date."]
    return []

def parse_amount(raw: Any) -> tuple[Optional[Decimal], List[str]]:
    if _blank(raw):
        return None, []
    try:
        value = Decimal(str(raw).replace(",", "").strip())
    except InvalidOperation:
        return None, ["Amount must be a number."]
    if not value.is_finite():
        return None, ["Amount must be a number."]
    if value < 0:
        return None, ["Amount cannot be negative."]
    return value, []

def trimmed(values: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: v.strip() if isinstance(v, str) else v for k, v in values.items()}
