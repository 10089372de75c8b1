"""
Review dashboard: tab filters, search, stable sorting, reviewer-local status
tracking and the overview charts.
"""
import json
import logging
import os
from collections import Counter
from typing import Any, Dict, List, Optional

import plotly.graph_objects as go

from recruitment.form_structure import TRACKS
from recruitment.processor import normalize_name

logger = logging.getLogger(__name__)

PENDING, VIEWED, ACCEPTED, REJECTED = "pending", "viewed", "accepted", "rejected"
REVIEW_STATUSES = [PENDING, VIEWED, ACCEPTED, REJECTED]

OVERVIEW_TAB = "Overview"
ALL_TAB = "All Responses"
STATUS_TABS = {
    "Shortlisted": ACCEPTED,
    "Rejected": REJECTED,
    "Pending": PENDING,
    "Viewed": VIEWED,
}
TABS = [OVERVIEW_TAB, ALL_TAB] + TRACKS + list(STATUS_TABS)

BAR_COLORS = ["#673ab7", "#3f51b5", "#2196f3", "#03a9f4", "#00bcd4", "#009688", "#4caf50", "#8bc34a", "#cddc39"]


# ==================== REVIEW STATUS ====================
class ReviewStatusStore:
    """
    Per-reviewer review status keyed by submission timestamp, kept in a local
    JSON file and never written back to the sheet. No entry means pending.
    """

    def __init__(self, path: str):
        self.path = path
        self._statuses: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("⚠️ Could not read review statuses from %s: %s", self.path, e)
            return {}
        return {str(k): v for k, v in data.items() if v in REVIEW_STATUSES}

    def _save(self) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._statuses, f, indent=2)

    def get(self, timestamp: str) -> str:
        return self._statuses.get(timestamp, PENDING)

    def all(self) -> Dict[str, str]:
        return dict(self._statuses)

    def open(self, timestamp: str) -> str:
        """Opening a record marks it viewed, but only if nobody decided on it yet"""
        if self.get(timestamp) == PENDING:
            self._statuses[timestamp] = VIEWED
            self._save()
        return self.get(timestamp)

    def accept(self, timestamp: str) -> str:
        return self._set(timestamp, ACCEPTED)

    def reject(self, timestamp: str) -> str:
        return self._set(timestamp, REJECTED)

    def _set(self, timestamp: str, status: str) -> str:
        self._statuses[timestamp] = status
        self._save()
        return status


# ==================== FILTER / SEARCH / SORT ====================
def filter_by_tab(records: List[Dict[str, Any]], tab: str, statuses: Dict[str, str]) -> List[Dict[str, Any]]:
    if not tab or tab in (OVERVIEW_TAB, ALL_TAB):
        return list(records)
    if tab in STATUS_TABS:
        wanted = STATUS_TABS[tab]
        return [r for r in records if statuses.get(str(r.get("timestamp", "")), PENDING) == wanted]
    return [r for r in records if r.get("selected_track") == tab]


def search_records(records: List[Dict[str, Any]], query: str) -> List[Dict[str, Any]]:
    query = (query or "").strip().lower()
    if not query:
        return list(records)
    return [
        r for r in records
        if any(query in str(value).lower() for value in r.values() if value is not None)
    ]


def _sort_value(value: Any):
    if value is None or str(value).strip() == "":
        return (1, 0, "")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, 0, float(value))
    try:
        return (0, 0, float(str(value).strip()))
    except ValueError:
        return (0, 1, str(value).lower())


def sort_records(records: List[Dict[str, Any]], key: Optional[str], descending: bool = False) -> List[Dict[str, Any]]:
    """Stable sort: records with equal keys keep their relative input order"""
    if not key:
        return list(records)
    return sorted(records, key=lambda r: _sort_value(r.get(key)), reverse=descending)


class DashboardView:
    def __init__(self, records: List[Dict[str, Any]], statuses: Optional[Dict[str, str]] = None):
        self.records = list(records)
        self.statuses = statuses or {}

    def apply(
        self,
        tab: str = ALL_TAB,
        query: str = "",
        sort_key: Optional[str] = None,
        descending: bool = False,
    ) -> List[Dict[str, Any]]:
        rows = filter_by_tab(self.records, tab, self.statuses)
        rows = search_records(rows, query)
        rows = sort_records(rows, sort_key, descending)
        return [dict(r, review_status=self.statuses.get(str(r.get("timestamp", "")), PENDING)) for r in rows]


# ==================== OVERVIEW ====================
def create_branch_chart(branch_counts: Dict[str, int]) -> str:
    """Bar chart of responses per branch"""
    names = list(branch_counts)
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=names,
        y=[branch_counts[n] for n in names],
        marker_color=[BAR_COLORS[i % len(BAR_COLORS)] for i in range(len(names))],
        hovertemplate="<b>%{x}</b><br>Responses: %{y}<extra></extra>",
    ))
    fig.update_layout(
        title=dict(text="Branch Distribution", x=0.5),
        height=300,
        margin=dict(t=50, b=40, l=40, r=20),
        plot_bgcolor="white",
    )
    return fig.to_json()


def overview(records: List[Dict[str, Any]]) -> Dict[str, Any]:
    branch_counts = Counter((r.get("branch") or "Unknown") for r in records)
    track_counts = Counter((r.get("selected_track") or "Unknown") for r in records)
    timestamps = [str(r.get("timestamp")) for r in records if r.get("timestamp")]
    return {
        "total_responses": len(records),
        "latest_response": max(timestamps) if timestamps else None,
        "branch_counts": dict(branch_counts),
        "track_counts": dict(track_counts),
        "branch_chart": create_branch_chart(dict(branch_counts)),
    }


# ==================== PUBLIC RESULTS ====================
def public_results(records: List[Dict[str, Any]], query: str = "") -> List[Dict[str, str]]:
    """Name, roll number and track only, alphabetical by name"""
    rows = [
        {
            "full_name": normalize_name(r.get("full_name", "")),
            "roll_number": str(r.get("roll_number", "")),
            "selected_track": str(r.get("selected_track", "")),
        }
        for r in records
    ]
    query = (query or "").strip().lower()
    if query:
        rows = [r for r in rows if any(query in v.lower() for v in r.values())]
    return sorted(rows, key=lambda r: r["full_name"].lower())
