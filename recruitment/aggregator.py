"""
Candidate aggregation: primary responses left-joined with per-track score tabs
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from recruitment.errors import IntakeError
from recruitment.processor import header_key
from recruitment.sheets import match_tab

logger = logging.getLogger(__name__)

IDENTITY_FIELDS = [
    "timestamp",
    "full_name",
    "roll_number",
    "branch",
    "section",
    "selected_track",
    "email",
    "phone",
]

SCORE_TRACKS = ["tech", "social", "content", "outreach", "core"]

# Checked in order; the first one present in a score tab's header wins
SCORE_COLUMNS = ["total_score", "score", "total"]


def score_field(track: str) -> str:
    return f"{track}_response_score"


def _keyed(record: Dict[str, Any]) -> Dict[str, Any]:
    return {header_key(label): value for label, value in record.items()}


def _score_tab(tabs: List[Any], keyword: str):
    # The primary tab (index 0) is never a score tab
    return match_tab(tabs[1:], keyword)


def build_score_lookup(records: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """
    roll_number -> score for one track. Later rows for the same candidate
    overwrite earlier ones (re-evaluation wins).
    """
    lookup: Dict[str, Any] = {}
    for record in records:
        keyed = _keyed(record)
        roll = str(keyed.get("roll_number", "")).strip()
        if not roll:
            continue
        score = None
        for column in SCORE_COLUMNS:
            if column in keyed and str(keyed[column]).strip() != "":
                score = keyed[column]
                break
        if score is not None:
            lookup[roll] = score
    return lookup


def read_score_lookup(tabs: List[Any], track: str) -> Dict[str, Any]:
    """Score lookup for one track; any problem degrades to an empty lookup"""
    tab = _score_tab(tabs, track)
    if tab is None:
        logger.info("📭 No score tab for '%s'", track)
        return {}
    try:
        if not tab.get_header():
            logger.warning("⚠️ Score tab '%s' has no header row; skipping", tab.title)
            return {}
        return build_score_lookup(tab.get_records())
    except IntakeError as e:
        logger.warning("⚠️ Could not read score tab '%s': %s", tab.title, e)
        return {}


def build_candidate(record: Dict[str, Any], lookups: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    keyed = _keyed(record)
    candidate: Dict[str, Any] = {field: keyed.get(field, "") for field in IDENTITY_FIELDS}

    roll = str(candidate.get("roll_number", "")).strip()
    for track, lookup in lookups.items():
        candidate[score_field(track)] = lookup.get(roll)

    # Open-ended answers pass through untouched so new questions need no code here
    for key, value in keyed.items():
        if not key or key in candidate:
            continue
        if value is None or str(value).strip() == "":
            continue
        candidate[key] = value
    return candidate


def aggregate_candidates(store, tracks: Optional[List[str]] = None) -> List[Dict[str, Any]]:
    """
    Read the primary tab and every configured score tab and merge them by
    roll number. Rows come back in sheet (append) order.
    """
    tracks = SCORE_TRACKS if tracks is None else tracks
    tabs = store.worksheets()
    if not tabs:
        return []

    primary = tabs[0]
    if not primary.get_header():
        logger.info("📭 Primary tab '%s' has no headers yet", primary.title)
        return []
    records = primary.get_records()

    lookups = {track: read_score_lookup(tabs, track) for track in tracks}
    candidates = [build_candidate(record, lookups) for record in records]
    logger.info("🔍 Aggregated %d candidates across %d score tabs", len(candidates), len(tracks))
    return candidates
