"""
Per-track evaluation: scoring parameters and the row written to a score tab
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from recruitment.auth import team_key

COMMON_PARAMETERS = [
    "Communication",
    "Passion & Genuine Interest",
    "Commitment & Time Availability",
    "Teamwork & Collaboration",
    "Initiative & Proactiveness",
    "Adaptability & Willingness to Learn",
]

TEAM_PARAMETERS = {
    "technical": ["Code Cleanliness", "Logical Thinking", "Completion", "Problem-Solving Approach"],
    "social": ["Platform Awareness", "Hook Strength", "Hashtag & SEO Strategy", "Tone Matching"],
    "content": ["Creativity & Originality", "Visual Storytelling", "Technical Execution", "Brand Consistency"],
    "outreach": ["Email Quality", "Outreach Plan Logic", "Personalization", "Follow-through Thinking"],
    "core": ["Event Management", "Time Management", "Leadership", "Crisis Management"],
}

INTERVIEW_PARAMETERS = {
    "technical": ["Explain Task", "Debugging Mindset", "Curiosity Beyond Task"],
    "social": ["Consumer vs Student", "Trend Awareness", "Strategy Thinking"],
    "content": ["Design Intentionality", "Taste & References", "Handling Feedback"],
    "outreach": ["On the Spot Pitch", "Handling Rejection", "Real-world Awareness"],
    "core": [],
}

# Score tab keyword per team (the technical tab is matched on "tech")
TAB_KEYWORDS = {
    "technical": "tech",
    "social": "social",
    "content": "content",
    "outreach": "outreach",
    "core": "core",
}


def team_parameters(team: str) -> Dict[str, List[str]]:
    key = team_key(team) or ""
    return {
        "common": list(COMMON_PARAMETERS),
        "specific": list(TEAM_PARAMETERS.get(key, [])),
        "interview": list(INTERVIEW_PARAMETERS.get(key, [])),
    }


def tab_keyword(team: str) -> Optional[str]:
    key = team_key(team)
    return TAB_KEYWORDS.get(key) if key else None


def total_score(scores: Dict[str, Any]) -> Any:
    """Sum of the numeric scores; non-numeric entries are ignored"""
    total = 0.0
    for value in scores.values():
        try:
            total += float(value)
        except (TypeError, ValueError):
            continue
    return int(total) if total.is_integer() else round(total, 2)


def build_evaluation_row(
    candidate: Dict[str, Any],
    scores: Dict[str, Any],
    remarks: str = "",
    evaluator: str = "",
    evaluated_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    evaluated_at = evaluated_at or datetime.now(timezone.utc)
    row: Dict[str, Any] = {
        "Evaluation Timestamp": evaluated_at.isoformat(),
        "Evaluator": evaluator or "Anonymous",
        "Candidate Name": candidate.get("full_name", ""),
        "Roll Number": candidate.get("roll_number", ""),
        "Branch": candidate.get("branch", ""),
        "Remarks": remarks or "",
    }
    for parameter, value in scores.items():
        row[parameter] = value
    row["Total Score"] = total_score(scores)
    return row
