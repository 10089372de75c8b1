import re
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

LIST_DELIMITER = ", "

# -------------------------------------------------------
# 1. COLUMN LABELS (question id -> sheet header)
# -------------------------------------------------------
COLUMN_LABELS = {
    "full_name": "Full Name",
    "roll_number": "Roll Number",
    "branch": "Branch",
    "section": "Section",
    "email": "Email",
    "phone": "Phone",
    "why_join": "Why Join",
    "goals": "Goals",
    "prioritization_scenario": "Prioritization",
    "time_commitment": "Commitment",
    "team_failure_experience": "Team Failure",
    "unlimited_resources": "Unlimited Resources",
    "event_experience": "Event Exp",
    "event_experience_details": "Event Details",
    "crisis_management": "Crisis Mgmt",
    "event_success_factors": "Success Factors",
    "selected_track": "Selected Track",

    # Track A
    "tech_skills": "Tech Skills",
    "github_link": "GitHub",
    "linkedin_link": "LinkedIn",
    "portfolio_link_tech": "Portfolio",
    "learning_approach": "Appr. Learning",
    "tech_struggle": "Struggle",
    "tech_blocker": "Blocker",
    "collaboration_style": "Collab Style",
    "tech_explain_simple": "Explain Simple",

    # Track B
    "social_platforms": "Social Platforms",
    "instagram_handle_social": "Insta Handle",
    "linkedin_handle_social": "LinkedIn (Social)",
    "twitter_handle_social": "Twitter Handle",
    "other_socials": "Other Socials",
    "social_analysis": "Social Analysis",
    "social_writing_task": "Writing Task",
    "social_influencers": "Influencers",
    "social_viral_idea": "Viral Idea",
    "social_trend_critique": "Trend Critique",

    # Track C
    "content_type": "Content Type",
    "portfolio_link": "Portfolio Link",
    "content_socials": "Content Socials",
    "creative_process": "Process",
    "design_philosophy": "Philosophy",
    "feedback_handling": "Feedback",
    "tools_familiarity": "Tools",
    "perfect_content": "Perfect Content",

    # Track D
    "cold_outreach_exp": "Cold Outreach",
    "email_writing_exercise": "Email Task",
    "outreach_comfort": "Comfort",
    "sponsorship_strategy": "Strategy",
    "persuasion_task": "Persuasion",

    # Closing
    "culture_fit": "Culture Fit",
    "conflict_resolution": "Conflict",
    "honesty_check": "Honesty",
    "any_questions": "Questions",
}

TIMESTAMP_COLUMN = "Timestamp"
SUBMISSION_ID_COLUMN = "Submission ID"

LABEL_TO_FIELD = {label: field_id for field_id, label in COLUMN_LABELS.items()}
LABEL_TO_FIELD[TIMESTAMP_COLUMN] = "timestamp"
LABEL_TO_FIELD[SUBMISSION_ID_COLUMN] = "submission_id"


# -------------------------------------------------------
# 2. VALUE FLATTENING
# -------------------------------------------------------
def join_values(values: List[Any]) -> str:
    """
    Checkbox answers are stored as one cell. Splitting the cell on the same
    delimiter only recovers the list when no option text contains ", ".
    """
    return LIST_DELIMITER.join(str(v) for v in values)


def split_values(cell: str) -> List[str]:
    if not cell:
        return []
    return cell.split(LIST_DELIMITER)


def flatten_value(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return join_values(list(value))
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, (int, float)):
        return value
    return str(value)


def build_submission_row(
    answers: Dict[str, Any],
    submitted_at: Optional[datetime] = None,
    submission_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Map an answer set onto the sheet's column labels.
    Every known column is present (empty string when unanswered) so the
    header row settles on the full label set after the first submission.
    Keys outside the label table are dropped.
    """
    submitted_at = submitted_at or datetime.now(timezone.utc)
    row: Dict[str, Any] = {
        TIMESTAMP_COLUMN: submitted_at.isoformat(),
        SUBMISSION_ID_COLUMN: submission_id or uuid.uuid4().hex,
    }
    for field_id, label in COLUMN_LABELS.items():
        row[label] = flatten_value(answers.get(field_id))
    return row


# -------------------------------------------------------
# 3. HEADER KEYS
# -------------------------------------------------------
def header_key(label: str) -> str:
    """
    Record key for a sheet header: the question id when the label is known,
    otherwise a snake_case form ("Total Score" -> "total_score").
    """
    label = (label or "").strip()
    if label in LABEL_TO_FIELD:
        return LABEL_TO_FIELD[label]
    return re.sub(r"[^a-z0-9]+", "_", label.lower()).strip("_")


def normalize_name(name: str) -> str:
    """Trim and title-case a person's name for display and sorting"""
    if not name:
        return ""
    words = [word.title() for word in str(name).strip().split() if word.strip()]
    return " ".join(words)
