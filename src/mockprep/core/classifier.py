from __future__ import annotations

from mockprep.types import RoleCategory

TECH_KEYWORDS = ("engineer", "developer", "programmer", "technical", "software")
MANAGERIAL_KEYWORDS = ("manager", "lead", "director", "head")
DATA_KEYWORDS = ("data", "scientist", "analyst", "analytics")
DESIGN_KEYWORDS = ("design", "ux", "ui", "creative")

# Priority order matters: the first group with a hit wins.
CATEGORY_KEYWORDS: tuple[tuple[RoleCategory, tuple[str, ...]], ...] = (
    (RoleCategory.TECHNICAL, TECH_KEYWORDS),
    (RoleCategory.MANAGERIAL, MANAGERIAL_KEYWORDS),
    (RoleCategory.DATA, DATA_KEYWORDS),
    (RoleCategory.DESIGN, DESIGN_KEYWORDS),
)

RESUME_ROLE_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Software Engineer", ("software", "developer", "engineer", "programming")),
    ("Product Manager", ("product", "manager", "pm")),
    ("Data Scientist", ("data", "scientist", "analyst", "analytics")),
    ("Designer", ("design", "ux", "ui")),
    ("Marketing Manager", ("marketing", "sales", "business")),
)
DEFAULT_DETECTED_ROLE = "General Professional"

ROLE_SPECIFIC_ROUNDS: dict[str, tuple[str, ...]] = {
    "Software Engineer": ("Technical Screening", "Coding Challenge", "System Design", "Behavioral", "Final Round"),
    "Product Manager": ("Product Sense", "Analytical", "Technical Understanding", "Leadership", "Final Round"),
    "Data Scientist": ("Technical Screening", "Statistics & ML", "Coding", "Case Study", "Final Round"),
    "Designer": ("Portfolio Review", "Design Challenge", "Collaboration", "Presentation", "Final Round"),
    "Marketing Manager": ("Strategy", "Analytics", "Campaign Planning", "Behavioral", "Final Round"),
}


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


def classify_role(role: str) -> RoleCategory:
    value = role.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if _contains_any(value, keywords):
            return category
    return RoleCategory.GENERAL


def category_groups(role: str) -> set[RoleCategory]:
    """Every keyword group the role hits, not just the first one."""
    value = role.lower()
    return {category for category, keywords in CATEGORY_KEYWORDS if _contains_any(value, keywords)}


def suggest_interview_type(role: str) -> str:
    value = role.lower()
    if _contains_any(value, ("engineer", "developer", "programmer")):
        return "Technical"
    if _contains_any(value, ("manager", "lead", "director")):
        return "Behavioral"
    if _contains_any(value, ("designer", "ux", "ui")):
        return "Case Study"
    if _contains_any(value, ("data", "analyst")):
        return "Technical"
    return "HR"


def suggest_difficulty(role: str) -> str:
    value = role.lower()
    if _contains_any(value, ("senior", "lead", "principal", "staff")):
        return "Hard"
    if _contains_any(value, ("junior", "entry", "intern")):
        return "Beginner"
    return "Medium"


def detect_role_from_resume(content: str, file_name: str = "") -> str:
    text = f"{content.lower()} {file_name.lower()}"
    for label, keywords in RESUME_ROLE_KEYWORDS:
        if _contains_any(text, keywords):
            return label
    return DEFAULT_DETECTED_ROLE


def rounds_for_role(role: str) -> list[str]:
    return list(ROLE_SPECIFIC_ROUNDS.get(role, ()))
