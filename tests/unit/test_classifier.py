from mockprep.core.classifier import (
    DEFAULT_DETECTED_ROLE,
    category_groups,
    classify_role,
    detect_role_from_resume,
    rounds_for_role,
    suggest_difficulty,
    suggest_interview_type,
)
from mockprep.types import RoleCategory


def test_classify_role_uses_keyword_priority() -> None:
    assert classify_role("Senior Software Engineer") is RoleCategory.TECHNICAL
    assert classify_role("Engineering Manager") is RoleCategory.TECHNICAL
    assert classify_role("Product Manager") is RoleCategory.MANAGERIAL
    assert classify_role("Data Scientist") is RoleCategory.DATA
    assert classify_role("Graphic Designer") is RoleCategory.DESIGN
    assert classify_role("Accountant") is RoleCategory.GENERAL


def test_category_groups_reports_every_group_hit() -> None:
    assert category_groups("Data Engineering Lead") == {
        RoleCategory.TECHNICAL,
        RoleCategory.MANAGERIAL,
        RoleCategory.DATA,
    }
    assert category_groups("Accountant") == set()


def test_interview_type_and_difficulty_suggestions() -> None:
    assert suggest_interview_type("Backend Developer") == "Technical"
    assert suggest_interview_type("Marketing Director") == "Behavioral"
    assert suggest_interview_type("UX Designer") == "Case Study"
    assert suggest_interview_type("Accountant") == "HR"
    assert suggest_difficulty("Staff Engineer") == "Hard"
    assert suggest_difficulty("Junior Analyst") == "Beginner"
    assert suggest_difficulty("Analyst") == "Medium"


def test_detect_role_from_resume_content_and_file_name() -> None:
    assert detect_role_from_resume("Built software for payments") == "Software Engineer"
    assert detect_role_from_resume("", "jane_data_resume.pdf") == "Data Scientist"
    assert detect_role_from_resume("Retail associate") == DEFAULT_DETECTED_ROLE


def test_rounds_for_known_and_unknown_roles() -> None:
    assert rounds_for_role("Designer")[0] == "Portfolio Review"
    assert rounds_for_role("Astronaut") == []
