from mockprep.core.compatibility import is_role_mismatch, roles_compatible
from mockprep.types import RoleCategory


def test_containment_matches_regardless_of_group() -> None:
    assert roles_compatible("Designer", "Senior Designer")
    assert roles_compatible("Marketing Manager", "marketing manager")
    assert roles_compatible("General Professional", "professional")


def test_same_group_matches_without_containment() -> None:
    assert roles_compatible("Software Engineer", "Senior Engineer")
    assert roles_compatible("Data Scientist", "Analytics Lead")


def test_different_groups_mismatch() -> None:
    assert is_role_mismatch("Software Engineer", "Product Manager")
    assert is_role_mismatch("General Professional", "Data Scientist")


def test_accepts_role_category_values() -> None:
    assert roles_compatible(RoleCategory.TECHNICAL, "Technical Writer")
    assert not roles_compatible(RoleCategory.GENERAL, "Product Manager")


def test_blank_role_never_matches() -> None:
    assert not roles_compatible("Software Engineer", "")
    assert not roles_compatible("Software Engineer", "   ")
    assert not roles_compatible("", "Software Engineer")
    assert is_role_mismatch("Designer", " ")
