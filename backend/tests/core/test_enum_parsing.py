"""Domain enums — name-based parsing used by every service."""

from teamhub.core.domain_types import (
    ProjectStatus, Role, TaskPriority, TaskStatus, parse_enum,
)


def test_parse_known_names():
    assert parse_enum(Role, "ADMIN") is Role.ADMIN
    assert parse_enum(TaskStatus, "IN_REVIEW") is TaskStatus.IN_REVIEW
    assert parse_enum(TaskPriority, "URGENT") is TaskPriority.URGENT


def test_parse_is_case_sensitive():
    assert parse_enum(Role, "admin") is None


def test_parse_unknown_or_missing():
    assert parse_enum(ProjectStatus, "DELETED") is None
    assert parse_enum(ProjectStatus, None) is None


def test_values_equal_names():
    for enum_cls in (Role, ProjectStatus, TaskStatus, TaskPriority):
        for member in enum_cls:
            assert member.value == member.name
