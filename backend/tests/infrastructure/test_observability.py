"""Structured Logging — JSON formatter surfaces tenant-scoped extras."""

import json
import logging

from teamhub.infrastructure.notifier import LoggingNotifier
from teamhub.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "teamhub.test", logging.INFO, __file__, 1, "Project archived", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_includes_known_extras():
    line = JSONFormatter().format(_record(organization_id="org-1", project_id="p-1"))
    payload = json.loads(line)
    assert payload["message"] == "Project archived"
    assert payload["level"] == "INFO"
    assert payload["organization_id"] == "org-1"
    assert payload["project_id"] == "p-1"


def test_json_skips_absent_and_unknown_extras():
    payload = json.loads(JSONFormatter().format(_record(secret="x")))
    assert "secret" not in payload
    assert "user_id" not in payload


def test_setup_logging_replaces_its_own_handler():
    root = logging.getLogger()
    previous_level = root.level
    try:
        first = setup_logging("DEBUG", "json")
        second = setup_logging("WARNING", "text")

        assert first not in root.handlers
        assert second in root.handlers
        assert not isinstance(second.formatter, JSONFormatter)
        assert root.level == logging.WARNING
    finally:
        root.removeHandler(second)
        root.setLevel(previous_level)


async def test_logging_notifier_names_the_organization(caplog):
    caplog.set_level(logging.INFO, logger="teamhub.infrastructure.notifier")
    notifier = LoggingNotifier()

    await notifier.member_invited("ann@acme.io", "Acme Corp")
    await notifier.member_removed("bob@acme.io", "Acme Corp")

    assert "Member invited: ann@acme.io to Acme Corp" in caplog.text
    assert "Member removed: bob@acme.io from Acme Corp" in caplog.text
    assert [r.event for r in caplog.records] == ["member_invited", "member_removed"]
