from __future__ import annotations

from core.models import AuditAction
from core.services.auth.session import UserSessionPrincipal
from core.services.project.policy import baseline_lock_mode


def test_audit_record_defaults_actor_from_session(services, project):
    audit = services["audit_service"]

    entry = audit.record(
        action="forecast_updated",
        project_id=project.id,
        metadata={"note": "manual"},
        commit=True,
    )

    assert entry.action == AuditAction.FORECAST_UPDATED
    assert entry.user_id == "owner-1"
    stored = audit.list_recent(project.id, limit=1)[0]
    assert stored.id == entry.id
    assert stored.metadata == {"note": "manual"}


def test_audit_actor_follows_session_changes(services, project):
    user_session = services["user_session"]
    user_session.set_principal(UserSessionPrincipal(user_id="auditor-7", username="auditor"))

    services["cost_service"].add_cost(project.id, 15.0, "Fees")
    assert services["audit_service"].list_recent(project.id, limit=1)[0].user_id == "auditor-7"

    user_session.clear()
    assert not user_session.is_authenticated()
    services["cost_service"].add_cost(project.id, 16.0, "Fees")
    assert services["audit_service"].list_recent(project.id, limit=1)[0].user_id is None


def test_audit_log_is_scoped_per_project(services, project):
    other = services["project_service"].create_project("owner-1", "Elsewhere")
    services["cost_service"].add_cost(other.id, 1.0, "Fees")

    mine = services["audit_service"].list_recent(project.id)
    assert {e.project_id for e in mine} == {project.id}
    assert len(services["audit_service"].list_recent(other.id)) == 2


def test_baseline_lock_mode_falls_back_to_advisory(monkeypatch):
    monkeypatch.setenv("PB_BASELINE_LOCK_MODE", "strict")
    assert baseline_lock_mode() == "advisory"
    monkeypatch.setenv("PB_BASELINE_LOCK_MODE", " Enforced ")
    assert baseline_lock_mode() == "enforced"
