from datetime import date, timedelta

import pytest

from helpers import bearer, make_token
from success_tracker.config import RATE_LIMIT_READS, RATE_LIMIT_MUTATIONS
from success_tracker.main import create_app
from success_tracker.services.insight_service import MESSAGES
from success_tracker.services.rate_limiter import RateLimiter

ALICE = bearer("user_alice")
BOB = bearer("user_bob")


def days_ago(n: int) -> str:
    return (date.today() - timedelta(days=n)).isoformat()


def log_day(client, headers=ALICE, **body):
    body.setdefault("outcome", True)
    return client.post("/api/v1/logs", json=body, headers=headers)


def test_requires_bearer_token(client):
    assert client.get("/api/v1/logs").status_code == 401
    assert client.get("/api/v1/logs", headers={"Authorization": "Token abc"}).status_code == 401
    assert client.get("/api/v1/logs", headers={"Authorization": "Bearer not-a-jwt"}).status_code == 401


def test_rejects_expired_token(client):
    token = make_token("user_alice", expires_in=timedelta(minutes=-5))
    resp = client.get("/api/v1/logs", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_log_today_then_relog(client):
    resp = log_day(client, note="good day")
    assert resp.status_code == 201
    assert resp.json()["action"] == "created"
    assert resp.json()["log"]["day"] == date.today().isoformat()

    resp = log_day(client, outcome=False)
    assert resp.status_code == 200
    body = resp.json()
    assert body["action"] == "updated"
    assert body["log"]["outcome"] is False
    assert body["log"]["note"] == "good day"

    logs = client.get("/api/v1/logs", headers=ALICE).json()["logs"]
    assert len(logs) == 1


def test_today_status(client):
    resp = client.get("/api/v1/logs/today", headers=ALICE)
    assert resp.json() == {"has_logged_today": False, "today_log": None}

    log_day(client)
    status = client.get("/api/v1/logs/today", headers=ALICE).json()
    assert status["has_logged_today"] is True
    assert status["today_log"]["outcome"] is True


@pytest.mark.parametrize("day, detail", [
    ("2026/01/01", "Invalid date format"),
    ((date.today() + timedelta(days=1)).isoformat(), "Cannot log future dates"),
    (days_ago(366), "Cannot log dates more than 365 days in the past"),
])
def test_date_policy_errors_are_client_errors(client, day, detail):
    resp = log_day(client, day=day)
    assert resp.status_code == 400
    assert resp.json()["detail"].startswith(detail)


def test_note_length_is_validated(client):
    assert log_day(client, note="x" * 501).status_code == 422
    assert log_day(client, note="x" * 500).status_code == 201


def test_delete_and_restore(client):
    log_id = log_day(client, day=days_ago(1)).json()["log"]["id"]

    resp = client.delete(f"/api/v1/logs/{log_id}", headers=ALICE)
    assert resp.status_code == 200
    assert resp.json()["action"] == "deleted"
    assert resp.json()["log"]["deleted_at"] is not None
    assert client.get("/api/v1/logs", headers=ALICE).json()["logs"] == []

    resp = client.post(f"/api/v1/logs/{log_id}/restore", headers=ALICE)
    assert resp.status_code == 200
    assert resp.json()["action"] == "restored"
    assert len(client.get("/api/v1/logs", headers=ALICE).json()["logs"]) == 1


def test_cannot_touch_another_users_log(client):
    log_id = log_day(client).json()["log"]["id"]

    assert client.delete(f"/api/v1/logs/{log_id}", headers=BOB).status_code == 404
    assert client.post(f"/api/v1/logs/{log_id}/restore", headers=BOB).status_code == 404
    assert client.get("/api/v1/logs", headers=BOB).json()["logs"] == []
    assert len(client.get("/api/v1/logs", headers=ALICE).json()["logs"]) == 1


def test_export(client):
    log_day(client, day=days_ago(2), outcome=False, note="rest day")
    log_day(client)

    doc = client.get("/api/v1/logs/export", headers=ALICE).json()
    assert doc["total_logs"] == 2
    assert [l["day"] for l in doc["logs"]] == [days_ago(0), days_ago(2)]
    assert doc["logs"][1]["note"] == "rest day"


def test_insights(client):
    resp = client.get("/api/v1/insights", headers=ALICE)
    assert resp.status_code == 200
    assert resp.json()["message"] == MESSAGES["ready_to_log"]

    for n in range(3):
        log_day(client, day=days_ago(n))
    summary = client.get("/api/v1/insights", headers=ALICE).json()
    assert summary["current_streak"] == 3
    assert summary["best_streak"] == 3
    assert summary["success_rate"] == 100
    assert summary["message"] == MESSAGES["three_days"]


def test_trend_and_recent(client):
    log_day(client, day=days_ago(1), outcome=False)
    log_day(client)

    trend = client.get("/api/v1/insights/trend?days=7", headers=ALICE).json()
    assert len(trend["points"]) == 7
    assert trend["points"][-1] == {"day": days_ago(0), "win_rate": 50, "wins": 1, "total": 2}

    assert len(client.get("/api/v1/insights/trend", headers=ALICE).json()["points"]) == 30
    assert client.get("/api/v1/insights/trend?days=0", headers=ALICE).status_code == 422

    recent = client.get("/api/v1/insights/recent", headers=ALICE).json()["days"]
    assert [c["outcome"] for c in recent[-2:]] == [False, True]
    assert recent[-1]["is_today"] is True


def test_health(client):
    resp = client.get("/api/v1/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "healthy"
    assert body["checks"]["database"]["status"] == "healthy"


@pytest.mark.parametrize("limits", [{"read": 1000, "mutation": 2}])
def test_mutations_are_rate_limited(client, limits):
    assert log_day(client, day=days_ago(2)).status_code == 201
    assert log_day(client, day=days_ago(1)).status_code == 201

    resp = log_day(client)
    assert resp.status_code == 429
    assert int(resp.headers["Retry-After"]) >= 1

    # Limits are per user
    assert log_day(client, headers=BOB).status_code == 201
    # Reads have their own budget
    assert client.get("/api/v1/logs", headers=ALICE).status_code == 200


def test_create_app_keeps_injected_limiters():
    reads, mutations = RateLimiter(60, 5), RateLimiter(60, 2)
    application = create_app(read_limiter=reads, mutation_limiter=mutations)
    assert application.state.read_limiter is reads
    assert application.state.mutation_limiter is mutations


def test_create_app_builds_default_limiters():
    application = create_app()
    assert application.state.read_limiter.max_requests == RATE_LIMIT_READS
    assert application.state.mutation_limiter.max_requests == RATE_LIMIT_MUTATIONS
