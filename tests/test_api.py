from fastapi.testclient import TestClient

from src.main import app

client = TestClient(app)

MAPS = [
    {"team1": "Alpha", "team2": "Beta", "score1": 10, "score2": 5, "map": "dm3", "date": "2024-01-01"},
    {"team1": "Beta", "team2": "Alpha", "score1": 7, "score2": 4, "map": "dm2", "date": "2024-01-02"},
]


def test_health() -> None:
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


def test_insights_endpoint() -> None:
    response = client.post("/api/caster/insights", json={"teamA": "Alpha", "teamB": "Beta", "maps": MAPS})
    assert response.status_code == 200
    insights = response.json()["insights"]
    assert insights[-1] == {
        "type": "history",
        "text": "These teams are perfectly matched: 1 maps each in previous encounters.",
    }


def test_report_endpoint_without_global() -> None:
    response = client.post(
        "/api/caster/report",
        json={"teamA": "Alpha", "teamB": "Beta", "maps": MAPS, "lastN": 3},
    )
    assert response.status_code == 200
    report = response.json()
    assert report["meta"]["form_window"] == 3
    assert report["head_to_head"]["total_maps"] == 2
    assert report["global"] is None


def test_same_team_twice_is_rejected() -> None:
    response = client.post("/api/caster/report", json={"teamA": "Alpha", "teamB": " alpha", "maps": MAPS})
    assert response.status_code == 400
    assert response.json()["detail"]["error"]["code"] == "INVALID_REQUEST"


def test_missing_team_is_a_validation_error() -> None:
    response = client.post("/api/caster/insights", json={"teamA": "Alpha", "maps": MAPS})
    assert response.status_code == 422


class _OfflineAdapter:
    built = 0

    def __init__(self) -> None:
        type(self).built += 1

    @property
    def enabled(self) -> bool:
        return False


def test_stats_adapter_is_built_once_and_only_for_global_reports(monkeypatch) -> None:
    from src.api.rest import routes

    _OfflineAdapter.built = 0
    monkeypatch.setattr(routes, "QWStatsAdapter", _OfflineAdapter)
    monkeypatch.setattr(routes, "_adapter", None)

    local = client.post("/api/caster/report", json={"teamA": "Alpha", "teamB": "Beta", "maps": MAPS})
    assert local.status_code == 200
    assert _OfflineAdapter.built == 0

    for _ in range(2):
        response = client.post(
            "/api/caster/report",
            json={"teamA": "Alpha", "teamB": "Beta", "maps": MAPS, "includeGlobal": True},
        )
        assert response.status_code == 200
        assert response.json()["global"] is None
    assert _OfflineAdapter.built == 1
