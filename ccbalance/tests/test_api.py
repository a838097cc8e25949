"""
Tests for API layer.

Tests:
- API service methods
- Request/response validation
- HTTP endpoints and error codes
"""

import pytest
from pydantic import ValidationError

from ..api.schemas import (
    ActionRequest,
    CreateMatchRequest,
    ErrorCode,
    ResetCooldownsRequest,
)
from ..api.service import APIService
from ..config import Settings
from ..session import MatchManager, MatchNotFoundError


@pytest.fixture
def service(clock):
    """Create a fresh API service on a fake clock."""
    return APIService(match_manager=MatchManager(clock=clock))


class TestSchemas:
    """Tests for Pydantic request validation."""

    def test_add_species_requires_species(self):
        with pytest.raises(ValidationError):
            ActionRequest(action="add_species")

    def test_heat_rejects_species(self):
        with pytest.raises(ValidationError):
            ActionRequest(action="heat", species="N2")

    def test_unknown_action(self):
        with pytest.raises(ValidationError):
            ActionRequest(action="boil")

    def test_actor_defaults_to_player(self):
        assert ActionRequest(action="cool").actor.value == "player"

    def test_difficulty_lower_bound(self):
        with pytest.raises(ValidationError):
            CreateMatchRequest(level_id="haber", difficulty=0)


class TestAPIService:
    """Tests for APIService."""

    def test_list_levels(self, service):
        response = service.list_levels()
        haber = next(level for level in response.levels if level.level_id == "haber")
        assert haber.container_type == "rigid"
        assert haber.gas_species == ["H2", "N2", "NH3"]

    def test_create_match(self, service):
        response = service.create_match(CreateMatchRequest(level_id="haber", difficulty=3))

        assert response.status == "active"
        assert response.difficulty == 3
        assert response.snapshot.pressure == pytest.approx(101.325)
        assert response.player_cooldowns == []

    def test_execute_and_reject(self, service):
        match = service.create_match(CreateMatchRequest(level_id="haber"))

        first = service.execute(match.match_id, ActionRequest(action="pressurize"))
        second = service.execute(match.match_id, ActionRequest(action="pressurize"))

        assert first.success
        assert first.snapshot.pressure == pytest.approx(151.325)
        assert not second.success
        assert second.reason == "cooling down"
        assert second.snapshot.pressure == pytest.approx(151.325)

    def test_cooldowns_reported(self, service, clock):
        match = service.create_match(CreateMatchRequest(level_id="haber", difficulty=4))
        service.execute(match.match_id, ActionRequest(action="add_species", species="H2"))
        service.execute(match.match_id, ActionRequest(action="heat", actor="ai"))
        clock.advance(1000)

        response = service.get_match(match.match_id)

        assert [(c.control_id, c.remaining_ms) for c in response.player_cooldowns] == [
            ("btn-species-H2", 2000)
        ]
        assert [(c.action, c.remaining_ms) for c in response.ai_cooldowns] == [("heat", 1500)]

    def test_reset_single_actor(self, service):
        match = service.create_match(CreateMatchRequest(level_id="haber"))
        service.execute(match.match_id, ActionRequest(action="heat"))
        service.execute(match.match_id, ActionRequest(action="heat", actor="ai"))

        response = service.reset_cooldowns(match.match_id, ResetCooldownsRequest(actor="player"))

        assert response.player_cooldowns == []
        assert len(response.ai_cooldowns) == 1
        assert response.round_number == 1

    def test_reset_round(self, service):
        match = service.create_match(CreateMatchRequest(level_id="haber"))
        response = service.reset_cooldowns(match.match_id, ResetCooldownsRequest())
        assert response.round_number == 2

    def test_infinite_q_serialized_as_null(self, service):
        match = service.create_match(CreateMatchRequest(level_id="esterification"))
        state = service.match_manager.get_match(match.match_id).state
        state.concentrations["CH3COOH"] = 0.0

        response = service.execute(match.match_id, ActionRequest(action="heat"))

        assert response.snapshot.Q is None
        assert response.snapshot.K is not None

    def test_end_match(self, service):
        match = service.create_match(CreateMatchRequest(level_id="haber"))
        response = service.end_match(match.match_id)
        assert response.status == "abandoned"
        with pytest.raises(MatchNotFoundError):
            service.get_match(match.match_id)

    def test_health(self, service):
        service.create_match(CreateMatchRequest(level_id="haber"))
        assert service.health().active_matches == 1


class TestHTTP:
    """Tests for the FastAPI app."""

    @pytest.fixture
    def client(self, service):
        from fastapi.testclient import TestClient
        from ..api.app import create_app

        return TestClient(create_app(service=service, settings=Settings()))

    def test_health(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_play_flow(self, client):
        created = client.post("/api/v1/matches", json={"level_id": "no2_dimerization"})
        assert created.status_code == 201
        match_id = created.json()["match_id"]

        accepted = client.post(f"/api/v1/matches/{match_id}/actions", json={"action": "depressurize"})
        rejected = client.post(f"/api/v1/matches/{match_id}/actions", json={"action": "depressurize"})

        assert accepted.json()["success"] is True
        assert rejected.status_code == 200
        assert rejected.json() == {
            "success": False,
            "reason": "cooling down",
            "changes": [],
            "snapshot": accepted.json()["snapshot"],
        }

        state = client.get(f"/api/v1/matches/{match_id}").json()
        assert state["player_cooldowns"][0]["control_id"] == "btn-depressurize"

        assert client.post(f"/api/v1/matches/{match_id}/reset-cooldowns").status_code == 200
        assert client.delete(f"/api/v1/matches/{match_id}").json()["status"] == "abandoned"

    def test_match_not_found(self, client):
        response = client.get("/api/v1/matches/missing")
        assert response.status_code == 404
        assert response.json()["error_code"] == ErrorCode.MATCH_NOT_FOUND.value

    def test_unknown_level(self, client):
        response = client.post("/api/v1/matches", json={"level_id": "nope"})
        assert response.status_code == 404
        assert response.json()["error_code"] == ErrorCode.UNKNOWN_LEVEL.value

    def test_validation_error(self, client):
        created = client.post("/api/v1/matches", json={"level_id": "haber"}).json()
        response = client.post(
            f"/api/v1/matches/{created['match_id']}/actions", json={"action": "add_species"}
        )
        assert response.status_code == 422
        assert response.json()["error_code"] == ErrorCode.VALIDATION_ERROR.value
