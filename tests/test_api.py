# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for the REST API using FastAPI's TestClient."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")

from fastapi.testclient import TestClient  # noqa: E402

from fire_risk_survey.api import check_dependency  # noqa: E402
from fire_risk_survey.api.routes import _default_store  # noqa: E402
from fire_risk_survey.api.server import create_app  # noqa: E402
from fire_risk_survey.data.models import SectorWeights  # noqa: E402
from fire_risk_survey.data.weightings import SectorWeightingStore  # noqa: E402

BUILDING = {
    "id": "B1",
    "name": "Main Block",
    "construction": {
        "walls": {
            "heavy_non_combustible_pct": 60,
            "light_non_combustible_pct": 20,
            "foam_plastic_unapproved_pct": 10,
            "other_combustible_pct": 10,
        },
        "roof_ceiling": {"heavy_non_combustible_pct": 100},
    },
    "floor_area_sqm": 1000,
    "roof_area_sqm": 1000,
}


@pytest.fixture()
def store() -> SectorWeightingStore:
    return SectorWeightingStore.default()


@pytest.fixture()
def client(store: SectorWeightingStore) -> TestClient:
    app = create_app()
    app.dependency_overrides[_default_store] = lambda: store
    return TestClient(app)


class TestCheckDependency:
    def test_present(self):
        check_dependency("json")

    def test_missing(self):
        with pytest.raises(ImportError, match="pip install"):
            check_dependency("definitely_not_a_real_package_xyz")


class TestHealth:
    def test_health(self, client: TestClient, store: SectorWeightingStore):
        resp = client.get("/api/v1/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert body["version"] == "0.1.0"
        assert body["sector_count"] == len(store)


class TestSectors:
    def test_list(self, client: TestClient):
        resp = client.get("/api/v1/sectors")
        assert resp.status_code == 200
        names = [row["sector_name"] for row in resp.json()]
        assert "Default" in names
        assert names == sorted(names)

    def test_single(self, client: TestClient):
        resp = client.get("/api/v1/sectors/Hotel")
        assert resp.status_code == 200
        assert resp.json()["is_custom"] is False

    def test_unknown_sector_404(self, client: TestClient):
        assert client.get("/api/v1/sectors/Nowhere").status_code == 404


class TestCombustibility:
    def test_building(self, client: TestClient):
        resp = client.post("/api/v1/combustibility/building", json=BUILDING)
        assert resp.status_code == 200
        body = resp.json()
        assert body["walls_combustibility"] == 20.0
        assert body["roof_combustibility"] == 0.0
        assert body["combustibility"] == pytest.approx(9.0)
        assert body["warnings"] == []

    def test_building_percentage_warning(self, client: TestClient):
        building = {**BUILDING, "construction": {"walls": {"other_combustible_pct": 40}}}
        resp = client.post("/api/v1/combustibility/building", json=building)
        assert resp.status_code == 200
        assert len(resp.json()["warnings"]) == 2

    def test_building_validation_error(self, client: TestClient):
        resp = client.post("/api/v1/combustibility/building", json={"name": "no id"})
        assert resp.status_code == 422

    def test_site(self, client: TestClient):
        small = {**BUILDING, "id": "B2", "floor_area_sqm": 0, "roof_area_sqm": 0}
        resp = client.post("/api/v1/combustibility/site", json={"buildings": [BUILDING, small]})
        assert resp.status_code == 200
        body = resp.json()
        assert body["site_combustibility"] == pytest.approx(9.0)
        assert body["total_area_sqm"] == 2000
        assert len(body["buildings"]) == 2

    def test_empty_site(self, client: TestClient):
        resp = client.post("/api/v1/combustibility/site", json={"buildings": []})
        assert resp.json()["site_combustibility"] == 0.0


class TestRiskScore:
    SCORES = {
        "construction": 40,
        "fire_protection": 60,
        "detection": 80,
        "management": 70,
        "special_hazards": 90,
        "business_interruption": 50,
    }

    def test_default_sector(self, client: TestClient):
        resp = client.post("/api/v1/risk-score", json={"dimension_scores": self.SCORES})
        assert resp.status_code == 200
        body = resp.json()
        assert body["overall_score"] == pytest.approx(65.0)
        assert body["band"] == "Tolerable"
        assert len(body["contributions"]) == 6
        assert len(body["lowest_contributors"]) == 2

    def test_explicit_weights(self, client: TestClient):
        resp = client.post(
            "/api/v1/risk-score",
            json={"dimension_scores": self.SCORES, "weights": {"construction": 3, "detection": 1}},
        )
        assert resp.json()["overall_score"] == pytest.approx(50.0)

    def test_store_weights_used(self, client: TestClient, store: SectorWeightingStore):
        store.set_weights("Hotel", SectorWeights(detection=1))
        resp = client.post(
            "/api/v1/risk-score", json={"sector": "Hotel", "dimension_scores": self.SCORES}
        )
        assert resp.json()["overall_score"] == pytest.approx(80.0)

    def test_negative_weight_rejected(self, client: TestClient):
        resp = client.post(
            "/api/v1/risk-score",
            json={"dimension_scores": self.SCORES, "weights": {"construction": -1}},
        )
        assert resp.status_code == 422


class TestSurvey:
    def test_demo_survey(self, client: TestClient):
        resp = client.post("/api/v1/survey", json={"seed": 42})
        assert resp.status_code == 200
        body = resp.json()
        assert body["survey"]["id"] == "SRV-000042"
        assert 0 <= body["risk"]["overall_score"] <= 100
        assert body["executive_summary"]

    def test_supplied_survey(self, client: TestClient):
        survey = {
            "id": "SRV-API",
            "name": "API Site",
            "buildings": [BUILDING],
            "dimension_scores": {"construction": 30},
            "ratings": {"FP_09_Management": {"controlHotWork_rating": "Poor"}},
        }
        resp = client.post("/api/v1/survey", json={"survey": survey})
        assert resp.status_code == 200
        body = resp.json()
        titles = [r["title"] for r in body["recommendations"]]
        assert titles[0] == "Reduce Combustible Construction"
        assert "Hot Work Controls" in titles
        assert body["site_combustibility"] == pytest.approx(9.0)

    def test_runner_errors_mapped(self, store: SectorWeightingStore):
        from fire_risk_survey.api.routes import _default_survey_runner

        def failing_runner(request, store):
            raise ValueError("bad survey")

        app = create_app()
        app.dependency_overrides[_default_store] = lambda: store
        app.dependency_overrides[_default_survey_runner] = lambda: failing_runner
        resp = TestClient(app).post("/api/v1/survey", json={})
        assert resp.status_code == 422
        assert resp.json()["detail"] == "bad survey"
