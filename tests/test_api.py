"""API tests - the FastAPI app over an in-memory database."""

import httpx
import pytest

from supplier_performance.database import get_db
from supplier_performance.main import app


@pytest.fixture
async def client(session_maker):
    """HTTP client with the database dependency pointed at the test engine."""

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()


EVALUATION_BODY = {
    "supplier_id": 7,
    "evaluator_id": 3,
    "evaluation_date": "2026-03-01",
    "period_start": "2026-01-01",
    "period_end": "2026-03-31",
    "quality_score": 95,
    "delivery_score": 90,
    "price_score": 85,
    "service_score": 92,
    "compliance_score": 88,
}


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_create_and_finalize_evaluation(client):
    response = await client.post("/v1/evaluations", json=EVALUATION_BODY)
    assert response.status_code == 201
    created = response.json()
    assert created["status"] == "draft"
    assert created["overall_score"] == 90.6
    assert created["rating_label"] == "Excellent"
    assert created["weakest_area"] == "Price"
    assert created["strongest_area"] == "Quality"
    assert created["evaluation_reference"].startswith("SPE-")

    response = await client.post(f"/v1/evaluations/{created['id']}/finalize")
    assert response.status_code == 200
    assert response.json()["status"] == "finalized"
    assert response.json()["finalized_at"] is not None

    response = await client.get("/v1/suppliers/7/rating")
    assert response.status_code == 200
    rating = response.json()
    assert rating["current_score"] == 90.6
    assert rating["rating"] == "excellent"
    assert rating["label"] == "Excellent (90+)"
    assert rating["color"] == "green"


async def test_refinalize_conflict(client):
    created = (await client.post("/v1/evaluations", json=EVALUATION_BODY)).json()
    await client.post(f"/v1/evaluations/{created['id']}/finalize")

    response = await client.post(f"/v1/evaluations/{created['id']}/finalize")
    assert response.status_code == 409
    body = response.json()
    assert body["kind"] == "invalid_state_transition"
    assert body["current_status"] == "finalized"
    assert body["attempted_action"] == "finalize"


async def test_validation_errors_are_per_field(client):
    response = await client.post("/v1/evaluations", json={"supplier_id": 7})
    assert response.status_code == 422
    body = response.json()
    assert body["kind"] == "validation_failed"
    assert set(body["errors"]) == {"evaluator_id", "period"}


async def test_unknown_evaluation_is_404(client):
    response = await client.get("/v1/evaluations/404")
    assert response.status_code == 404
    assert response.json()["kind"] == "not_found"
    assert response.json()["entity_id"] == 404


async def test_unrated_supplier_is_404(client):
    response = await client.get("/v1/suppliers/55/rating")
    assert response.status_code == 404


async def test_track_and_list_metrics(client):
    response = await client.post(
        "/v1/metrics",
        json={"supplier_id": 7, "metric_type": "fill_rate", "metric_value": 42, "target_value": 50},
    )
    assert response.status_code == 201
    metric = response.json()
    assert metric["meets_target"] is False
    assert metric["performance_percentage"] == 84.0
    assert metric["period"] == "monthly"

    response = await client.get("/v1/suppliers/7/metrics", params={"metric_type": "fill_rate"})
    assert response.status_code == 200
    assert [m["id"] for m in response.json()] == [metric["id"]]


async def test_list_evaluations_top_and_summary(client):
    created = (await client.post("/v1/evaluations", json=EVALUATION_BODY)).json()
    await client.post(f"/v1/evaluations/{created['id']}/finalize")

    response = await client.get("/v1/suppliers/7/evaluations", params={"limit": 5})
    assert [e["id"] for e in response.json()] == [created["id"]]

    response = await client.get("/v1/ratings/top")
    assert [r["supplier_id"] for r in response.json()] == [7]

    response = await client.get(
        "/v1/suppliers/7/summary",
        params={"period_start": "2026-03-01", "period_end": "2026-03-31"},
    )
    assert response.status_code == 200
    summary = response.json()
    assert summary["scores"]["evaluation_count"] == 1
    assert summary["scores"]["avg_overall"] == pytest.approx(90.6)
    assert summary["current_rating"]["rating"] == "excellent"


async def test_limit_is_bounded(client):
    response = await client.get("/v1/ratings/top", params={"limit": 0})
    assert response.status_code == 422


async def test_metrics_reports_record_counts(client):
    created = (await client.post("/v1/evaluations", json=EVALUATION_BODY)).json()
    await client.post(f"/v1/evaluations/{created['id']}/finalize")
    await client.post("/v1/evaluations", json={**EVALUATION_BODY, "supplier_id": 8})

    response = await client.get("/metrics")
    assert response.status_code == 200
    body = response.json()
    assert body["service"] == "supplier-performance"
    assert body["records"] == {
        "draft_evaluations": 1,
        "finalized_evaluations": 1,
        "metrics": 0,
        "ratings": 1,
    }
