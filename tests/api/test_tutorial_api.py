"""API tests for /api/v1/tutorial."""

import pytest
from httpx import AsyncClient

from app.infrastructure.cache import InMemoryKeyValueStore
from tests.conftest import FakeIdentityProvider, bearer
from tests.factories import PRINCIPAL_ID, make_principal

pytestmark = pytest.mark.usefixtures("api_overrides")

URL = "/api/v1/tutorial"


@pytest.fixture(autouse=True)
def signed_in(identity: FakeIdentityProvider) -> None:
    identity.principals["t1"] = make_principal()
    identity.principals["t2"] = make_principal(principal_id="user_other", email="o@x.example")


async def test_initial_state(client: AsyncClient) -> None:
    response = await client.get(URL, headers=bearer("t1"))
    assert response.status_code == 200
    assert response.json() == {
        "current_step": "welcome",
        "step_index": 0,
        "total_steps": 10,
        "is_active": False,
        "has_completed_tutorial": False,
    }


async def test_actions_persist_per_principal(
    client: AsyncClient, kv_store: InMemoryKeyValueStore
) -> None:
    await client.post(f"{URL}/actions", json={"type": "start"}, headers=bearer("t1"))
    response = await client.post(f"{URL}/actions", json={"type": "next"}, headers=bearer("t1"))

    assert response.json()["current_step"] == "dashboard-overview"
    assert (await client.get(URL, headers=bearer("t1"))).json()["step_index"] == 1
    assert (await client.get(URL, headers=bearer("t2"))).json()["step_index"] == 0
    stored = await kv_store.get(f"filmtech-tutorial-storage:{PRINCIPAL_ID}")
    assert stored["state"]["currentStep"] == "dashboard-overview"


async def test_set_step(client: AsyncClient) -> None:
    response = await client.post(
        f"{URL}/actions", json={"type": "set_step", "step": "service-price"}, headers=bearer("t1")
    )
    assert response.json()["step_index"] == 6


async def test_set_step_requires_step(client: AsyncClient) -> None:
    response = await client.post(
        f"{URL}/actions", json={"type": "set_step"}, headers=bearer("t1")
    )
    assert response.status_code == 422


async def test_set_step_rejects_unknown_step(client: AsyncClient) -> None:
    response = await client.post(
        f"{URL}/actions", json={"type": "set_step", "step": "billing"}, headers=bearer("t1")
    )
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "step"}


async def test_complete_then_reset(client: AsyncClient) -> None:
    completed = await client.post(
        f"{URL}/actions", json={"type": "complete"}, headers=bearer("t1")
    )
    assert completed.json()["current_step"] == "complete"
    assert completed.json()["has_completed_tutorial"] is True

    reset = await client.delete(URL, headers=bearer("t1"))

    assert reset.status_code == 204
    assert (await client.get(URL, headers=bearer("t1"))).json()["has_completed_tutorial"] is False


async def test_requires_session(client: AsyncClient) -> None:
    response = await client.get(URL)
    assert response.status_code == 401
