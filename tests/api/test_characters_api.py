"""캐릭터 API 통합 테스트

TestClient + in-memory SQLite. 대화 테스트는 MockProvider 사용.
"""

import pytest
from fastapi.testclient import TestClient

from smart_npcs.services.ai import MockProvider


def _create(client: TestClient, name="Aria", role="scholar", **extra) -> dict:
    response = client.post("/characters", json={"name": name, "role": role, **extra})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture()
def chat_client(app_factory, scripted_rng):
    """MockProvider + 추첨 0.99 고정 앱"""
    provider = MockProvider(reply="Greetings, traveler.")
    with TestClient(app_factory(provider, rng=scripted_rng())) as tc:
        yield tc, provider


# ── CRUD ─────────────────────────────────────────────────────


class TestCharacterCrud:
    def test_create_with_random_traits(self, client: TestClient) -> None:
        data = _create(client)

        assert data["id"].startswith("npc_")
        assert data["role"] == "scholar"
        assert set(data["traits"]) == {"id", "name", "emotionalWeights", "behavioralTraits"}
        assert data["mood_state"] == "content"
        assert data["personality"]
        assert [a["name"] for a in data["actions"]] == ["Research", "Ancient Knowledge"]

    def test_create_with_partial_traits(self, client: TestClient) -> None:
        data = _create(
            client,
            traits={"behavioral_traits": {"sociability": 0.9}},
            current_mood=0.8,
        )
        assert data["traits"]["behavioralTraits"]["sociability"] == 0.9
        assert data["traits"]["behavioralTraits"]["energy"] == 0.5
        assert data["current_mood"] == 0.8

    def test_create_validation(self, client: TestClient) -> None:
        assert client.post("/characters", json={"name": "", "role": "scholar"}).status_code == 422
        response = client.post(
            "/characters", json={"name": "Aria", "role": "scholar", "current_mood": 1.5}
        )
        assert response.status_code == 422

    def test_unknown_role(self, client: TestClient) -> None:
        response = client.post("/characters", json={"name": "Aria", "role": "bard"})
        assert response.status_code == 400

    def test_list_get_update_delete(self, client: TestClient) -> None:
        aria = _create(client)
        thor = _create(client, name="Thorgar", role="warrior")

        assert client.get("/characters").json()["total"] == 2

        response = client.put(
            f"/characters/{aria['id']}",
            json={"name": "Aria the Wise", "traits": {"emotional_weights": {"anger": 0.1}}},
        )
        assert response.status_code == 200
        updated = response.json()
        assert updated["name"] == "Aria the Wise"
        assert updated["traits"]["emotionalWeights"]["anger"] == 0.1
        assert updated["role"] == "scholar"

        assert client.delete(f"/characters/{thor['id']}").status_code == 200
        assert client.get("/characters").json()["total"] == 1
        listed = client.get("/characters", params={"include_inactive": True}).json()
        assert listed["total"] == 2
        assert client.get(f"/characters/{thor['id']}").json()["is_active"] is False

    def test_missing_character(self, client: TestClient) -> None:
        assert client.get("/characters/missing").status_code == 404
        assert client.put("/characters/missing", json={"name": "x"}).status_code == 404
        assert client.delete("/characters/missing").status_code == 404


# ── 상태 ─────────────────────────────────────────────────────


class TestCharacterStatus:
    def test_single_status(self, client: TestClient) -> None:
        aria = _create(client, current_mood=0.8)
        data = client.get(f"/characters/{aria['id']}/status").json()

        assert data["character_id"] == aria["id"]
        assert data["mood_level"] == "high"
        assert data["is_in_conversation"] is False
        assert data["activity"]["activity"]

    def test_all_statuses(self, client: TestClient) -> None:
        _create(client, current_mood=0.1)
        _create(client, name="Thorgar", role="warrior", current_mood=0.5)

        data = client.get("/characters/status").json()
        assert len(data["statuses"]) == 2
        assert data["summary"]["total_characters"] == 2
        assert data["summary"]["mood_breakdown"] == {"low": 1, "medium": 1}

    def test_update_status(self, client: TestClient) -> None:
        aria = _create(client)
        response = client.put(f"/characters/{aria['id']}/status", json={"mood": 0.2})

        assert response.status_code == 200
        assert response.json()["mood"] == 0.2
        assert client.get(f"/characters/{aria['id']}").json()["current_mood"] == 0.2
        assert client.put("/characters/missing/status", json={"mood": 0.2}).status_code == 404


# ── 1:1 대화 ─────────────────────────────────────────────────


class TestDirectChat:
    def test_mentioned_character_replies(self, chat_client) -> None:
        client, provider = chat_client
        aria = _create(client)

        response = client.post(f"/characters/{aria['id']}/chat", json={"message": "Aria, hello"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["user_message"]["message_order"] == 1
        assert data["user_message"]["character_id"] is None
        assert data["outcomes"][0]["spoken"] is True
        assert data["outcomes"][0]["source"] == "llm"
        assert data["replies"][0]["content"] == "Greetings, traveler."
        assert data["replies"][0]["message_order"] == 2
        assert provider.calls[0]["prompt"] == "Aria, hello"

    def test_history(self, chat_client) -> None:
        client, _ = chat_client
        aria = _create(client)
        sent = client.post(
            f"/characters/{aria['id']}/chat", json={"message": "Aria, hello"}
        ).json()

        data = client.get(f"/characters/{aria['id']}/chat").json()
        assert data["conversation_id"] == sent["conversation_id"]
        assert [m["message_order"] for m in data["messages"]] == [1, 2]
        assert data["has_more"] is False

    def test_template_reply_without_provider(self, client: TestClient) -> None:
        aria = _create(client)
        data = client.post(
            f"/characters/{aria['id']}/chat", json={"message": "Aria, hello"}
        ).json()
        assert data["outcomes"][0]["source"] == "template"
        assert data["replies"][0]["content"]

    def test_chat_errors(self, chat_client) -> None:
        client, provider = chat_client
        aria = _create(client)

        assert client.post("/characters/missing/chat", json={"message": "hi"}).status_code == 404
        assert client.post(f"/characters/{aria['id']}/chat", json={"message": ""}).status_code == 422

        client.delete(f"/characters/{aria['id']}")
        response = client.post(f"/characters/{aria['id']}/chat", json={"message": "Aria?"})
        assert response.status_code == 400
        assert provider.calls == []
