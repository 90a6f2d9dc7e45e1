"""룸 API 통합 테스트

룸 생성/멤버 관리/턴 진행/이력 조회.
"""

import pytest
from fastapi.testclient import TestClient

from smart_npcs.services.ai import MockProvider


def _character(client: TestClient, name: str, role: str, sociability: float = 0.5) -> str:
    response = client.post(
        "/characters",
        json={
            "name": name,
            "role": role,
            "traits": {"behavioral_traits": {"sociability": sociability}},
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


@pytest.fixture()
def room_client(app_factory, scripted_rng):
    """MockProvider 앱 + 캐릭터 2명"""
    provider = MockProvider(reply="Well met.")
    with TestClient(app_factory(provider, rng=scripted_rng())) as tc:
        aria = _character(tc, "Aria", "scholar", 0.7)
        thor = _character(tc, "Thorgar", "warrior", 0.6)
        yield tc, provider, aria, thor


def _room(client: TestClient, *character_ids: str, **extra) -> dict:
    response = client.post(
        "/rooms", json={"title": "Tavern", "character_ids": list(character_ids), **extra}
    )
    assert response.status_code == 201, response.text
    return response.json()


# ── 룸 ───────────────────────────────────────────────────────


class TestRooms:
    def test_create_with_members(self, room_client) -> None:
        client, _, aria, thor = room_client
        room = _room(client, aria, thor, metadata={"theme": "inn"})

        assert room["id"].startswith("room_")
        assert room["member_count"] == 2
        assert [m["name"] for m in room["members"]] == ["Aria", "Thorgar"]
        assert room["metadata"] == {"theme": "inn"}

        assert client.get(f"/rooms/{room['id']}").json()["title"] == "Tavern"
        assert client.get("/rooms").json()["total"] == 1

    def test_create_with_unknown_character(self, room_client) -> None:
        client = room_client[0]
        response = client.post("/rooms", json={"title": "Tavern", "character_ids": ["missing"]})
        assert response.status_code == 404

    def test_update_and_soft_delete(self, room_client) -> None:
        client = room_client[0]
        room = _room(client)

        updated = client.put(f"/rooms/{room['id']}", json={"title": "Cellar"}).json()
        assert updated["title"] == "Cellar"

        assert client.delete(f"/rooms/{room['id']}").status_code == 200
        assert client.get("/rooms").json()["total"] == 0
        assert client.get(f"/rooms/{room['id']}").json()["is_active"] is False

    def test_hard_delete(self, room_client) -> None:
        client, _, aria, _ = room_client
        room = _room(client, aria)
        client.post(f"/rooms/{room['id']}/chat", json={"message": "hello"})

        response = client.delete(f"/rooms/{room['id']}", params={"hard": True})
        assert response.status_code == 200
        assert client.get(f"/rooms/{room['id']}").status_code == 404

    def test_missing_room(self, room_client) -> None:
        client = room_client[0]
        assert client.get("/rooms/missing").status_code == 404
        assert client.delete("/rooms/missing").status_code == 404
        assert client.get("/rooms/missing/members").status_code == 404
        assert client.post("/rooms/missing/chat", json={"message": "hi"}).status_code == 404


# ── 멤버 ─────────────────────────────────────────────────────


class TestMembers:
    def test_add_list_remove(self, room_client) -> None:
        client, _, aria, _ = room_client
        room = _room(client)

        response = client.post(f"/rooms/{room['id']}/members", json={"character_id": aria})
        assert response.status_code == 201
        assert response.json()["member_role"] == "member"

        members = client.get(f"/rooms/{room['id']}/members").json()
        assert [m["character_id"] for m in members] == [aria]

        assert client.delete(f"/rooms/{room['id']}/members/{aria}").status_code == 200
        assert client.get(f"/rooms/{room['id']}/members").json() == []
        assert client.delete(f"/rooms/{room['id']}/members/{aria}").status_code == 404

    def test_duplicate_member_conflict(self, room_client) -> None:
        client, _, aria, _ = room_client
        room = _room(client, aria)
        response = client.post(f"/rooms/{room['id']}/members", json={"character_id": aria})
        assert response.status_code == 409

    def test_full_room_conflict(self, room_client) -> None:
        client, _, aria, thor = room_client
        room = _room(client, aria, max_members=1)
        response = client.post(f"/rooms/{room['id']}/members", json={"character_id": thor})
        assert response.status_code == 409

    def test_closed_room(self, room_client) -> None:
        client, _, aria, _ = room_client
        room = _room(client)
        client.delete(f"/rooms/{room['id']}")
        response = client.post(f"/rooms/{room['id']}/members", json={"character_id": aria})
        assert response.status_code == 400


# ── 대화 ─────────────────────────────────────────────────────


class TestRoomChat:
    def test_turn_replies_in_order(self, room_client) -> None:
        client, provider, aria, thor = room_client
        room = _room(client, thor, aria)

        response = client.post(
            f"/rooms/{room['id']}/chat",
            json={"message": "Aria and Thorgar, please resolve this fight"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["user_message"]["message_order"] == 1
        assert [m["character_name"] for m in data["replies"]] == ["Aria", "Thorgar"]
        assert [m["message_order"] for m in data["replies"]] == [2, 3]
        assert [o["character_id"] for o in data["outcomes"]] == [aria, thor]
        assert len(provider.calls) == 2

    def test_post_as_member_skips_turn(self, room_client) -> None:
        client, provider, aria, thor = room_client
        room = _room(client, aria)

        response = client.post(
            f"/rooms/{room['id']}/chat",
            json={"message": "I have arrived.", "character_id": aria},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["character_id"] == aria
        assert data["message_order"] == 1
        assert provider.calls == []

        response = client.post(
            f"/rooms/{room['id']}/chat",
            json={"message": "Me too.", "character_id": thor},
        )
        assert response.status_code == 400

    def test_unknown_message_type(self, room_client) -> None:
        client, _, aria, _ = room_client
        room = _room(client, aria)
        response = client.post(
            f"/rooms/{room['id']}/chat",
            json={"message": "x", "character_id": aria, "message_type": "shout"},
        )
        assert response.status_code == 400

    def test_closed_room_rejects_messages(self, room_client) -> None:
        client, _, aria, _ = room_client
        room = _room(client, aria)
        client.delete(f"/rooms/{room['id']}")
        response = client.post(f"/rooms/{room['id']}/chat", json={"message": "hello"})
        assert response.status_code == 400

    def test_history_paging(self, room_client) -> None:
        client, _, aria, _ = room_client
        room = _room(client, aria)
        for i in range(3):
            client.post(
                f"/rooms/{room['id']}/chat",
                json={"message": f"line {i}", "character_id": aria},
            )

        data = client.get(f"/rooms/{room['id']}/chat", params={"limit": 2}).json()
        assert [m["content"] for m in data["messages"]] == ["line 1", "line 2"]
        assert data["has_more"] is True

        data = client.get(f"/rooms/{room['id']}/chat", params={"limit": 2, "offset": 2}).json()
        assert [m["content"] for m in data["messages"]] == ["line 0"]
        assert data["has_more"] is False
