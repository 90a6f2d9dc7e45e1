"""활동 상태 시뮬레이션 테스트"""

from datetime import datetime, timedelta, timezone

import pytest

from smart_npcs.core.character.status import (
    build_status,
    generate_activity,
    status_mood_level,
    summarize_statuses,
)

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


class TestActivity:
    def test_high_mood_is_social(self, character_factory, scripted_rng) -> None:
        c = character_factory(name="Aria", mood=0.9)
        snapshot = generate_activity(c, scripted_rng([0.6]))
        assert snapshot.activity == "socializing"
        assert snapshot.status == "available"
        assert snapshot.description.startswith("Aria")

    def test_mid_mood(self, character_factory, scripted_rng) -> None:
        c = character_factory(mood=0.5)
        snapshot = generate_activity(c, scripted_rng([0.2]))
        assert snapshot.activity == "working"
        assert snapshot.status == "available"

    def test_low_mood(self, character_factory, scripted_rng) -> None:
        c = character_factory(mood=0.2)
        snapshot = generate_activity(c, scripted_rng([0.8]))
        assert snapshot.activity == "reflecting"
        assert snapshot.status == "away"


class TestBuildStatus:
    def test_in_conversation_overrides(self, character_factory, scripted_rng) -> None:
        c = character_factory(mood=0.9)
        status = build_status(
            c,
            scripted_rng([0.6]),
            now=NOW,
            last_seen=NOW - timedelta(minutes=42, seconds=30),
            active_conversations=2,
        )
        assert status.status == "in_conversation"
        assert status.is_in_conversation is True
        assert status.minutes_since_last_activity == 42
        assert status.mood_level == "high"

    def test_mood_levels(self) -> None:
        assert status_mood_level(0.71) == "high"
        assert status_mood_level(0.5) == "medium"
        assert status_mood_level(0.4) == "low"


class TestSummary:
    def test_summary_counts(self, character_factory, scripted_rng) -> None:
        statuses = [
            build_status(character_factory("a", mood=0.9), scripted_rng([0.6]), NOW),
            build_status(
                character_factory("b", mood=0.3, is_active=False),
                scripted_rng([0.1]),
                NOW,
                active_conversations=1,
            ),
        ]
        summary = summarize_statuses(statuses)

        assert summary["total_characters"] == 2
        assert summary["active_characters"] == 1
        assert summary["characters_in_conversation"] == 1
        assert summary["status_breakdown"] == {"available": 1, "in_conversation": 1}
        assert summary["mood_breakdown"] == {"high": 1, "low": 1}
        assert summary["average_mood"] == pytest.approx(0.6)

    def test_empty(self) -> None:
        assert summarize_statuses([])["average_mood"] == 0.0
