"""응답 게이트 테스트 (고정 rng)"""

import pytest

from smart_npcs.core.character.models import Role
from smart_npcs.core.conversation.classifier import classify_message
from smart_npcs.core.conversation.gate import response_probability, should_respond


class TestDeterministicRules:
    def test_mentioned_always_responds(self, character_factory, scripted_rng) -> None:
        aria = character_factory("aria", "Aria", Role.SCHOLAR, sociability=0.0, mood=0.0)
        result = classify_message("Aria?", [aria])
        rng = scripted_rng()

        assert response_probability(aria, result) == 1.0
        assert should_respond(aria, result, rng) is True
        assert rng.draws == 0

    def test_behavior_change_always_responds(self, character_factory, scripted_rng) -> None:
        aria = character_factory("aria", "Aria", Role.SCHOLAR, sociability=0.0)
        result = classify_message("be more cheerful", [aria])
        assert should_respond(aria, result, scripted_rng(), turn_order=[]) is True

    def test_in_turn_order_responds(self, character_factory, scripted_rng) -> None:
        aria = character_factory("aria", "Aria", Role.SCHOLAR, sociability=0.1)
        result = classify_message("nice weather", [aria])
        assert should_respond(aria, result, scripted_rng(), turn_order=[aria]) is True

    def test_off_order_without_question_is_silent(self, character_factory, scripted_rng) -> None:
        aria = character_factory("aria", "Aria", Role.SCHOLAR, sociability=0.95)
        result = classify_message("nice weather", [aria])
        rng = scripted_rng([0.0])

        assert should_respond(aria, result, rng, turn_order=[]) is False
        assert rng.draws == 0


class TestRoomProbability:
    def test_off_order_general_question(self, character_factory, scripted_rng) -> None:
        aria = character_factory("aria", "Aria", Role.SCHOLAR, sociability=0.85)
        result = classify_message("what now?", [aria])

        assert response_probability(aria, result, turn_order=[]) == pytest.approx(0.3)
        assert should_respond(aria, result, scripted_rng([0.29]), turn_order=[]) is True
        assert should_respond(aria, result, scripted_rng([0.3]), turn_order=[]) is False

    def test_off_order_needs_high_sociability(self, character_factory) -> None:
        aria = character_factory("aria", "Aria", Role.SCHOLAR, sociability=0.8)
        result = classify_message("what now?", [aria])
        assert response_probability(aria, result, turn_order=[]) == 0.0


class TestSingleProbability:
    def test_hello_uses_base_probability(self, character_factory, scripted_rng) -> None:
        """'Hello!'은 일반 질문이 아니므로 sociability × mood × 0.3"""
        thor = character_factory("thor", "Thorgar", Role.WARRIOR, sociability=0.9, mood=0.8)
        result = classify_message("Hello!")

        assert response_probability(thor, result) == pytest.approx(0.216)
        assert should_respond(thor, result, scripted_rng([0.2])) is True
        assert should_respond(thor, result, scripted_rng([0.22])) is False

    def test_general_question_with_sociable_character(self, character_factory) -> None:
        thor = character_factory("thor", "Thorgar", Role.WARRIOR, sociability=0.7)
        result = classify_message("how is everyone?")
        assert response_probability(thor, result) == pytest.approx(0.8)

    def test_role_keyword(self, character_factory) -> None:
        mira = character_factory("mira", "Mira", Role.MERCHANT, sociability=0.4, curiosity=0.8)
        result = classify_message("I have gold to spend")
        assert response_probability(mira, result) == pytest.approx(0.6)

    def test_zero_mood_is_silent(self, character_factory, scripted_rng) -> None:
        thor = character_factory("thor", "Thorgar", Role.WARRIOR, sociability=0.9, mood=0.0)
        result = classify_message("Hello!")
        rng = scripted_rng([0.0])

        assert should_respond(thor, result, rng) is False
        assert rng.draws == 0
