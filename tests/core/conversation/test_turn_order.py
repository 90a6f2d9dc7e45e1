"""발화 순서 결정 테스트"""

from smart_npcs.core.character.models import Role
from smart_npcs.core.conversation.classifier import classify_message
from smart_npcs.core.conversation.turn_order import (
    is_mediation_turn,
    resolve_turn_order,
)


def _ids(characters):
    return [c.character_id for c in characters]


class TestMediation:
    def test_mediator_speaks_first(self, character_factory) -> None:
        """중재 요청 + 2명 언급 → scholar가 먼저"""
        aria = character_factory("aria", "Aria", Role.SCHOLAR, sociability=0.7)
        thor = character_factory("thor", "Thorgar", Role.WARRIOR, sociability=0.6)
        present = [thor, aria]

        result = classify_message("Aria and Thorgar, please resolve this fight", present)
        assert is_mediation_turn(result) is True
        assert _ids(resolve_turn_order(result, present)) == ["aria", "thor"]

    def test_mediator_beats_higher_sociability(self, character_factory) -> None:
        aria = character_factory("aria", "Aria", Role.SCHOLAR, sociability=0.2)
        thor = character_factory("thor", "Thorgar", Role.WARRIOR, sociability=0.9)
        present = [thor, aria]

        result = classify_message("Thorgar, Aria, stop this fight", present)
        assert _ids(resolve_turn_order(result, present)) == ["aria", "thor"]

    def test_non_mediators_by_sociability(self, character_factory) -> None:
        """중재 규칙은 언급되지 않은 캐릭터까지 모두 정렬"""
        aria = character_factory("aria", "Aria", Role.SCHOLAR, sociability=0.1)
        thor = character_factory("thor", "Thorgar", Role.WARRIOR, sociability=0.3)
        mira = character_factory("mira", "Mira", Role.MERCHANT, sociability=0.8)
        present = [thor, mira, aria]

        result = classify_message("Thorgar and Mira, calm down", present)
        assert _ids(resolve_turn_order(result, present)) == ["aria", "mira", "thor"]

    def test_single_mention_is_not_mediation(self, character_factory) -> None:
        thor = character_factory("thor", "Thorgar", Role.WARRIOR)
        result = classify_message("Thorgar, stop the fight", [thor])
        assert is_mediation_turn(result) is False


class TestMentionOrder:
    def test_mention_position_order(self, character_factory) -> None:
        aria = character_factory("aria", "Aria", Role.SCHOLAR)
        thor = character_factory("thor", "Thorgar", Role.WARRIOR)
        present = [aria, thor]

        result = classify_message("Thorgar, what does Aria think?", present)
        assert _ids(resolve_turn_order(result, present)) == ["thor", "aria"]

    def test_sociable_or_curious_extras_follow(self, character_factory) -> None:
        aria = character_factory("aria", "Aria", Role.SCHOLAR)
        thor = character_factory("thor", "Thorgar", Role.WARRIOR, sociability=0.3)
        mira = character_factory("mira", "Mira", Role.MERCHANT, sociability=0.75)
        finn = character_factory("finn", "Finn", Role.ARTISAN, sociability=0.2, curiosity=0.9)
        present = [thor, finn, mira, aria]

        result = classify_message("Aria, how are you?", present)
        order = _ids(resolve_turn_order(result, present))
        assert order == ["aria", "mira", "finn"]
        assert "thor" not in order

    def test_connector_words_include_everyone(self, character_factory) -> None:
        """"all"/"both"로 부르면 비언급 캐릭터도 전원 후보"""
        aria = character_factory("aria", "Aria", Role.SCHOLAR)
        thor = character_factory("thor", "Thorgar", Role.WARRIOR, sociability=0.3)
        mira = character_factory("mira", "Mira", Role.MERCHANT, sociability=0.4)
        present = [thor, mira, aria]

        result = classify_message("Aria, what do you all think?", present)
        assert result.has_connector_words is True
        assert _ids(resolve_turn_order(result, present)) == ["aria", "mira", "thor"]


class TestSocialScoreOrder:
    def test_no_mentions_orders_by_social_score(self, character_factory) -> None:
        aria = character_factory("aria", "Aria", Role.SCHOLAR, sociability=0.2, curiosity=0.2)
        thor = character_factory("thor", "Thorgar", Role.WARRIOR, sociability=0.9, curiosity=0.5)
        present = [aria, thor]

        result = classify_message("Nice weather today", present)
        assert _ids(resolve_turn_order(result, present)) == ["thor", "aria"]

    def test_ties_keep_original_order(self, character_factory) -> None:
        """동점이면 입력 순서 유지"""
        aria = character_factory("aria", "Aria", Role.SCHOLAR, sociability=0.6, curiosity=0.4)
        thor = character_factory("thor", "Thorgar", Role.WARRIOR, sociability=0.4, curiosity=0.6)

        result = classify_message("Nice weather today", [thor, aria])
        assert _ids(resolve_turn_order(result, [thor, aria])) == ["thor", "aria"]
        assert _ids(resolve_turn_order(result, [aria, thor])) == ["aria", "thor"]

    def test_none_entries_skipped(self, character_factory) -> None:
        aria = character_factory("aria", "Aria", Role.SCHOLAR)
        result = classify_message("Nice weather today", [None, aria])
        assert _ids(resolve_turn_order(result, [None, aria])) == ["aria"]

    def test_empty(self) -> None:
        assert resolve_turn_order(classify_message("hi"), []) == []
