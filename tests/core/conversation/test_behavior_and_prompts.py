"""행동 변경 지시 + 프롬프트 조립 테스트"""

from smart_npcs.core.character.models import CharacterAction, Role
from smart_npcs.core.conversation.behavior import extract_behavior_change, parse_directive
from smart_npcs.core.conversation.classifier import classify_message
from smart_npcs.core.conversation.models import HistoryEntry
from smart_npcs.core.conversation.prompts import (
    build_history_messages,
    build_system_prompt,
    format_actions,
)


class TestDirective:
    def test_parse_directive(self) -> None:
        assert parse_directive("please be more cheerful, okay?") == "Be more cheerful."
        assert parse_directive("act like a pirate!") == "Act like a pirate."
        assert parse_directive("nothing to see") is None

    def test_command_without_target_text(self) -> None:
        assert parse_directive("you should.") is None

    def test_single_context_always_targeted(self, character_factory) -> None:
        aria = character_factory("aria", "Aria", Role.SCHOLAR)
        result = classify_message("Be more cheerful", [aria])
        assert extract_behavior_change(aria, result, is_multi=False) == "Be more cheerful."

    def test_room_requires_name(self, character_factory) -> None:
        aria = character_factory("aria", "Aria", Role.SCHOLAR)
        thor = character_factory("thor", "Thorgar", Role.WARRIOR)
        result = classify_message("Thorgar, be more polite", [aria, thor])

        assert extract_behavior_change(thor, result, is_multi=True) == "Be more polite."
        assert extract_behavior_change(aria, result, is_multi=True) is None

    def test_no_command(self, character_factory) -> None:
        aria = character_factory("aria", "Aria", Role.SCHOLAR)
        result = classify_message("Aria, hello", [aria])
        assert extract_behavior_change(aria, result, is_multi=False) is None


class TestSystemPrompt:
    def test_identity_and_mood(self, character_factory) -> None:
        aria = character_factory("aria", "Aria", Role.SCHOLAR, mood=0.9)
        prompt = build_system_prompt(aria)

        assert "You are Aria, a scholar." in prompt
        assert "- Mood: euphoric" in prompt
        assert "WORLD CONTEXT" not in prompt
        assert "TEMPORARY BEHAVIOR MODIFICATION" not in prompt

    def test_world_context_lists_others(self, character_factory) -> None:
        aria = character_factory("aria", "Aria", Role.SCHOLAR)
        thor = character_factory("thor", "Thorgar", Role.WARRIOR)
        prompt = build_system_prompt(aria, others=[aria, thor])

        assert "Thorgar (warrior)" in prompt
        assert "Aria (scholar)" not in prompt

    def test_behavior_prompt(self, character_factory) -> None:
        aria = character_factory("aria", "Aria", Role.SCHOLAR)
        aria.temporary_behavior_prompt = "Be more formal."

        assert "TEMPORARY BEHAVIOR MODIFICATION: Be more formal." in build_system_prompt(aria)
        prompt = build_system_prompt(aria, behavior_prompt="Be more cheerful.")
        assert "TEMPORARY BEHAVIOR MODIFICATION: Be more cheerful." in prompt

    def test_actions(self) -> None:
        assert format_actions([]) == "No special actions available."
        assert format_actions([CharacterAction("r", "Research", "Dig in")]) == "- Research: Dig in"


class TestHistoryMessages:
    def test_roles_and_window(self) -> None:
        history = [
            HistoryEntry("User", "one"),
            HistoryEntry("Aria", "two", "aria"),
            HistoryEntry("User", "three"),
        ]
        messages = build_history_messages(history, window=2)
        assert messages == [
            {"role": "assistant", "content": "two"},
            {"role": "user", "content": "three"},
        ]

    def test_zero_window(self) -> None:
        assert build_history_messages([HistoryEntry("User", "x")], window=0) == []
