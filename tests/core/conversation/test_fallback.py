"""템플릿 응답 합성 + 기분 변화 테스트"""

import pytest

from smart_npcs.core.character.models import Role
from smart_npcs.core.conversation.classifier import classify_message
from smart_npcs.core.conversation.fallback import (
    add_emotional_coloring,
    add_personality_flavor,
    add_role_element,
    calculate_mood_delta,
    compose_fallback_response,
    determine_response_emotion,
    main_content,
)
from smart_npcs.core.conversation.models import HistoryEntry, ReplySource
from smart_npcs.core.conversation.templates import (
    CONTINUITY_LINES,
    EMOTIONAL_PREFIXES,
    FAREWELL_LINES,
    GREETINGS,
    NEGATIVE_LINES,
    PERSONALITY_MODIFIERS,
    QUESTION_OPENERS,
    ROLE_ELEMENTS,
    THOUGHTFUL_LINES,
    TOPIC_ELABORATIONS,
    role_lines,
)


# ── 조립 ─────────────────────────────────────────────────────


class TestCompose:
    def test_greeting_only_without_history(self, character_factory, scripted_rng) -> None:
        aria = character_factory("aria", "Aria", Role.SCHOLAR)
        result = classify_message("Hello, what do you study?")

        reply = compose_fallback_response(aria, result, [], scripted_rng())
        assert reply.text.startswith(GREETINGS[Role.SCHOLAR][0])
        assert QUESTION_OPENERS[Role.SCHOLAR][0] in reply.text
        assert reply.source == ReplySource.TEMPLATE

        history = [HistoryEntry("User", "hi")]
        reply = compose_fallback_response(aria, result, history, scripted_rng())
        assert not reply.text.startswith(GREETINGS[Role.SCHOLAR][0])
        assert reply.text.startswith(QUESTION_OPENERS[Role.SCHOLAR][0])

    def test_short_reply_gets_continuity_line(self, character_factory, scripted_rng) -> None:
        thor = character_factory("thor", "Thorgar", Role.WARRIOR)
        result = classify_message("Nice weather today")

        reply = compose_fallback_response(thor, result, [], scripted_rng())
        content = THOUGHTFUL_LINES[Role.WARRIOR][0]
        if len(content.split()) < 15:
            assert reply.text == f"{content} {CONTINUITY_LINES[Role.WARRIOR][0]}"
        else:
            assert reply.text == content

    def test_farewell_closes_with_farewell_line(self, character_factory, scripted_rng) -> None:
        thor = character_factory("thor", "Thorgar", Role.WARRIOR)
        result = classify_message("Goodbye, old friend")

        reply = compose_fallback_response(thor, result, [], scripted_rng())
        assert reply.text.endswith(FAREWELL_LINES[Role.WARRIOR][0])
        assert CONTINUITY_LINES[Role.WARRIOR][0] not in reply.text

    def test_complex_question_gets_topic_elaboration(
        self, character_factory, scripted_rng
    ) -> None:
        thor = character_factory("thor", "Thorgar", Role.WARRIOR)
        result = classify_message("How do you prepare yourself before a long battle in the mountains?")
        assert result.complexity == "complex"

        text = main_content(thor, result, scripted_rng())
        assert text == (
            f"{QUESTION_OPENERS[Role.WARRIOR][0]} {TOPIC_ELABORATIONS[Role.WARRIOR]['combat']}"
        )

    def test_simple_question_has_no_elaboration(self, character_factory, scripted_rng) -> None:
        thor = character_factory("thor", "Thorgar", Role.WARRIOR)
        result = classify_message("Any battle today?")
        assert main_content(thor, result, scripted_rng()) == QUESTION_OPENERS[Role.WARRIOR][0]

    def test_topic_without_role_match_has_no_elaboration(
        self, character_factory, scripted_rng
    ) -> None:
        mira = character_factory("mira", "Mira", Role.MERCHANT)
        result = classify_message("How do you prepare yourself before a long battle in the mountains?")
        assert main_content(mira, result, scripted_rng()) == QUESTION_OPENERS[Role.MERCHANT][0]

    def test_role_element_in_composed_reply(self, character_factory, scripted_rng) -> None:
        thor = character_factory("thor", "Thorgar", Role.WARRIOR)
        result = classify_message("Nice weather today")

        reply = compose_fallback_response(thor, result, [], scripted_rng([0.1]))
        assert reply.text.startswith(f"{ROLE_ELEMENTS[Role.WARRIOR][0]}, ")

    def test_unknown_role_table_falls_back_to_wanderer(self) -> None:
        assert role_lines({Role.WANDERER: ("x",)}, Role.GUARDIAN) == ("x",)

    def test_question_beats_negative(self, character_factory, scripted_rng) -> None:
        thor = character_factory("thor", "Thorgar", Role.WARRIOR)
        result = classify_message("Why are you so sad?")
        assert main_content(thor, result, scripted_rng()) == QUESTION_OPENERS[Role.WARRIOR][0]

    def test_negative_line(self, character_factory, scripted_rng) -> None:
        thor = character_factory("thor", "Thorgar", Role.WARRIOR)
        result = classify_message("This day was terrible")
        assert main_content(thor, result, scripted_rng()) == NEGATIVE_LINES[Role.WARRIOR][0]

    def test_philosophical_opener_depends_on_intelligence(
        self, character_factory, scripted_rng
    ) -> None:
        smart = character_factory("a", "Aria", Role.SCHOLAR, intelligence=0.9)
        plain = character_factory("b", "Bran", Role.SCHOLAR, intelligence=0.3)
        result = classify_message("The meaning of existence")

        smart_text = main_content(smart, result, scripted_rng())
        plain_text = main_content(plain, result, scripted_rng())
        assert smart_text != plain_text
        assert "As a scholar" in smart_text


class TestDecoration:
    def test_flavor_applies_on_low_draw(self, character_factory, scripted_rng) -> None:
        thor = character_factory("thor", "Thorgar", Role.WARRIOR, energy=0.9)
        text = add_personality_flavor("Steel is honest.", thor, scripted_rng([0.1]))
        assert text == f"{PERSONALITY_MODIFIERS[Role.WARRIOR][0]} steel is honest."

    def test_flavor_skipped_on_high_draw(self, character_factory, scripted_rng) -> None:
        thor = character_factory("thor", "Thorgar", Role.WARRIOR, energy=0.9)
        assert add_personality_flavor("Steel.", thor, scripted_rng([0.5])) == "Steel."

    def test_flavor_needs_strong_trait(self, character_factory, scripted_rng) -> None:
        thor = character_factory("thor", "Thorgar", Role.WARRIOR)
        rng = scripted_rng([0.0])
        assert add_personality_flavor("Steel.", thor, rng) == "Steel."
        assert rng.draws == 0

    def test_emotional_coloring(self, character_factory, scripted_rng) -> None:
        thor = character_factory("thor", "Thorgar", Role.WARRIOR, happiness=0.9)
        text = add_emotional_coloring("Steel is honest.", thor, scripted_rng([0.1]))
        assert text == f"{EMOTIONAL_PREFIXES['happiness'][0]} steel is honest."

    def test_emotion_without_prefixes_is_plain(self, character_factory, scripted_rng) -> None:
        thor = character_factory("thor", "Thorgar", Role.WARRIOR, fear=0.95)
        assert add_emotional_coloring("Steel.", thor, scripted_rng([0.0])) == "Steel."

    def test_role_element_on_low_draw(self, character_factory, scripted_rng) -> None:
        aria = character_factory("aria", "Aria", Role.SCHOLAR)
        text = add_role_element("Stars guide us.", aria, scripted_rng([0.1]))
        assert text == f"{ROLE_ELEMENTS[Role.SCHOLAR][0]}, stars guide us."

    def test_role_element_skipped_on_high_draw(self, character_factory, scripted_rng) -> None:
        aria = character_factory("aria", "Aria", Role.SCHOLAR)
        assert add_role_element("Stars.", aria, scripted_rng([0.51])) == "Stars."
        assert add_role_element("Stars.", aria, scripted_rng([0.5])) != "Stars."


# ── 기분 / 감정 ──────────────────────────────────────────────


class TestMoodDelta:
    def test_positive_message(self, character_factory) -> None:
        thor = character_factory("thor", "Thorgar", Role.WARRIOR)
        # is_positive +0.05, sentiment positive +0.02
        delta = calculate_mood_delta(thor, classify_message("What a wonderful day"))
        assert delta == pytest.approx(0.07)

    def test_happy_character_amplified_and_clamped(self, character_factory) -> None:
        thor = character_factory("thor", "Thorgar", Role.WARRIOR, happiness=0.8, sociability=0.7)
        # (0.05 + 0.02 + 0.02) × 1.5 = 0.135 → 0.1
        delta = calculate_mood_delta(thor, classify_message("I love you, wonderful friend"))
        assert delta == pytest.approx(0.1)

    def test_negative_message(self, character_factory) -> None:
        thor = character_factory("thor", "Thorgar", Role.WARRIOR)
        delta = calculate_mood_delta(thor, classify_message("That was terrible"))
        assert delta == pytest.approx(-0.05)

    def test_sad_character_amplified(self, character_factory) -> None:
        thor = character_factory("thor", "Thorgar", Role.WARRIOR, sadness=0.9)
        delta = calculate_mood_delta(thor, classify_message("That was terrible"))
        assert delta == pytest.approx(-0.075)

    def test_neutral_message(self, character_factory) -> None:
        thor = character_factory("thor", "Thorgar", Role.WARRIOR)
        assert calculate_mood_delta(thor, classify_message("The road goes north")) == 0.0


class TestResponseEmotion:
    def test_positive_is_happy(self, character_factory) -> None:
        thor = character_factory("thor", "Thorgar", Role.WARRIOR, mood=0.5)
        assert determine_response_emotion(thor, classify_message("great news")) == "happy"

    def test_negative_depends_on_mood(self, character_factory) -> None:
        high = character_factory("a", "Aria", Role.SCHOLAR, mood=0.9)
        low = character_factory("b", "Bran", Role.SCHOLAR, mood=0.4)
        message = classify_message("that was awful")
        assert determine_response_emotion(high, message) == "sad"
        assert determine_response_emotion(low, message) == "angry"

    def test_curious_question(self, character_factory) -> None:
        aria = character_factory("a", "Aria", Role.SCHOLAR, curiosity=0.8)
        assert determine_response_emotion(aria, classify_message("where to?")) == "curious"

    def test_neutral(self, character_factory) -> None:
        aria = character_factory("a", "Aria", Role.SCHOLAR)
        assert determine_response_emotion(aria, classify_message("the road")) == "neutral"
