"""템플릿 기반 응답 합성 (LLM 미사용/실패 시)

조립 순서:
1. 인사 (인사 메시지 + 이전 대화 없음)
2. 본문: 질문 > 긍정 > 부정 > 철학 > 일반 (복합 질문은 주제별 보충)
3. 성격 수식어 (지배 행동 특성 > 0.6, 30%)
4. 감정 색채 (지배 감정 > 0.5, 30%)
5. 역할 서두 (50%)
6. 작별 인사면 작별 한 문장, 아니면 15단어 미만일 때 이어 말하기 한 문장

모든 무작위 선택은 주입된 rng.
"""

import random
from typing import Sequence

from smart_npcs.core.character.models import CharacterData
from smart_npcs.core.character.mood import clamp_mood_delta, mood_level
from smart_npcs.core.conversation.models import (
    HistoryEntry,
    MessageClassification,
    ReplySource,
    Sentiment,
    SynthesizedReply,
)
from smart_npcs.core.conversation.templates import (
    CONTINUITY_LINES,
    EMOTIONAL_PREFIXES,
    FAREWELL_LINES,
    GREETINGS,
    NEGATIVE_LINES,
    PERSONALITY_MODIFIERS,
    PHILOSOPHICAL_OPENERS,
    PHILOSOPHICAL_PERSPECTIVES,
    POSITIVE_LINES,
    QUESTION_OPENERS,
    ROLE_ELEMENTS,
    THOUGHTFUL_LINES,
    TOPIC_ELABORATIONS,
    role_lines,
    role_text,
)

FLAVOR_TRAIT_THRESHOLD = 0.6
COLORING_EMOTION_THRESHOLD = 0.5
DECORATION_CHANCE = 0.3
ROLE_ELEMENT_CHANCE = 0.5
MIN_WORDS = 15


def _lower_first(text: str) -> str:
    return text[:1].lower() + text[1:]


# ── 구성 요소 ───────────────────────────────────────────────


def greeting_component(
    character: CharacterData,
    classification: MessageClassification,
    history: Sequence[HistoryEntry],
    rng: random.Random,
) -> str:
    if not classification.is_greeting or len(history) > 0:
        return ""
    return rng.choice(role_lines(GREETINGS, character.role))


def main_content(
    character: CharacterData,
    classification: MessageClassification,
    rng: random.Random,
) -> str:
    role = character.role
    if classification.is_question:
        opener = rng.choice(role_lines(QUESTION_OPENERS, role))
        elaboration = topic_elaboration(character, classification)
        return f"{opener} {elaboration}" if elaboration else opener
    if classification.is_positive:
        return rng.choice(role_lines(POSITIVE_LINES, role))
    if classification.is_negative:
        return rng.choice(role_lines(NEGATIVE_LINES, role))
    if classification.is_philosophical:
        return philosophical_content(character)
    return rng.choice(role_lines(THOUGHTFUL_LINES, role))


def topic_elaboration(
    character: CharacterData, classification: MessageClassification
) -> str:
    """단순하지 않은 질문에서 역할과 맞는 첫 주제의 보충 문장. 없으면 ""."""
    if classification.complexity == "simple":
        return ""
    elaborations = TOPIC_ELABORATIONS.get(character.role, {})
    for topic in classification.topics:
        if topic in elaborations:
            return elaborations[topic]
    return ""


def philosophical_content(character: CharacterData) -> str:
    intelligent = character.traits.behavioral_traits.intelligence > 0.7
    opener = PHILOSOPHICAL_OPENERS[0] if intelligent else PHILOSOPHICAL_OPENERS[1]
    return (
        f"{opener} As a {character.role.value}, I have thought about these deeper "
        f"questions through my own work and experiences. "
        f"{role_text(PHILOSOPHICAL_PERSPECTIVES, character.role)}"
    )


def add_personality_flavor(
    content: str, character: CharacterData, rng: random.Random
) -> str:
    _, strength = character.dominant_trait()
    if strength <= FLAVOR_TRAIT_THRESHOLD:
        return content
    if rng.random() >= DECORATION_CHANCE:
        return content
    modifier = rng.choice(role_lines(PERSONALITY_MODIFIERS, character.role))
    return f"{modifier} {_lower_first(content)}"


def add_emotional_coloring(
    content: str, character: CharacterData, rng: random.Random
) -> str:
    emotion, strength = character.dominant_emotion()
    prefixes = EMOTIONAL_PREFIXES.get(emotion)
    if not prefixes or strength <= COLORING_EMOTION_THRESHOLD:
        return content
    if rng.random() >= DECORATION_CHANCE:
        return content
    return f"{rng.choice(prefixes)} {_lower_first(content)}"


def add_role_element(
    content: str, character: CharacterData, rng: random.Random
) -> str:
    if rng.random() > ROLE_ELEMENT_CHANCE:
        return content
    element = rng.choice(role_lines(ROLE_ELEMENTS, character.role))
    return f"{element}, {_lower_first(content)}"


def continuity_line(character: CharacterData, rng: random.Random) -> str:
    return rng.choice(role_lines(CONTINUITY_LINES, character.role))


def farewell_line(character: CharacterData, rng: random.Random) -> str:
    return rng.choice(role_lines(FAREWELL_LINES, character.role))


# ── 기분 / 감정 ─────────────────────────────────────────────


def calculate_mood_delta(
    character: CharacterData, classification: MessageClassification
) -> float:
    """사용자 메시지에 대한 기분 변화량. [-0.1, 0.1]"""
    change = 0.0
    if classification.is_positive:
        change += 0.05
    if classification.is_negative:
        change -= 0.03
    if classification.is_personal and character.sociability > 0.6:
        change += 0.02
    if classification.sentiment == Sentiment.POSITIVE:
        change += 0.02
    elif classification.sentiment == Sentiment.NEGATIVE:
        change -= 0.02

    emotions = character.traits.emotional_weights
    if emotions.happiness > 0.7 and change > 0:
        change *= 1.5
    if emotions.sadness > 0.7 and change < 0:
        change *= 1.5

    return clamp_mood_delta(change)


def determine_response_emotion(
    character: CharacterData, classification: MessageClassification
) -> str:
    """happy / sad / angry / excited / curious / neutral"""
    level = mood_level(character.current_mood)
    if classification.is_positive and level != "very low":
        return "happy"
    if classification.is_negative:
        return "sad" if level == "high" else "angry"
    if classification.is_philosophical and character.traits.behavioral_traits.intelligence > 0.6:
        return "excited"
    if classification.is_question and character.curiosity > 0.6:
        return "curious"
    return "neutral"


# ── 진입점 ──────────────────────────────────────────────────


def compose_fallback_response(
    character: CharacterData,
    classification: MessageClassification,
    history: Sequence[HistoryEntry],
    rng: random.Random,
) -> SynthesizedReply:
    greeting = greeting_component(character, classification, history, rng)
    content = main_content(character, classification, rng)
    content = add_personality_flavor(content, character, rng)
    content = add_emotional_coloring(content, character, rng)
    content = add_role_element(content, character, rng)

    text = " ".join(part for part in (greeting, content) if part)
    if classification.is_farewell:
        text = f"{text} {farewell_line(character, rng)}"
    elif len(text.split()) < MIN_WORDS:
        text = f"{text} {continuity_line(character, rng)}"

    return SynthesizedReply(
        text=text,
        mood_delta=calculate_mood_delta(character, classification),
        emotion=determine_response_emotion(character, classification),
        source=ReplySource.TEMPLATE,
    )
