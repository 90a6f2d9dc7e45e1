"""사용자 메시지 분류

정규식/키워드 판정만 수행하는 순수 함수. 예외를 던지지 않는다.
카테고리 간 우선순위 없음 (질문이면서 긍정일 수 있다).
"""

import re
from typing import Optional, Pattern, Sequence, Tuple

from smart_npcs.core.character.models import CharacterData
from smart_npcs.core.conversation.models import (
    Mention,
    MessageClassification,
    Sentiment,
)

# ── 키워드 패턴 ─────────────────────────────────────────────

QUESTION_RE = re.compile(
    r"\?|^(what|how|why|where|when|who|can|could|would|should|do|does|did|is|are|was|were)\b"
)
GREETING_RE = re.compile(
    r"\b(hello|hi|hey|greetings|salutations|good (morning|afternoon|evening))\b"
)
POSITIVE_RE = re.compile(
    r"\b(good|great|wonderful|excellent|amazing|fantastic|love|like|happy|joy|pleased)\b"
)
NEGATIVE_RE = re.compile(
    r"\b(bad|terrible|awful|hate|sad|angry|upset|disappointed|frustrated|worried)\b"
)
FAREWELL_RE = re.compile(r"\b(bye|goodbye|farewell|see you|take care|until|later)\b")
PERSONAL_RE = re.compile(r"\b(you|your|yourself|feel|think|believe|remember|experience)\b")
PHILOSOPHICAL_RE = re.compile(
    r"\b(meaning|purpose|life|death|existence|reality|truth|wisdom|knowledge)\b"
)

# 감정 점수 (긍정 히트 수 vs 부정 히트 수)
SENTIMENT_POSITIVE_RE = re.compile(
    r"\b(good|great|wonderful|excellent|amazing|fantastic|love|like|happy|joy)\b"
)
SENTIMENT_NEGATIVE_RE = re.compile(
    r"\b(bad|terrible|awful|hate|sad|angry|upset|disappointed)\b"
)

TOPIC_PATTERNS: Tuple[Tuple[str, Pattern[str]], ...] = (
    ("combat", re.compile(r"\b(fight|battle|war|weapon|combat|attack|defend|enemy|victory)\b")),
    ("trade", re.compile(r"\b(buy|sell|trade|price|cost|money|gold|merchant|business|deal)\b")),
    ("knowledge", re.compile(r"\b(learn|study|book|research|knowledge|wisdom|understand|explain|teach)\b")),
    ("travel", re.compile(r"\b(travel|journey|road|path|adventure|explore|place|land|country)\b")),
    ("emotion", re.compile(r"\b(feel|emotion|happy|sad|angry)\b")),
)

MEDIATION_RE = re.compile(r"talk.*out|stop.*fight|peace|calm|resolve|mediat")
CONFLICT_RE = re.compile(r"fight|battle|conflict|argue|clash")
CONNECTOR_RE = re.compile(r"\band\b|\bboth\b|\ball\b")

BEHAVIOR_CHANGE_COMMANDS: Tuple[str, ...] = (
    "be more",
    "act like",
    "become",
    "change your",
    "you should",
)

GENERAL_QUESTION_PREFIXES: Tuple[str, ...] = ("who", "what", "how", "tell me")


# ── 보조 판정 ───────────────────────────────────────────────


def detect_sentiment(lowered: str) -> Sentiment:
    """긍정/부정 키워드 히트 수 비교. 동률이면 neutral."""
    positive = len(SENTIMENT_POSITIVE_RE.findall(lowered))
    negative = len(SENTIMENT_NEGATIVE_RE.findall(lowered))
    if positive > negative:
        return Sentiment.POSITIVE
    if negative > positive:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def detect_complexity(message: str) -> str:
    words = len(message.split())
    if words > 10:
        return "complex"
    if words > 5:
        return "moderate"
    return "simple"


def is_general_question(lowered: str) -> bool:
    return "?" in lowered or lowered.startswith(GENERAL_QUESTION_PREFIXES)


def has_behavior_change(lowered: str) -> bool:
    return any(cmd in lowered for cmd in BEHAVIOR_CHANGE_COMMANDS)


def find_mention_index(lowered: str, character: CharacterData) -> Optional[int]:
    """이름 또는 역할 문자열의 최초 등장 위치. 없으면 None."""
    candidates = []
    for needle in (character.name, character.role.value):
        needle = (needle or "").strip().lower()
        if not needle:
            continue
        index = lowered.find(needle)
        if index >= 0:
            candidates.append(index)
    return min(candidates) if candidates else None


def find_mentions(
    lowered: str, present: Sequence[Optional[CharacterData]]
) -> Tuple[Mention, ...]:
    """언급된 캐릭터 목록 (원래 목록 순서 유지)"""
    mentions = []
    seen = set()
    for character in present:
        if character is None or character.character_id in seen:
            continue
        index = find_mention_index(lowered, character)
        if index is not None:
            mentions.append(Mention(character.character_id, index))
            seen.add(character.character_id)
    return tuple(mentions)


# ── 진입점 ──────────────────────────────────────────────────


def classify_message(
    message: str,
    present: Sequence[Optional[CharacterData]] = (),
) -> MessageClassification:
    """메시지 분류. 동일 입력에 대해 항상 동일한 결과."""
    text = message or ""
    lowered = text.lower()

    return MessageClassification(
        is_question=bool(QUESTION_RE.search(lowered)),
        is_general_question=is_general_question(lowered),
        is_greeting=bool(GREETING_RE.search(lowered)),
        is_farewell=bool(FAREWELL_RE.search(lowered)),
        is_positive=bool(POSITIVE_RE.search(lowered)),
        is_negative=bool(NEGATIVE_RE.search(lowered)),
        is_personal=bool(PERSONAL_RE.search(lowered)),
        is_philosophical=bool(PHILOSOPHICAL_RE.search(lowered)),
        sentiment=detect_sentiment(lowered),
        topics=tuple(name for name, pattern in TOPIC_PATTERNS if pattern.search(lowered)),
        complexity=detect_complexity(text),
        is_mediation=bool(MEDIATION_RE.search(lowered)),
        is_conflict=bool(CONFLICT_RE.search(lowered)),
        has_connector_words=bool(CONNECTOR_RE.search(lowered)),
        has_behavior_change=has_behavior_change(lowered),
        mentions=find_mentions(lowered, present),
        lowered=lowered,
    )
