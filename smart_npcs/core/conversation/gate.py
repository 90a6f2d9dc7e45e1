"""응답 게이트: 이 캐릭터가 이번 턴에 발화하는가

규칙 (먼저 맞는 규칙 적용):
- 직접 언급 또는 행동 변경 지시 → 항상 발화
- 룸(턴 순서 있음): 순서 안 → 발화 / 순서 밖 + 일반 질문 + sociability > 0.8 → 30%
- 단일 캐릭터: 일반 질문 + sociability > 0.6 → 80%
  역할 키워드 포함 → (sociability + curiosity) / 2
  그 외 → sociability × mood × 0.3

확률 판정은 주입된 rng.random()과 임계값 비교. 테스트는 rng를 고정한다.
"""

import random
from typing import Dict, Optional, Sequence, Tuple

from smart_npcs.core.character.models import CharacterData, Role
from smart_npcs.core.conversation.models import MessageClassification

ROLE_KEYWORDS: Dict[Role, Tuple[str, ...]] = {
    Role.WARRIOR: ("battle", "fight", "combat", "enemy", "weapon", "armor", "strength"),
    Role.MERCHANT: ("trade", "gold", "coin", "buy", "sell", "deal", "business"),
    Role.SCHOLAR: ("study", "book", "learn", "research", "knowledge", "theory", "understand"),
    Role.WANDERER: ("travel", "journey", "road", "adventure", "explore", "story", "far"),
    Role.GUARDIAN: ("protect", "guard", "danger", "threat", "safe", "duty", "watch"),
    Role.ARTISAN: ("craft", "forge", "build", "tool", "create", "art", "repair"),
}

OFF_ORDER_SOCIABILITY = 0.8
OFF_ORDER_PROBABILITY = 0.3
GENERAL_QUESTION_SOCIABILITY = 0.6
GENERAL_QUESTION_PROBABILITY = 0.8
BASE_PROBABILITY_FACTOR = 0.3


def has_role_keyword(character: CharacterData, lowered: str) -> bool:
    return any(keyword in lowered for keyword in ROLE_KEYWORDS.get(character.role, ()))


def response_probability(
    character: CharacterData,
    classification: MessageClassification,
    turn_order: Optional[Sequence[CharacterData]] = None,
) -> float:
    """발화 확률. 결정적 규칙은 1.0 / 0.0.

    turn_order가 None이면 단일 캐릭터 문맥, 리스트(빈 리스트 포함)면 룸 문맥.
    """
    if classification.is_mentioned(character.character_id):
        return 1.0
    if classification.has_behavior_change:
        return 1.0

    if turn_order is not None:
        if any(c.character_id == character.character_id for c in turn_order):
            return 1.0
        if (
            classification.is_general_question
            and character.sociability > OFF_ORDER_SOCIABILITY
        ):
            return OFF_ORDER_PROBABILITY
        return 0.0

    if (
        classification.is_general_question
        and character.sociability > GENERAL_QUESTION_SOCIABILITY
    ):
        return GENERAL_QUESTION_PROBABILITY

    if has_role_keyword(character, classification.lowered):
        return character.social_score

    return character.sociability * character.current_mood * BASE_PROBABILITY_FACTOR


def should_respond(
    character: CharacterData,
    classification: MessageClassification,
    rng: random.Random,
    turn_order: Optional[Sequence[CharacterData]] = None,
) -> bool:
    """발화 여부 판정. 확률 1.0 / 0.0 규칙은 rng를 소비하지 않는다."""
    probability = response_probability(character, classification, turn_order)
    if probability >= 1.0:
        return True
    if probability <= 0.0:
        return False
    return rng.random() < probability
