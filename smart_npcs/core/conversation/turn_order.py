"""멀티 캐릭터 발화 순서 결정

규칙 (먼저 맞는 규칙 적용):
1. 중재/갈등 키워드 + 2명 이상 언급 → 중재자 역할 우선, 그 다음 sociability 내림차순
2. 1명 이상 언급 → 언급 위치 순, 그 뒤에 sociability/curiosity > 0.7 인 비언급 캐릭터
   (and/both/all 로 여럿을 부르면 비언급 캐릭터 전원)
3. 언급 없음 → (sociability + curiosity) / 2 내림차순

정렬은 모두 안정 정렬. 무작위 요소 없음.
"""

from typing import FrozenSet, List, Optional, Sequence

from smart_npcs.core.character.models import CharacterData, Role
from smart_npcs.core.conversation.models import MessageClassification

MEDIATOR_ROLES: FrozenSet[Role] = frozenset({Role.SCHOLAR})

EXTRA_SPEAKER_THRESHOLD = 0.7


def is_mediation_turn(classification: MessageClassification) -> bool:
    return len(classification.mentions) > 1 and (
        classification.is_mediation or classification.is_conflict
    )


def _present(characters: Sequence[Optional[CharacterData]]) -> List[CharacterData]:
    return [c for c in characters if c is not None]


def order_by_mediation(characters: Sequence[CharacterData]) -> List[CharacterData]:
    return sorted(
        characters,
        key=lambda c: (c.role not in MEDIATOR_ROLES, -c.sociability),
    )


def order_by_mention(
    characters: Sequence[CharacterData],
    classification: MessageClassification,
) -> List[CharacterData]:
    mentioned = [c for c in characters if classification.is_mentioned(c.character_id)]
    mentioned.sort(key=lambda c: classification.mention_index(c.character_id))

    extras = [
        c
        for c in characters
        if not classification.is_mentioned(c.character_id)
        and (
            classification.has_connector_words
            or c.sociability > EXTRA_SPEAKER_THRESHOLD
            or c.curiosity > EXTRA_SPEAKER_THRESHOLD
        )
    ]
    extras.sort(key=lambda c: -c.sociability)
    return mentioned + extras


def order_by_social_score(characters: Sequence[CharacterData]) -> List[CharacterData]:
    return sorted(characters, key=lambda c: -c.social_score)


def resolve_turn_order(
    classification: MessageClassification,
    present: Sequence[Optional[CharacterData]],
) -> List[CharacterData]:
    """발화 우선순위 목록. 실제 발화 여부는 gate.should_respond가 결정."""
    characters = _present(present)

    if is_mediation_turn(classification):
        return order_by_mediation(characters)

    if classification.mentions:
        return order_by_mention(characters, classification)

    return order_by_social_score(characters)
