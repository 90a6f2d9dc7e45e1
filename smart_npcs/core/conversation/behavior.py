"""행동 변경 지시 추출

"be more cheerful" 같은 지시를 캐릭터의 임시 행동 프롬프트로 변환한다.
"""

import re
from typing import Optional

from smart_npcs.core.character.models import CharacterData
from smart_npcs.core.conversation.classifier import BEHAVIOR_CHANGE_COMMANDS
from smart_npcs.core.conversation.models import MessageClassification


def _directive_pattern(command: str) -> "re.Pattern[str]":
    return re.compile(re.escape(command) + r" ([^.!?,]+)")


_DIRECTIVE_PATTERNS = tuple((cmd, _directive_pattern(cmd)) for cmd in BEHAVIOR_CHANGE_COMMANDS)


def parse_directive(lowered: str) -> Optional[str]:
    """첫 번째로 포함된 명령어 기준으로 지시문 추출. 명령어 순서가 우선순위."""
    for command, pattern in _DIRECTIVE_PATTERNS:
        if command not in lowered:
            continue
        match = pattern.search(lowered)
        if match is None:
            return None
        return f"{command.capitalize()} {match.group(1).strip()}."
    return None


def is_directive_target(
    character: CharacterData,
    classification: MessageClassification,
    is_multi: bool,
) -> bool:
    """이름 포함 / 직접 언급 / 단일 캐릭터 문맥이면 대상."""
    name = (character.name or "").strip().lower()
    if name and name in classification.lowered:
        return True
    if classification.is_mentioned(character.character_id):
        return True
    return not is_multi


def extract_behavior_change(
    character: CharacterData,
    classification: MessageClassification,
    is_multi: bool,
) -> Optional[str]:
    """이 캐릭터를 향한 행동 변경 지시문. 없으면 None."""
    if not classification.has_behavior_change:
        return None
    if not is_directive_target(character, classification, is_multi):
        return None
    return parse_directive(classification.lowered)
