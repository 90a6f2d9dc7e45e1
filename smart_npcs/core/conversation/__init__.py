"""대화 턴 정책 Core 패키지

메시지 분류 → 발화 순서 → 응답 게이트 → 응답 합성(템플릿) → 기분 변화량.
DB/네트워크 무관 순수 Python. 무작위 판정은 모두 주입된 rng.
"""

from smart_npcs.core.conversation.models import (
    HistoryEntry,
    Mention,
    MessageClassification,
    ReplySource,
    Sentiment,
    SynthesizedReply,
    TurnOutcome,
)
from smart_npcs.core.conversation.classifier import (
    BEHAVIOR_CHANGE_COMMANDS,
    classify_message,
    detect_sentiment,
)
from smart_npcs.core.conversation.turn_order import (
    MEDIATOR_ROLES,
    resolve_turn_order,
)
from smart_npcs.core.conversation.gate import (
    ROLE_KEYWORDS,
    response_probability,
    should_respond,
)
from smart_npcs.core.conversation.behavior import (
    extract_behavior_change,
    parse_directive,
)
from smart_npcs.core.conversation.fallback import (
    calculate_mood_delta,
    compose_fallback_response,
    determine_response_emotion,
)
from smart_npcs.core.conversation.prompts import (
    build_history_messages,
    build_system_prompt,
)

__all__ = [
    "HistoryEntry",
    "Mention",
    "MessageClassification",
    "ReplySource",
    "Sentiment",
    "SynthesizedReply",
    "TurnOutcome",
    "BEHAVIOR_CHANGE_COMMANDS",
    "classify_message",
    "detect_sentiment",
    "MEDIATOR_ROLES",
    "resolve_turn_order",
    "ROLE_KEYWORDS",
    "response_probability",
    "should_respond",
    "extract_behavior_change",
    "parse_directive",
    "calculate_mood_delta",
    "compose_fallback_response",
    "determine_response_emotion",
    "build_history_messages",
    "build_system_prompt",
]
