"""캐릭터 Core 도메인 패키지

공개 API:
- 도메인 모델: Role, EmotionalWeights, BehavioralTraits, TraitBag,
  CharacterAction, DailyRoutine, CharacterData
- 생성: generate_traits, default_actions
- 기분: apply_mood_delta, clamp_mood, describe_mood, mood_level
- 성격 요약: summarize_personality, describe_interaction_style
- 상태: generate_activity, build_status, summarize_statuses
"""

from smart_npcs.core.character.models import (
    BehavioralTraits,
    CharacterAction,
    CharacterData,
    DailyRoutine,
    EmotionalWeights,
    Role,
    TraitBag,
    clamp_unit,
)
from smart_npcs.core.character.generation import (
    ROLE_DEFAULT_ACTIONS,
    default_actions,
    generate_traits,
)
from smart_npcs.core.character.mood import (
    MOOD_DELTA_LIMIT,
    MoodDescriptor,
    apply_mood_delta,
    clamp_mood,
    clamp_mood_delta,
    describe_mood,
    mood_level,
)
from smart_npcs.core.character.personality import (
    describe_interaction_style,
    summarize_personality,
)
from smart_npcs.core.character.status import (
    ACTIVITY_TYPES,
    STATUS_TYPES,
    ActivitySnapshot,
    CharacterStatus,
    build_status,
    generate_activity,
    status_mood_level,
    summarize_statuses,
)

__all__ = [
    # models
    "Role",
    "EmotionalWeights",
    "BehavioralTraits",
    "TraitBag",
    "CharacterAction",
    "DailyRoutine",
    "CharacterData",
    "clamp_unit",
    # generation
    "ROLE_DEFAULT_ACTIONS",
    "default_actions",
    "generate_traits",
    # mood
    "MOOD_DELTA_LIMIT",
    "MoodDescriptor",
    "apply_mood_delta",
    "clamp_mood",
    "clamp_mood_delta",
    "describe_mood",
    "mood_level",
    # personality
    "summarize_personality",
    "describe_interaction_style",
    # status
    "ACTIVITY_TYPES",
    "STATUS_TYPES",
    "ActivitySnapshot",
    "CharacterStatus",
    "build_status",
    "generate_activity",
    "status_mood_level",
    "summarize_statuses",
]
