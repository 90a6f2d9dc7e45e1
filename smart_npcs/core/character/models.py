"""캐릭터 Core 도메인 모델

DB 무관 순수 데이터 클래스. ORM(CharacterModel)과 별개.
모든 감정/행동 수치는 0.0 ~ 1.0.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class Role(str, Enum):
    """캐릭터 원형(archetype)"""

    WARRIOR = "warrior"
    MERCHANT = "merchant"
    SCHOLAR = "scholar"
    WANDERER = "wanderer"
    GUARDIAN = "guardian"
    ARTISAN = "artisan"

    @classmethod
    def parse(cls, value: Any) -> "Role":
        """문자열 → Role. 알 수 없는 값은 WANDERER로 대체."""
        if isinstance(value, Role):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.WANDERER


def clamp_unit(value: Any, default: float = 0.5) -> float:
    """0.0 ~ 1.0 클램프. 숫자가 아니면 default."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return max(0.0, min(1.0, number))


@dataclass
class EmotionalWeights:
    """감정 가중치 6종"""

    happiness: float = 0.5
    sadness: float = 0.5
    anger: float = 0.5
    fear: float = 0.5
    curiosity: float = 0.5
    aggression: float = 0.5

    def to_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "EmotionalWeights":
        data = data or {}
        return cls(**{f.name: clamp_unit(data.get(f.name, 0.5)) for f in fields(cls)})


@dataclass
class BehavioralTraits:
    """행동 특성 5종"""

    sociability: float = 0.5
    energy: float = 0.5
    creativity: float = 0.5
    loyalty: float = 0.5
    intelligence: float = 0.5

    def to_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "BehavioralTraits":
        data = data or {}
        return cls(**{f.name: clamp_unit(data.get(f.name, 0.5)) for f in fields(cls)})


_SNAKE_KEYS = {"emotionalWeights": "emotional_weights", "behavioralTraits": "behavioral_traits"}


def _section(data: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
    # camelCase(저장 형식)와 snake_case(API 입력) 모두 허용
    value = data.get(key)
    if value is None:
        value = data.get(_SNAKE_KEYS[key])
    return value


@dataclass
class TraitBag:
    """캐릭터 성격 패턴 (감정 가중치 + 행동 특성)"""

    pattern_id: str = ""
    name: str = ""
    emotional_weights: EmotionalWeights = field(default_factory=EmotionalWeights)
    behavioral_traits: BehavioralTraits = field(default_factory=BehavioralTraits)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.pattern_id,
            "name": self.name,
            "emotionalWeights": self.emotional_weights.to_dict(),
            "behavioralTraits": self.behavioral_traits.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "TraitBag":
        data = data or {}
        return cls(
            pattern_id=data.get("id", ""),
            name=data.get("name", ""),
            emotional_weights=EmotionalWeights.from_dict(_section(data, "emotionalWeights")),
            behavioral_traits=BehavioralTraits.from_dict(_section(data, "behavioralTraits")),
        )

    def merged(self, patch: Dict[str, Any]) -> "TraitBag":
        """부분 갱신. patch에 없는 값은 유지."""
        emotions = self.emotional_weights.to_dict()
        emotions.update(_section(patch, "emotionalWeights") or {})
        behaviors = self.behavioral_traits.to_dict()
        behaviors.update(_section(patch, "behavioralTraits") or {})
        return TraitBag(
            pattern_id=patch.get("id", self.pattern_id),
            name=patch.get("name", self.name),
            emotional_weights=EmotionalWeights.from_dict(emotions),
            behavioral_traits=BehavioralTraits.from_dict(behaviors),
        )


def _dominant(values: Dict[str, float]) -> Tuple[str, float]:
    # max()는 동률이면 먼저 나온 항목을 반환한다 (선언 순서 유지)
    name = max(values, key=lambda k: values[k])
    return name, values[name]


@dataclass
class CharacterAction:
    """캐릭터가 사용할 수 있는 행동"""

    id: str
    name: str
    description: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "name": self.name, "description": self.description}


@dataclass
class DailyRoutine:
    """일과"""

    id: str
    name: str
    time_slot: str = "morning"  # "morning", "afternoon", "evening", "night"
    action: str = ""
    priority: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "timeSlot": self.time_slot,
            "action": self.action,
            "priority": self.priority,
        }


@dataclass
class CharacterData:
    """캐릭터 완전 데이터. Core 레이어용."""

    character_id: str
    name: str
    role: Role = Role.WANDERER
    traits: TraitBag = field(default_factory=TraitBag)
    current_mood: float = 0.5

    memory_bank: List[str] = field(default_factory=list)
    routines: List[DailyRoutine] = field(default_factory=list)
    actions: List[CharacterAction] = field(default_factory=list)

    image_url: Optional[str] = None
    temporary_behavior_prompt: Optional[str] = None
    is_active: bool = True

    @property
    def sociability(self) -> float:
        return self.traits.behavioral_traits.sociability

    @property
    def curiosity(self) -> float:
        # curiosity는 감정 가중치 쪽에 있다
        return self.traits.emotional_weights.curiosity

    @property
    def social_score(self) -> float:
        """(sociability + curiosity) / 2"""
        return (self.sociability + self.curiosity) / 2

    def dominant_emotion(self) -> Tuple[str, float]:
        return _dominant(self.traits.emotional_weights.to_dict())

    def dominant_trait(self) -> Tuple[str, float]:
        return _dominant(self.traits.behavioral_traits.to_dict())
