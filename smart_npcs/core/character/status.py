"""캐릭터 활동 상태 시뮬레이션

기분이 높을수록 사교적 활동, 낮을수록 내향적 활동.
"""

import random
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

from smart_npcs.core.character.models import CharacterData

ACTIVITY_TYPES = (
    "idle",
    "thinking",
    "working",
    "socializing",
    "learning",
    "creating",
    "exploring",
    "resting",
    "planning",
    "reflecting",
)

STATUS_TYPES = (
    "active",
    "busy",
    "available",
    "away",
    "in_conversation",
    "offline",
)

ACTIVITY_DESCRIPTIONS: Dict[str, List[str]] = {
    "idle": [
        "{name} is taking a moment to observe their surroundings.",
        "{name} appears to be in a peaceful state, simply being present.",
        "{name} is quietly contemplating the moment.",
    ],
    "thinking": [
        "{name} is deep in thought about their work as a {role}.",
        "{name} appears to be pondering something important.",
        "{name} is working through some complex ideas.",
    ],
    "working": [
        "{name} is actively engaged in their duties as a {role}.",
        "{name} is focused on their professional responsibilities.",
        "{name} is making progress on their current projects.",
    ],
    "socializing": [
        "{name} is enjoying interactions with others.",
        "{name} is engaged in lively conversation.",
        "{name} is connecting with fellow characters.",
    ],
    "learning": [
        "{name} is expanding their knowledge in their field.",
        "{name} is studying something relevant to their role as a {role}.",
        "{name} is researching new approaches to their work.",
    ],
    "creating": [
        "{name} is working on something new and innovative.",
        "{name} is channeling their creativity into their work.",
        "{name} is bringing new ideas to life.",
    ],
    "exploring": [
        "{name} is discovering new aspects of their environment.",
        "{name} is investigating something intriguing.",
        "{name} is on a journey of discovery.",
    ],
    "resting": [
        "{name} is taking some well-deserved rest.",
        "{name} is recharging their energy.",
        "{name} is in a peaceful, restorative state.",
    ],
    "planning": [
        "{name} is strategizing their next moves as a {role}.",
        "{name} is organizing their upcoming activities.",
        "{name} is mapping out future projects.",
    ],
    "reflecting": [
        "{name} is reflecting on their recent experiences.",
        "{name} is contemplating their journey as a {role}.",
        "{name} is processing their thoughts and feelings.",
    ],
}


@dataclass
class ActivitySnapshot:
    activity: str
    description: str
    status: str


def generate_activity(character: CharacterData, rng: random.Random) -> ActivitySnapshot:
    """기분 구간별 활동/가용 상태 추첨"""
    mood = character.current_mood

    if mood > 0.7:
        candidates = ["socializing", "creating", "exploring", "working"]
        status = "available" if rng.random() > 0.5 else "active"
    elif mood > 0.4:
        candidates = ["working", "thinking", "learning", "planning"]
        status = "busy" if rng.random() > 0.3 else "available"
    else:
        candidates = ["reflecting", "resting", "thinking", "idle"]
        status = "away" if rng.random() > 0.7 else "active"

    activity = rng.choice(candidates)
    template = rng.choice(ACTIVITY_DESCRIPTIONS[activity])
    description = template.format(name=character.name, role=character.role.value)
    return ActivitySnapshot(activity=activity, description=description, status=status)


def status_mood_level(mood: float) -> str:
    """상태 화면용 3단계 기분 (high / medium / low)"""
    if mood > 0.7:
        return "high"
    if mood > 0.4:
        return "medium"
    return "low"


@dataclass
class CharacterStatus:
    """캐릭터 상태 스냅샷"""

    character_id: str
    name: str
    role: str
    status: str
    activity: ActivitySnapshot
    mood: float
    mood_level: str
    is_active: bool
    active_conversations: int = 0
    total_conversations: int = 0
    recent_messages: int = 0
    last_seen: Optional[datetime] = None
    minutes_since_last_activity: int = 0
    image_url: Optional[str] = None

    @property
    def is_in_conversation(self) -> bool:
        return self.active_conversations > 0


def build_status(
    character: CharacterData,
    rng: random.Random,
    now: datetime,
    last_seen: Optional[datetime] = None,
    active_conversations: int = 0,
    total_conversations: int = 0,
    recent_messages: int = 0,
) -> CharacterStatus:
    """활동 추첨 + 대화 참여 지표. 진행 중 대화가 있으면 status는 in_conversation."""
    snapshot = generate_activity(character, rng)
    status = "in_conversation" if active_conversations > 0 else snapshot.status

    minutes = 0
    if last_seen is not None:
        minutes = max(0, int((now - last_seen).total_seconds() // 60))

    return CharacterStatus(
        character_id=character.character_id,
        name=character.name,
        role=character.role.value,
        status=status,
        activity=snapshot,
        mood=character.current_mood,
        mood_level=status_mood_level(character.current_mood),
        is_active=character.is_active,
        active_conversations=active_conversations,
        total_conversations=total_conversations,
        recent_messages=recent_messages,
        last_seen=last_seen,
        minutes_since_last_activity=minutes,
        image_url=character.image_url,
    )


def summarize_statuses(statuses: List[CharacterStatus]) -> Dict[str, object]:
    """전체 요약: 총수, 활성 수, 대화 중 수, 상태/기분 분포, 평균 기분"""
    status_breakdown: Dict[str, int] = {}
    mood_breakdown: Dict[str, int] = {}
    for s in statuses:
        status_breakdown[s.status] = status_breakdown.get(s.status, 0) + 1
        mood_breakdown[s.mood_level] = mood_breakdown.get(s.mood_level, 0) + 1

    average = sum(s.mood for s in statuses) / len(statuses) if statuses else 0.0
    return {
        "total_characters": len(statuses),
        "active_characters": sum(1 for s in statuses if s.is_active),
        "characters_in_conversation": sum(1 for s in statuses if s.is_in_conversation),
        "status_breakdown": status_breakdown,
        "mood_breakdown": mood_breakdown,
        "average_mood": average,
    }
