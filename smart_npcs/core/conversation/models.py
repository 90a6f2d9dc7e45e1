"""대화 턴 Core 도메인 모델

DB 무관. 메시지 분류 결과, 대화 이력 항목, 턴 결과.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from smart_npcs.core.character.models import CharacterData


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class ReplySource(str, Enum):
    """응답 생성 경로"""

    LLM = "llm"
    TEMPLATE = "template"


@dataclass(frozen=True)
class Mention:
    """메시지 안에서 이름 또는 역할로 언급된 캐릭터"""

    character_id: str
    index: int  # 소문자 메시지 내 최초 등장 위치


@dataclass(frozen=True)
class MessageClassification:
    """사용자 메시지 분류 결과 (순수 함수 산출물, 저장하지 않음)"""

    is_question: bool = False
    is_general_question: bool = False
    is_greeting: bool = False
    is_farewell: bool = False
    is_positive: bool = False
    is_negative: bool = False
    is_personal: bool = False
    is_philosophical: bool = False

    sentiment: Sentiment = Sentiment.NEUTRAL
    topics: Tuple[str, ...] = ()
    complexity: str = "simple"  # "simple", "moderate", "complex"

    is_mediation: bool = False
    is_conflict: bool = False
    has_connector_words: bool = False
    has_behavior_change: bool = False

    mentions: Tuple[Mention, ...] = ()
    lowered: str = ""

    def is_mentioned(self, character_id: str) -> bool:
        return any(m.character_id == character_id for m in self.mentions)

    def mention_index(self, character_id: str) -> Optional[int]:
        for m in self.mentions:
            if m.character_id == character_id:
                return m.index
        return None

    @property
    def mentioned_ids(self) -> List[str]:
        return [m.character_id for m in self.mentions]


@dataclass
class HistoryEntry:
    """대화 이력 한 줄. character_id가 None이면 사용자 발화."""

    speaker: str
    text: str
    character_id: Optional[str] = None

    @property
    def is_user(self) -> bool:
        return self.character_id is None


@dataclass
class SynthesizedReply:
    """응답 합성 결과"""

    text: str
    mood_delta: float
    emotion: str = "neutral"
    source: ReplySource = ReplySource.TEMPLATE


@dataclass
class TurnOutcome:
    """턴 내 캐릭터 하나의 결과. spoken=False면 나머지 필드는 비어 있다."""

    character: Optional[CharacterData]
    spoken: bool = False
    text: Optional[str] = None
    mood_delta: Optional[float] = None
    new_mood: Optional[float] = None
    emotion: Optional[str] = None
    source: Optional[ReplySource] = None
    behavior_prompt: Optional[str] = None
