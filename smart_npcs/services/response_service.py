"""Character reply synthesis.

모든 LLM 호출의 단일 관문. LLM 실패/부재 시 템플릿 합성으로 폴백하며
오류는 호출자에게 전달하지 않는다.
"""

import random
from dataclasses import dataclass
from typing import Optional, Sequence

from smart_npcs.core.character.models import CharacterData
from smart_npcs.core.conversation.fallback import (
    calculate_mood_delta,
    compose_fallback_response,
    determine_response_emotion,
)
from smart_npcs.core.conversation.models import (
    HistoryEntry,
    MessageClassification,
    ReplySource,
    SynthesizedReply,
)
from smart_npcs.core.conversation.prompts import (
    build_history_messages,
    build_system_prompt,
)
from smart_npcs.core.logging import get_logger
from smart_npcs.services.ai.base import AIProvider

logger = get_logger(__name__)


@dataclass
class ResponseConfig:
    """LLM 호출 파라미터"""

    max_tokens: int = 300
    temperature: float = 0.9
    history_window: int = 5


class ResponseService:
    """Service that produces one character reply per call.

    ai_provider가 None이면 항상 템플릿 경로.
    """

    def __init__(
        self,
        ai_provider: Optional[AIProvider],
        rng: Optional[random.Random] = None,
        config: ResponseConfig | None = None,
    ) -> None:
        self.ai = ai_provider
        self.rng = rng or random.Random()
        self._config = config or ResponseConfig()

    @property
    def history_window(self) -> int:
        return self._config.history_window

    def _try_llm(
        self,
        character: CharacterData,
        user_message: str,
        history: Sequence[HistoryEntry],
        others: Sequence[CharacterData],
        behavior_prompt: str | None,
    ) -> str | None:
        if self.ai is None or not self.ai.is_available():
            return None

        system_prompt = build_system_prompt(character, others, behavior_prompt)
        try:
            text = self.ai.generate(
                user_message,
                system_prompt=system_prompt,
                max_tokens=self._config.max_tokens,
                history=build_history_messages(history, self._config.history_window),
                temperature=self._config.temperature,
            )
        except Exception as e:
            logger.warning(
                "AI generation failed for %s, using fallback: %s",
                character.character_id,
                e,
            )
            return None

        text = (text or "").strip()
        if not text:
            logger.warning("AI returned empty text for %s, using fallback", character.character_id)
            return None
        return text

    def synthesize(
        self,
        character: CharacterData,
        user_message: str,
        classification: MessageClassification,
        history: Sequence[HistoryEntry] = (),
        others: Sequence[CharacterData] = (),
        behavior_prompt: str | None = None,
    ) -> SynthesizedReply:
        """캐릭터 응답 1건. LLM → 템플릿 순서로 시도.

        Args:
            character: 발화 캐릭터.
            user_message: 이번 턴의 사용자 메시지.
            classification: user_message 분류 결과.
            history: 이번 사용자 메시지 이전의 이력 (같은 턴의 앞선 응답 포함).
            others: 같은 공간의 다른 캐릭터 (룸 문맥).
            behavior_prompt: 이번 턴에 새로 받은 행동 변경 지시.
        """
        text = self._try_llm(character, user_message, history, others, behavior_prompt)
        if text is not None:
            return SynthesizedReply(
                text=text,
                mood_delta=calculate_mood_delta(character, classification),
                emotion=determine_response_emotion(character, classification),
                source=ReplySource.LLM,
            )

        return compose_fallback_response(character, classification, history, self.rng)
