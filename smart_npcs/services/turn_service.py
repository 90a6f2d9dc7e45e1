"""Conversation turn resolution.

사용자 메시지 1건 → 캐릭터별 발화 결과 목록.
캐릭터는 엄격히 순차 처리된다: i번째 캐릭터의 응답 합성, 기분 반영,
on_reply 콜백(저장)이 끝난 뒤 i+1번째를 시작한다. 뒤 캐릭터의 이력에는
같은 턴에서 앞 캐릭터가 방금 한 응답이 포함된다.
"""

import random
from typing import Callable, Optional, Sequence

from smart_npcs.core.character.models import CharacterData
from smart_npcs.core.character.mood import apply_mood_delta
from smart_npcs.core.conversation.behavior import extract_behavior_change
from smart_npcs.core.conversation.classifier import classify_message
from smart_npcs.core.conversation.gate import should_respond
from smart_npcs.core.conversation.models import (
    HistoryEntry,
    MessageClassification,
    TurnOutcome,
)
from smart_npcs.core.conversation.turn_order import resolve_turn_order
from smart_npcs.core.logging import get_logger
from smart_npcs.services.response_service import ResponseService

logger = get_logger(__name__)

ReplyCallback = Callable[[TurnOutcome], None]


def _is_eligible(character: Optional[CharacterData]) -> bool:
    return character is not None and character.is_active


def _unique_active(present: Sequence[Optional[CharacterData]]) -> list[CharacterData]:
    # 같은 캐릭터가 중복되면 첫 항목만 사용
    seen: set[str] = set()
    active = []
    for character in present:
        if _is_eligible(character) and character.character_id not in seen:
            seen.add(character.character_id)
            active.append(character)
    return active


class TurnService:
    """Service that runs the conversation turn policy."""

    def __init__(
        self,
        response_service: ResponseService,
        rng: random.Random | None = None,
    ) -> None:
        self.responses = response_service
        self.rng = rng or response_service.rng

    # ── 내부 ────────────────────────────────────────────────

    def _speak(
        self,
        character: CharacterData,
        user_message: str,
        classification: MessageClassification,
        history: list[HistoryEntry],
        others: Sequence[CharacterData],
        is_multi: bool,
        on_reply: ReplyCallback | None,
    ) -> TurnOutcome:
        behavior = extract_behavior_change(character, classification, is_multi)
        reply = self.responses.synthesize(
            character,
            user_message,
            classification,
            history=history,
            others=others,
            behavior_prompt=behavior,
        )

        character.current_mood = apply_mood_delta(character.current_mood, reply.mood_delta)
        if behavior:
            character.temporary_behavior_prompt = behavior

        outcome = TurnOutcome(
            character=character,
            spoken=True,
            text=reply.text,
            mood_delta=reply.mood_delta,
            new_mood=character.current_mood,
            emotion=reply.emotion,
            source=reply.source,
            behavior_prompt=behavior,
        )
        logger.debug(
            "%s replied via %s (mood %+.3f -> %.3f)",
            character.character_id,
            reply.source.value,
            reply.mood_delta,
            character.current_mood,
        )

        if on_reply is not None:
            on_reply(outcome)

        history.append(HistoryEntry(character.name, reply.text, character.character_id))
        return outcome

    # ── 공개 API ───────────────────────────────────────────

    def resolve_turn(
        self,
        present: Sequence[Optional[CharacterData]],
        user_message: str,
        recent_history: Sequence[HistoryEntry] = (),
        on_reply: ReplyCallback | None = None,
    ) -> list[TurnOutcome]:
        """멀티 캐릭터 턴.

        결과 순서: 발화 순서 목록 → 순서 밖 활성 캐릭터(원래 순서)
        → None/비활성 항목(spoken=False).

        Args:
            present: 현재 자리에 있는 캐릭터. None이나 비활성 캐릭터는 발화하지 않는다.
            user_message: 사용자 메시지.
            recent_history: 이번 메시지 이전의 최근 이력.
            on_reply: 응답 직후 호출되는 콜백 (저장 등). 다음 캐릭터보다 먼저 실행된다.
        """
        active = _unique_active(present)
        classification = classify_message(user_message, active)
        order = resolve_turn_order(classification, active)

        ordered_ids = {c.character_id for c in order}
        walk = order + [c for c in active if c.character_id not in ordered_ids]

        history = list(recent_history)
        outcomes: list[TurnOutcome] = []
        for character in walk:
            if not should_respond(character, classification, self.rng, turn_order=order):
                outcomes.append(TurnOutcome(character=character, spoken=False))
                continue
            outcomes.append(
                self._speak(
                    character,
                    user_message,
                    classification,
                    history,
                    others=active,
                    is_multi=True,
                    on_reply=on_reply,
                )
            )

        for character in present:
            if not _is_eligible(character):
                outcomes.append(TurnOutcome(character=character, spoken=False))

        logger.info(
            "Turn resolved: %d present, %d spoke",
            len(present),
            sum(1 for o in outcomes if o.spoken),
        )
        return outcomes

    def resolve_single(
        self,
        character: Optional[CharacterData],
        user_message: str,
        recent_history: Sequence[HistoryEntry] = (),
        on_reply: ReplyCallback | None = None,
    ) -> TurnOutcome:
        """1:1 대화 턴. 발화 순서 없이 단일 문맥 게이트만 적용."""
        if not _is_eligible(character):
            return TurnOutcome(character=character, spoken=False)
        assert character is not None

        classification = classify_message(user_message, [character])
        if not should_respond(character, classification, self.rng):
            return TurnOutcome(character=character, spoken=False)

        return self._speak(
            character,
            user_message,
            classification,
            list(recent_history),
            others=(),
            is_multi=False,
            on_reply=on_reply,
        )
