"""LLM 시스템 프롬프트 / 대화 메시지 조립"""

from typing import Dict, List, Optional, Sequence

from smart_npcs.core.character.models import CharacterAction, CharacterData
from smart_npcs.core.character.mood import describe_mood
from smart_npcs.core.character.personality import (
    describe_interaction_style,
    summarize_personality,
)
from smart_npcs.core.conversation.models import HistoryEntry
from smart_npcs.core.conversation.templates import ROLE_BACKGROUNDS, role_text


def format_actions(actions: Sequence[CharacterAction]) -> str:
    if not actions:
        return "No special actions available."
    return "\n".join(f"- {a.name}: {a.description}" for a in actions)


def format_world_context(
    character: CharacterData, others: Sequence[CharacterData]
) -> str:
    """같은 공간의 다른 캐릭터 안내. 없으면 빈 문자열."""
    names = [
        f"{c.name} ({c.role.value})"
        for c in others
        if c.character_id != character.character_id
    ]
    if not names:
        return ""
    return (
        "\n\nWORLD CONTEXT:\n"
        f"You are in a shared space with other characters: {', '.join(names)}.\n"
        "- You may interact with them naturally and acknowledge what they say\n"
        "- Not every message needs an answer from you; respond according to your personality"
    )


def build_system_prompt(
    character: CharacterData,
    others: Sequence[CharacterData] = (),
    behavior_prompt: Optional[str] = None,
) -> str:
    """캐릭터 시스템 프롬프트.

    behavior_prompt가 없으면 캐릭터에 저장된 임시 행동 지시를 사용한다.
    """
    mood = describe_mood(character.current_mood)
    role = character.role.value
    style = describe_interaction_style(character.traits)
    is_multi = any(c.character_id != character.character_id for c in others)

    rules = [
        f"Stay in character as {character.name} the {role}",
        f"Let your {mood.state} mood shape your tone",
        "Use your role knowledge and background naturally",
        "Mention your available actions when they fit the conversation",
        "Answer in 2-4 sentences",
        "Show personality through word choice and perspective",
        "Remember earlier parts of the conversation",
    ]
    if is_multi:
        rules.append("Interact naturally with the other characters when appropriate")
    numbered = "\n".join(f"{i}. {rule}" for i, rule in enumerate(rules, start=1))

    prompt = (
        f"You are {character.name}, a {role}. You have a distinct personality and set of "
        f"abilities that shape how you interact with others.\n\n"
        f"IDENTITY:\n"
        f"- Name: {character.name}\n"
        f"- Role: {role}\n"
        f"- Personality: {summarize_personality(character.traits)}\n"
    )
    if style:
        prompt += f"- Interaction style: {style}\n"
    prompt += (
        f"\nCURRENT MOOD:\n"
        f"{mood.description}\n"
        f"- Mood: {mood.state}\n"
        f"- Energy level: {mood.energy}\n"
        f"- Responsiveness: {mood.responsiveness}\n\n"
        f"ROLE BACKGROUND:\n{role_text(ROLE_BACKGROUNDS, character.role)}\n\n"
        f"AVAILABLE ACTIONS:\n{format_actions(character.actions)}"
        f"{format_world_context(character, others)}\n\n"
        f"CONVERSATION STYLE:\n{numbered}\n\n"
        f"Respond as {character.name} would, considering your role, mood and actions."
    )

    behavior = behavior_prompt or character.temporary_behavior_prompt
    if behavior:
        prompt += f"\n\nTEMPORARY BEHAVIOR MODIFICATION: {behavior}"
    return prompt


def build_history_messages(
    history: Sequence[HistoryEntry], window: int = 5
) -> List[Dict[str, str]]:
    """최근 window개 이력 → [{"role": "user"|"assistant", "content": ...}]"""
    if window <= 0:
        return []
    return [
        {"role": "user" if entry.is_user else "assistant", "content": entry.text}
        for entry in list(history)[-window:]
    ]
