"""성격 수치 → 자연어 요약 (LLM 프롬프트용)"""

from typing import Dict, List, Tuple

from smart_npcs.core.character.models import TraitBag


def _top(values: Dict[str, float], n: int) -> List[Tuple[str, float]]:
    # sorted는 안정 정렬이므로 동률이면 선언 순서
    return sorted(values.items(), key=lambda kv: kv[1], reverse=True)[:n]


def _emotion_intensity(weight: float) -> str:
    if weight > 0.7:
        return "very"
    if weight > 0.5:
        return "quite"
    return "somewhat"


def _behavior_intensity(weight: float) -> str:
    if weight > 0.7:
        return "highly"
    if weight > 0.5:
        return "quite"
    return "moderately"


def summarize_personality(traits: TraitBag) -> str:
    """상위 감정 2개 + 상위 행동 2개.

    예: "very happiness and quite curiosity, highly sociability and quite energy"
    """
    emotions = _top(traits.emotional_weights.to_dict(), 2)
    behaviors = _top(traits.behavioral_traits.to_dict(), 2)
    emotion_part = " and ".join(f"{_emotion_intensity(w)} {n}" for n, w in emotions)
    behavior_part = " and ".join(f"{_behavior_intensity(w)} {n}" for n, w in behaviors)
    return f"{emotion_part}, {behavior_part}"


def describe_interaction_style(traits: TraitBag) -> str:
    """sociability / intelligence / creativity 기반 대화 스타일 서술. 해당 없으면 빈 문자열."""
    behaviors = traits.behavioral_traits
    parts: List[str] = []

    if behaviors.sociability > 0.7:
        parts.append("Highly social - you enjoy long conversations and building connections.")
    elif behaviors.sociability < 0.3:
        parts.append("Reserved - you prefer brief, purposeful interactions.")

    if behaviors.intelligence > 0.7:
        parts.append("Intellectual - you analyze topics deeply and enjoy complex discussions.")

    if behaviors.creativity > 0.7:
        parts.append(
            "Creative - you approach topics from unique angles and enjoy imaginative thinking."
        )

    return " ".join(parts)
