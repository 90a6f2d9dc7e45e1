"""기분(mood) 갱신과 서술

mood는 항상 0.0 ~ 1.0. 모든 갱신은 클램프를 거친다.
"""

from dataclasses import dataclass

MOOD_MIN = 0.0
MOOD_MAX = 1.0
MOOD_DELTA_LIMIT = 0.1  # 한 턴의 mood 변화 상한


def clamp_mood(value: float) -> float:
    """0.0 ~ 1.0 클램프."""
    return max(MOOD_MIN, min(MOOD_MAX, value))


def clamp_mood_delta(delta: float) -> float:
    """-0.1 ~ +0.1 클램프."""
    return max(-MOOD_DELTA_LIMIT, min(MOOD_DELTA_LIMIT, delta))


def apply_mood_delta(current: float, delta: float) -> float:
    """new = clamp(current + delta, 0, 1)"""
    return clamp_mood(current + delta)


@dataclass(frozen=True)
class MoodDescriptor:
    """LLM 프롬프트용 기분 서술"""

    state: str
    description: str
    energy: str
    responsiveness: str


def describe_mood(mood: float) -> MoodDescriptor:
    if mood > 0.8:
        return MoodDescriptor(
            "euphoric",
            "You are in an exceptionally positive state. Everything seems bright and possible.",
            "very high",
            "extremely engaged and talkative",
        )
    if mood > 0.6:
        return MoodDescriptor(
            "happy",
            "You are in a good mood, optimistic and energetic.",
            "high",
            "engaged and conversational",
        )
    if mood > 0.4:
        return MoodDescriptor(
            "content",
            "You are in a balanced, neutral state.",
            "moderate",
            "steady and thoughtful",
        )
    if mood > 0.2:
        return MoodDescriptor(
            "melancholy",
            "You are feeling somewhat down or troubled.",
            "low",
            "subdued but still willing to talk",
        )
    return MoodDescriptor(
        "depressed",
        "You are in a very low emotional state, struggling with negativity.",
        "very low",
        "withdrawn and brief in responses",
    )


def mood_level(mood: float) -> str:
    """high / good / neutral / low / very low"""
    if mood > 0.7:
        return "high"
    if mood > 0.5:
        return "good"
    if mood > 0.3:
        return "neutral"
    if mood > 0.1:
        return "low"
    return "very low"
