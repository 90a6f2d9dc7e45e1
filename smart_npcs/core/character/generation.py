"""성격 패턴 생성 및 역할별 기본 행동

generate_traits는 재현성을 위해 seed 또는 rng를 받는다.
"""

import random
import string
import uuid
from typing import Dict, List, Optional

from smart_npcs.core.character.models import (
    BehavioralTraits,
    CharacterAction,
    EmotionalWeights,
    Role,
    TraitBag,
)

# ── 역할별 기본 행동 ─────────────────────────────────────────

ROLE_DEFAULT_ACTIONS: Dict[Role, List[CharacterAction]] = {
    Role.WARRIOR: [
        CharacterAction("w1", "Battle Cry", "Boost morale and intimidate enemies"),
        CharacterAction("w2", "Shield Bash", "Stun an opponent with your shield"),
    ],
    Role.MERCHANT: [
        CharacterAction("m1", "Price Check", "Evaluate the true value of items"),
        CharacterAction("m2", "Trade Network", "Connect with other merchants for deals"),
    ],
    Role.SCHOLAR: [
        CharacterAction("s1", "Research", "Gather detailed information on any topic"),
        CharacterAction("s2", "Ancient Knowledge", "Recall historical facts and lore"),
    ],
    Role.WANDERER: [
        CharacterAction("wan1", "Track", "Follow trails and find hidden paths"),
        CharacterAction("wan2", "Survival Instinct", "Find food, water, and shelter"),
    ],
    Role.GUARDIAN: [
        CharacterAction("g1", "Protective Ward", "Create a barrier to protect allies"),
        CharacterAction("g2", "Vigilant Watch", "Detect threats and dangers early"),
    ],
    Role.ARTISAN: [
        CharacterAction("a1", "Craft Item", "Create useful tools or decorative items"),
        CharacterAction("a2", "Repair", "Fix broken items and equipment"),
    ],
}

_OBSERVE = CharacterAction("default1", "Observe", "Carefully watch the surroundings")


def default_actions(role: Role) -> List[CharacterAction]:
    """역할 기본 행동 목록 (복사본)"""
    actions = ROLE_DEFAULT_ACTIONS.get(role, [_OBSERVE])
    return [CharacterAction(a.id, a.name, a.description) for a in actions]


def generate_traits(
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> TraitBag:
    """무작위 성격 패턴 생성. 각 값은 [0, 1) 균등분포.

    Args:
        seed: 재현성을 위한 RNG 시드. rng가 주어지면 무시.
        rng: 외부 주입 RNG.
    """
    rng = rng or random.Random(seed)
    emotions = EmotionalWeights(
        happiness=rng.random(),
        sadness=rng.random(),
        anger=rng.random(),
        fear=rng.random(),
        curiosity=rng.random(),
        aggression=rng.random(),
    )
    behaviors = BehavioralTraits(
        sociability=rng.random(),
        energy=rng.random(),
        creativity=rng.random(),
        loyalty=rng.random(),
        intelligence=rng.random(),
    )
    suffix = "".join(rng.choice(string.ascii_uppercase + string.digits) for _ in range(5))
    return TraitBag(
        pattern_id=str(uuid.UUID(int=rng.getrandbits(128), version=4)),
        name=f"FOXP2-{suffix}",
        emotional_weights=emotions,
        behavioral_traits=behaviors,
    )
