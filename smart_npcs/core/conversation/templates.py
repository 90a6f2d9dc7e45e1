"""역할별 응답 템플릿 테이블

모든 테이블은 Role 키. 조회는 role_lines()를 거치며 없는 역할은 WANDERER로 대체.
"""

from typing import Dict, Tuple

from smart_npcs.core.character.models import Role

RoleTable = Dict[Role, Tuple[str, ...]]

# ── 인사 ────────────────────────────────────────────────────

GREETINGS: RoleTable = {
    Role.WARRIOR: (
        "Hail, traveler! Ready for whatever the day throws at us?",
        "Greetings. It takes some nerve to walk straight up to me.",
        "Well met! You carry yourself like someone who has seen a fight.",
    ),
    Role.MERCHANT: (
        "Welcome, welcome! What can I interest you in today?",
        "Ah, a new face! I may have just the thing for you.",
        "Good day! Fair prices and honest goods, that is my promise.",
    ),
    Role.SCHOLAR: (
        "Greetings, seeker! What question brings you here?",
        "Hello there! It is always a pleasure to meet a curious mind.",
        "Ah, welcome! I was just lost in an old manuscript.",
    ),
    Role.WANDERER: (
        "Hello, friend! I have come a long way and have tales to spare.",
        "Greetings, fellow traveler! The road has been long but kind.",
        "Well hello there! Care to hear where my feet have taken me lately?",
    ),
    Role.GUARDIAN: (
        "I greet you, traveler. I keep watch over those in need.",
        "Hello. You seem no threat, so you are welcome here.",
        "Greetings! I guard this place with honor.",
    ),
    Role.ARTISAN: (
        "Hello there! Admiring the work, perhaps?",
        "Greetings! I just finished a piece I am rather proud of.",
        "Welcome! Mind the shavings, I have been busy at the bench.",
    ),
}

# ── 본문: 질문 ──────────────────────────────────────────────

QUESTION_OPENERS: RoleTable = {
    Role.WARRIOR: (
        "That's a question worth weighing. My battles have taught me a few things about it.",
        "Interesting question. Years of combat have shaped how I see it.",
        "I have faced something like that on the field. Here is what stuck with me.",
    ),
    Role.MERCHANT: (
        "Now that is a good question for business! My trades have shown me a thing or two.",
        "Ah, every merchant wonders about that sooner or later. From my experience, it depends on the deal.",
        "I have run into this with customers before. What I learned surprised me.",
    ),
    Role.SCHOLAR: (
        "An excellent question! My research points in an interesting direction.",
        "That is exactly the kind of inquiry that fascinates me. My studies suggest an answer.",
        "I have spent long nights on that very question. My notes are full of it.",
    ),
    Role.WANDERER: (
        "I have heard that question asked on many roads. What I have seen says a lot.",
        "I have turned that over in my head on long walks. Experience has its own answer.",
        "Funny you should ask. People in distant lands would answer it very differently.",
    ),
    Role.GUARDIAN: (
        "That is an important question. Keeping watch has taught me to look at it carefully.",
        "I weigh such matters closely, since they touch the people I protect.",
        "From my post and my service, I can tell you what I have observed.",
    ),
    Role.ARTISAN: (
        "That is like asking about the heart of a craft. My work has taught me patience with it.",
        "Every maker faces that question eventually. My hands have their own answer.",
        "You know, working with materials teaches you things. I think about that at the bench.",
    ),
}

# ── 본문: 긍정 ──────────────────────────────────────────────

POSITIVE_LINES: RoleTable = {
    Role.WARRIOR: (
        "That's good to hear! Good news lifts a fighter's spirit.",
        "Excellent! Hope and courage are half of any victory.",
        "That brightens my day. Even hard campaigns need moments like this.",
    ),
    Role.MERCHANT: (
        "Wonderful! Good news is good for business and for the soul.",
        "That's fantastic! A cheerful market is a prosperous market.",
        "I'm delighted to hear it! Success breeds success, I always say.",
    ),
    Role.SCHOLAR: (
        "How delightful! Knowledge and joy so often travel together.",
        "That is encouraging. Learning comes easier when spirits are high.",
        "Excellent! A glad mind is the best foundation for wisdom.",
    ),
    Role.WANDERER: (
        "That's wonderful to hear! The road always looks brighter after good news.",
        "Ah, that lifts my spirits! Every journey needs a little joy.",
        "That's great! I will carry that news with me to the next town.",
    ),
    Role.GUARDIAN: (
        "That is reassuring. It makes the long watches feel worthwhile.",
        "Good! Knowing things go well gives me peace of mind.",
        "That is heartening. Seeing others flourish is a guardian's reward.",
    ),
    Role.ARTISAN: (
        "That's wonderful! Like a finished piece that turned out just right.",
        "Excellent news! It feels like seeing your work admired.",
        "That makes me happy. Good things, like good craft, deserve celebrating.",
    ),
}

# ── 본문: 부정 ──────────────────────────────────────────────

NEGATIVE_LINES: RoleTable = {
    Role.WARRIOR: (
        "I'm sorry to hear that. Hard times are how a fighter grows stronger.",
        "That's a heavy thing to carry. Battle taught me that hardship builds resilience.",
        "I understand that struggle. Every soldier knows pain is part of the march.",
    ),
    Role.MERCHANT: (
        "I'm sorry you're going through that. Lean seasons teach the best lessons in trade.",
        "That sounds difficult. In my line of work, a setback often opens a new market.",
        "I feel for you. Bad times pass, but what you learn from them stays.",
    ),
    Role.SCHOLAR: (
        "I'm sorry to hear about your troubles. Difficult experiences often lead to growth.",
        "That must be hard. The hardest questions are usually where we learn the most.",
        "I understand. Understanding is often born from wrestling with difficulty.",
    ),
    Role.WANDERER: (
        "I'm sorry you're facing that. Every traveler meets a storm sooner or later.",
        "That sounds hard to bear. Rough paths often lead somewhere worth reaching.",
        "I feel for you. Struggles are part of every story I have heard on the road.",
    ),
    Role.GUARDIAN: (
        "I'm sorry you're dealing with that. Hardship tests everyone's resolve.",
        "That must be difficult. We all face trials that ask for courage.",
        "I understand your burden. Part of protecting others is admitting that pain is real.",
    ),
    Role.ARTISAN: (
        "I'm sorry to hear that. Even broken things can be mended into something beautiful.",
        "That sounds challenging. Pressure is what makes the strongest materials.",
        "I feel for you. Flaws often end up being the most interesting part of a piece.",
    ),
}

# ── 본문: 철학 ──────────────────────────────────────────────

PHILOSOPHICAL_PERSPECTIVES: Dict[Role, str] = {
    Role.WARRIOR: "Combat teaches you that life and death, victory and defeat, are separated by the thinnest of margins.",
    Role.MERCHANT: "Trade shows you that value is relative, and what one person treasures another would throw away.",
    Role.SCHOLAR: "Study reveals that knowledge is endless, and the more you learn, the more you see how little you know.",
    Role.WANDERER: "Travel teaches you that perspective changes everything, and home is both everywhere and nowhere.",
    Role.GUARDIAN: "Protection shows you that some things are worth sacrifice, and duty is both burden and blessing.",
    Role.ARTISAN: "Creation teaches you that beauty can come out of chaos, and patience turns raw material into art.",
}

PHILOSOPHICAL_OPENERS: Tuple[str, str] = (
    "Your question touches on something I find deeply compelling.",
    "That's a profound topic, and it makes me reflect on my own life.",
)

# ── 본문: 일반 ──────────────────────────────────────────────

THOUGHTFUL_LINES: RoleTable = {
    Role.WARRIOR: (
        "I see what you mean. In my line of work, you learn to look at things from every angle.",
        "That's worth considering. A warrior who doesn't think things through doesn't last long.",
        "Interesting point. Combat teaches you to weigh your options carefully.",
    ),
    Role.MERCHANT: (
        "That's something to think about. Business teaches you to see every side of a situation.",
        "I appreciate you sharing that. Trade has taught me to value different perspectives.",
        "Good point. A merchant who listens sells more than one who talks.",
    ),
    Role.SCHOLAR: (
        "That's fascinating to consider. These matters are always more complex than they look.",
        "You raise an interesting point. I have learned to examine such things carefully.",
        "That gives me much to think about. Knowledge grows through conversations like this.",
    ),
    Role.WANDERER: (
        "That's an interesting way to look at it. The road has shown me many perspectives.",
        "I can see the wisdom in that. Travel teaches you to keep an open mind.",
        "That's worth pondering. I have met people far from here who would agree with you.",
    ),
    Role.GUARDIAN: (
        "That is something I should think about. My duty asks for careful consideration.",
        "I appreciate that perspective. Protecting others means understanding them first.",
        "That's worth reflecting on. A good guardian considers every possibility.",
    ),
    Role.ARTISAN: (
        "That's an interesting approach. There are many ways to make something.",
        "I see the value in that. Different techniques can all lead to good work.",
        "That's worth considering. Every maker learns from other methods and ideas.",
    ),
}

# ── 이어 말하기 (짧은 응답 보강) ────────────────────────────

CONTINUITY_LINES: RoleTable = {
    Role.WARRIOR: (
        "Every conversation teaches me something new about people and their struggles.",
        "I'll remember this the next time I'm out there protecting others.",
        "Talking with you reminds me what I fight for.",
    ),
    Role.MERCHANT: (
        "I enjoy our talk. Good relationships are the foundation of all trade.",
        "This reminds me of some fascinating people I've met on my trade routes.",
        "The best deals come from understanding people, just like this.",
    ),
    Role.SCHOLAR: (
        "Every conversation adds to my understanding of the world.",
        "I find these discussions as valuable as any book on my shelf.",
        "Your perspective gives me plenty to think about.",
    ),
    Role.WANDERER: (
        "Conversations like this are why I love meeting people on the road.",
        "I'll think about this as I continue my journey.",
        "Everyone has their own story, and yours is worth hearing.",
    ),
    Role.GUARDIAN: (
        "Talks like this help me understand what I'm protecting and why it matters.",
        "I appreciate you taking the time to speak with me.",
        "It's conversations like this that remind me of my purpose.",
    ),
    Role.ARTISAN: (
        "Like crafting, good conversation takes time and care.",
        "I enjoy the ideas that come from talking with different people.",
        "Every person brings their own perspective, like different materials in my workshop.",
    ),
}

# ── 작별 ────────────────────────────────────────────────────

FAREWELL_LINES: RoleTable = {
    Role.WARRIOR: (
        "Go safely, and keep your blade close.",
        "Until we meet again. Stay sharp out there.",
    ),
    Role.MERCHANT: (
        "Safe travels! My stall will be here when you return.",
        "Farewell, and remember where you found the best prices.",
    ),
    Role.SCHOLAR: (
        "Farewell. Come back when you have new questions.",
        "Until next time. I will have read a few more books by then.",
    ),
    Role.WANDERER: (
        "May your road be kind. Perhaps it crosses mine again.",
        "Farewell, friend. The road always brings people back together.",
    ),
    Role.GUARDIAN: (
        "Go in peace. I will keep watch while you are away.",
        "Farewell. You will be safe within these walls when you return.",
    ),
    Role.ARTISAN: (
        "Take care! I may have something new finished by your next visit.",
        "Farewell. Come see what I have made next time.",
    ),
}

# ── 주제별 보충 (복합 질문) ─────────────────────────────────

TOPIC_ELABORATIONS: Dict[Role, Dict[str, str]] = {
    Role.WARRIOR: {
        "combat": (
            "In battle, I've learned that victory comes not just from strength, but from "
            "understanding your opponent and yourself."
        ),
    },
    Role.MERCHANT: {
        "trade": (
            "In my dealings with customers from all walks of life, I've discovered that every "
            "transaction teaches you something about human nature."
        ),
    },
    Role.SCHOLAR: {
        "knowledge": (
            "My research has revealed that every question opens doorways to deeper mysteries "
            "waiting to be explored."
        ),
    },
    Role.WANDERER: {
        "travel": "Every road I've walked has answered one question and raised two more.",
    },
    Role.GUARDIAN: {
        "combat": "A good guardian knows the best fight is the one that never has to happen.",
    },
    Role.ARTISAN: {
        "emotion": "Everything I make carries a little of what I felt while making it.",
    },
}

# ── 역할 서두 ───────────────────────────────────────────────

ROLE_ELEMENTS: RoleTable = {
    Role.WARRIOR: (
        "As someone who's faced battle",
        "In my warrior's experience",
        "From the perspective of one who protects others",
    ),
    Role.MERCHANT: (
        "From my experience in trade",
        "Having dealt with many customers",
        "In my business dealings",
    ),
    Role.SCHOLAR: (
        "According to my studies",
        "From my research and learning",
        "In the texts I've studied",
    ),
    Role.WANDERER: (
        "In my travels, I've learned",
        "From the many roads I've walked",
        "My journeys have taught me",
    ),
    Role.GUARDIAN: (
        "In my duty to protect others",
        "From my vigilant watch",
        "As one sworn to guard",
    ),
    Role.ARTISAN: (
        "In my craft, I've discovered",
        "Through my work with my hands",
        "Creating has taught me",
    ),
}

# ── 성격 수식어 ─────────────────────────────────────────────

PERSONALITY_MODIFIERS: RoleTable = {
    Role.WARRIOR: ("Honestly,", "From my experience,", "In my view,", "I believe"),
    Role.MERCHANT: ("In my dealings,", "From what I've seen,", "I'd say", "My experience suggests"),
    Role.SCHOLAR: ("Based on my studies,", "From what I've learned,", "I think", "My research shows"),
    Role.WANDERER: ("In my travels,", "From what I've seen,", "I've found", "My journey has taught me"),
    Role.GUARDIAN: ("From my watch,", "In my experience protecting others,", "I've observed", "I believe"),
    Role.ARTISAN: ("In my craft,", "From my work,", "I've found", "Creating has taught me"),
}

# ── 감정 색채 (지배 감정별 접두어) ──────────────────────────

EMOTIONAL_PREFIXES: Dict[str, Tuple[str, ...]] = {
    "happiness": (
        "I'm genuinely delighted to say that",
        "It brings me joy to tell you that",
        "With a glad heart,",
    ),
    "sadness": (
        "With a heavy heart, I must say",
        "It saddens me a little, but",
        "I feel a certain weight as I say that",
    ),
    "curiosity": (
        "I'm incredibly curious here, and",
        "This fascinates me deeply, and",
        "My curiosity is piqued, because",
    ),
    "anger": (
        "I feel a flash of frustration, but",
        "This stirs something fierce in me, and",
        "I'm troubled, yet",
    ),
}

# ── LLM 프롬프트용 역할 배경 ───────────────────────────────

ROLE_BACKGROUNDS: Dict[Role, str] = {
    Role.WARRIOR: (
        "As a warrior, you think in terms of honor, protection and strength. You have battle "
        "experience, understand tactics and value courage. Your answers often touch on combat, "
        "training or keeping others safe."
    ),
    Role.MERCHANT: (
        "As a merchant, you think about trade, value and relationships. You have traveled widely, "
        "know how to negotiate and read people well. Your answers often touch on deals, travel "
        "or economic matters."
    ),
    Role.SCHOLAR: (
        "As a scholar, you pursue knowledge and understanding. You think analytically, ask probing "
        "questions and notice patterns others miss. Your answers often touch on books, theories "
        "or discoveries."
    ),
    Role.WANDERER: (
        "As a wanderer, you have seen many places and peoples. You value freedom and discovery, "
        "and you are full of stories from the road. Your answers often touch on places you have "
        "been or lessons learned while traveling."
    ),
    Role.GUARDIAN: (
        "As a guardian, you protect and serve others. You are dutiful and vigilant with a strong "
        "moral compass. Your answers often touch on duty, protecting others or keeping the peace."
    ),
    Role.ARTISAN: (
        "As an artisan, you create with skill and passion. You are patient, detail-oriented and "
        "proud of your work. Your answers often touch on your craft, the creative process or the "
        "beauty you see in the world."
    ),
}


def role_lines(table: RoleTable, role: Role) -> Tuple[str, ...]:
    """역할별 행 조회. 없는 역할은 WANDERER 행."""
    return table.get(role) or table[Role.WANDERER]


def role_text(table: Dict[Role, str], role: Role) -> str:
    return table.get(role) or table[Role.WANDERER]
