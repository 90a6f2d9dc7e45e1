"""Smart NPCs Core: DB 무관 순수 도메인 로직"""
