"""Smart NPCs: character records, direct chats and multi-character rooms."""

__version__ = "0.1.0-alpha"
