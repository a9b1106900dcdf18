"""
Host object model for player heads.

Mirrors the parts of the server item API that head skins touch: an item stack
that hands out copies of its metadata, and head metadata whose profile can
only be replaced through the owner setters or by writing the hidden field.
"""

import copy
import re
import uuid
from dataclasses import dataclass
from typing import Optional

from game_profile import GameProfile

PLAYER_HEAD = "PLAYER_HEAD"


@dataclass(frozen=True)
class OfflinePlayer:
    unique_id: uuid.UUID
    name: Optional[str] = None


@dataclass(frozen=True, order=True)
class ServerVersion:
    major: int
    minor: int
    patch: int = 0

    _VERSION_RE = re.compile(r"(\d+)\.(\d+)(?:\.(\d+))?")

    @classmethod
    def parse(cls, text: str) -> "ServerVersion":
        """Parses "1.16.5" style versions. Trailing build tags are ignored."""
        match = cls._VERSION_RE.match(text.strip())
        if not match:
            raise ValueError(f"Invalid server version: {text}")
        major, minor, patch = match.groups()
        return cls(int(major), int(minor), int(patch or 0))

    def supports(self, minor: int) -> bool:
        # Year based versions (26.1 onwards) are newer than any 1.x release
        return self.major > 1 or self.minor >= minor

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


class SkullMeta:
    """Metadata of a player head. The profile has no public setter."""

    def __init__(self):
        self._profile: Optional[GameProfile] = None
        self.owning_player: Optional[OfflinePlayer] = None
        self.owner: Optional[str] = None
        self.display_name: Optional[str] = None

    def set_owning_player(self, player: OfflinePlayer) -> None:
        self.owning_player = player
        self.owner = player.name
        self._profile = GameProfile(player.unique_id, player.name)

    def set_owner(self, name: Optional[str]) -> None:
        """Legacy (pre 1.12) owner assignment by name only."""
        self.owning_player = None
        self.owner = name
        self._profile = GameProfile(None, name) if name else None

    def has_owner(self) -> bool:
        return self.owner is not None or self.owning_player is not None

    def clone(self) -> "SkullMeta":
        return copy.deepcopy(self)


class ItemStack:
    def __init__(self, material: str = PLAYER_HEAD, amount: int = 1):
        self.material = material
        self.amount = amount
        self._meta = SkullMeta() if material == PLAYER_HEAD else None

    def get_item_meta(self) -> Optional[SkullMeta]:
        # Callers get a copy; changes only stick through set_item_meta.
        return self._meta.clone() if self._meta is not None else None

    def set_item_meta(self, meta: Optional[SkullMeta]) -> bool:
        if self._meta is None:
            return False
        self._meta = meta.clone() if meta is not None else SkullMeta()
        return True
