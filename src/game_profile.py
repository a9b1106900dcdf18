import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Property:
    name: str
    value: str
    signature: Optional[str] = None


@dataclass
class GameProfile:
    """
    A player identity as the game client sees it.
    Properties are a multimap: one name can hold several values.
    """
    id: Optional[uuid.UUID]
    name: Optional[str] = None
    properties: Dict[str, List[Property]] = field(default_factory=dict)

    def put_property(self, prop: Property) -> None:
        self.properties.setdefault(prop.name, []).append(prop)

    def get_properties(self, name: str) -> List[Property]:
        return list(self.properties.get(name, []))

    @classmethod
    def with_textures(cls, value: str) -> "GameProfile":
        """Anonymous profile with a random id carrying only a textures value."""
        profile = cls(uuid.uuid4(), None)
        profile.put_property(Property("textures", value))
        return profile


@dataclass(frozen=True)
class SkullTexture:
    value: str
    profile_id: Optional[uuid.UUID]
