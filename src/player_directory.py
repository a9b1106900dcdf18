import hashlib
import uuid
from collections import OrderedDict
from typing import Union

import requests

from skull_meta import OfflinePlayer


def offline_uuid(name: str) -> uuid.UUID:
    """
    Offline-mode UUID for a player name, same as Java's
    UUID.nameUUIDFromBytes("OfflinePlayer:" + name).
    """
    digest = hashlib.md5(("OfflinePlayer:" + name).encode("utf-8")).digest()
    # version=3 sets the version and IETF variant bits
    return uuid.UUID(bytes=digest, version=3)


class PlayerLookupError(Exception):
    """Raised when a directory answers with something that is not a player."""


class PlayerDirectory:
    """Resolves player names or UUIDs to offline player identities."""

    def get_offline_player(self, identifier: Union[str, uuid.UUID]) -> OfflinePlayer:
        raise NotImplementedError


class OfflinePlayerDirectory(PlayerDirectory):
    """
    Identities of an offline-mode server. Never touches the network.
    The most recent MAX_KNOWN players looked up by name are remembered so a
    later UUID lookup finds the name again.
    """
    MAX_KNOWN = 1024

    def __init__(self, max_known: int = MAX_KNOWN):
        self.max_known = max_known
        self._known: "OrderedDict[uuid.UUID, OfflinePlayer]" = OrderedDict()

    def get_offline_player(self, identifier: Union[str, uuid.UUID]) -> OfflinePlayer:
        if isinstance(identifier, uuid.UUID):
            return self._known.get(identifier, OfflinePlayer(identifier, None))

        player = OfflinePlayer(offline_uuid(identifier), identifier)
        self._known[player.unique_id] = player
        self._known.move_to_end(player.unique_id)
        while len(self._known) > self.max_known:
            self._known.popitem(last=False)
        return player


class MojangPlayerDirectory(PlayerDirectory):
    """
    Identities of an online-mode server, looked up by name on the Mojang API.
    Unknown names fall back to their offline identity.
    """
    PROFILE_URL = "https://api.mojang.com/users/profiles/minecraft/{}"
    TIMEOUT = 10

    def __init__(self, session: requests.Session = None):
        self.session = session or requests.Session()
        self._offline = OfflinePlayerDirectory()

    def get_offline_player(self, identifier: Union[str, uuid.UUID]) -> OfflinePlayer:
        if isinstance(identifier, uuid.UUID):
            return self._offline.get_offline_player(identifier)

        resp = self.session.get(self.PROFILE_URL.format(identifier), timeout=self.TIMEOUT)
        if resp.status_code in (204, 404):
            print(f"Player '{identifier}' not found on Mojang, using offline identity")
            return self._offline.get_offline_player(identifier)
        resp.raise_for_status()

        try:
            data = resp.json()
            player_id = uuid.UUID(hex=data["id"])
            name = data.get("name", identifier)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise PlayerLookupError(f"Unexpected Mojang profile for '{identifier}': {e}") from e
        return OfflinePlayer(player_id, name)
