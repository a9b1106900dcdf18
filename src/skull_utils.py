"""
Apply skull textures from different sources.

A head skin can be given as a player name, a texture url, the Base64 value of
a textures property, or just the texture hash at the end of a texture url.
"""

import traceback
import uuid
from typing import Optional, Union

import skull_texture
from game_profile import GameProfile, SkullTexture
from metadata_writer import AttachmentUnsupported, MetadataWriter, init_metadata_writer
from player_directory import OfflinePlayerDirectory, PlayerDirectory
from skull_meta import ItemStack, OfflinePlayer, PLAYER_HEAD, ServerVersion, SkullMeta
from skull_texture import IdentifierKind

# Owner assignment by player object instead of name.
UUID_OWNER_MINOR_VERSION = 12


class SkullUtils:
    TEXTURES = skull_texture.TEXTURES_BASE_URL
    DEFAULT_SERVER_VERSION = "1.20.4"

    def __init__(self, writer: Optional[MetadataWriter] = None,
                 directory: Optional[PlayerDirectory] = None,
                 server_version: Union[str, ServerVersion] = DEFAULT_SERVER_VERSION):
        self.writer = writer
        self.directory = directory or OfflinePlayerDirectory()
        if isinstance(server_version, str):
            server_version = ServerVersion.parse(server_version)
        self.server_version = server_version
        self.supports_uuid = server_version.supports(UUID_OWNER_MINOR_VERSION)

    @classmethod
    def create(cls, directory: Optional[PlayerDirectory] = None,
               server_version: Union[str, ServerVersion] = DEFAULT_SERVER_VERSION) -> "SkullUtils":
        """Uses the process-wide writer, resolving it on first use."""
        return cls(init_metadata_writer(), directory, server_version)

    def get_skull(self, player_id: uuid.UUID) -> ItemStack:
        """Creates a player head owned by the player with this UUID."""
        head = ItemStack(PLAYER_HEAD)
        meta = head.get_item_meta()
        if self.supports_uuid:
            meta.set_owning_player(self.directory.get_offline_player(player_id))
        else:
            meta.set_owner(str(player_id))
        head.set_item_meta(meta)
        return head

    def apply_owner(self, meta: SkullMeta, player: OfflinePlayer) -> SkullMeta:
        if self.supports_uuid:
            meta.set_owning_player(player)
        else:
            meta.set_owner(player.name)
        return meta

    def resolve_username(self, name: str) -> OfflinePlayer:
        return self.directory.get_offline_player(name)

    def apply_skin(self, meta: SkullMeta, identifier: Union[str, uuid.UUID, OfflinePlayer]) -> SkullMeta:
        """
        Applies a skin to head metadata in place and returns it.

        Strings are classified first (see skull_texture.classify). Player
        names and UUIDs set the owner; everything else is turned into a
        textures value and attached as an anonymous profile. If the profile
        cannot be attached the error is reported and meta is left as it was.
        """
        if isinstance(identifier, OfflinePlayer):
            return self.apply_owner(meta, identifier)
        if isinstance(identifier, uuid.UUID):
            return self.apply_owner(meta, self.directory.get_offline_player(identifier))

        kind = skull_texture.classify(identifier)
        if kind is IdentifierKind.USERNAME:
            return self.apply_owner(meta, self.resolve_username(identifier))

        if kind is IdentifierKind.TEXTURE_URL:
            value = skull_texture.encode_profile_value(identifier)
        elif kind is IdentifierKind.PROFILE_VALUE:
            value = identifier
        else:
            url = skull_texture.build_descriptor_url(identifier, False)
            value = skull_texture.encode_profile_value(url)

        try:
            self.apply_profile_value(meta, value)
        except AttachmentUnsupported:
            print(f"Could not apply skin '{identifier}'")
            traceback.print_exc()
        return meta

    def apply_profile_value(self, meta: SkullMeta, value: str) -> SkullMeta:
        if not value:
            raise ValueError("Skull value cannot be null or empty")
        if self.writer is None:
            raise AttachmentUnsupported("No metadata writer available for head profiles")

        try:
            self.writer.write(meta, GameProfile.with_textures(value))
        except AttachmentUnsupported:
            raise
        except Exception as e:
            raise AttachmentUnsupported(f"Writing the head profile failed: {e}") from e
        return meta

    def get_skin_value(self, meta: SkullMeta) -> Optional[SkullTexture]:
        """Returns the first non-empty textures value of the head, if any."""
        if self.writer is None:
            return None
        profile = self.writer.read(meta)
        if profile is None:
            return None
        for prop in profile.get_properties("textures"):
            if prop.value:
                return SkullTexture(prop.value, profile.id)
        return None
