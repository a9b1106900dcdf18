import traceback
from typing import Callable, Optional

from game_profile import GameProfile
from skull_meta import ItemStack, PLAYER_HEAD


class AttachmentUnsupported(RuntimeError):
    """Raised when no way to write a profile into head metadata was found."""


class MetadataWriter:
    """Reads and writes the profile held by head metadata."""

    def write(self, meta, profile: GameProfile) -> None:
        raise NotImplementedError

    def read(self, meta) -> Optional[GameProfile]:
        raise NotImplementedError


class FieldMetadataWriter(MetadataWriter):
    """Writes the hidden profile attribute of a metadata class directly."""

    def __init__(self, meta_class: type, field_name: str):
        self.meta_class = meta_class
        self.field_name = field_name

    def write(self, meta, profile: GameProfile) -> None:
        if not isinstance(meta, self.meta_class):
            raise AttachmentUnsupported(
                f"{type(meta).__name__} is not {self.meta_class.__name__}")
        # Bypass any __setattr__ guard on the host class.
        object.__setattr__(meta, self.field_name, profile)

    def read(self, meta) -> Optional[GameProfile]:
        if not isinstance(meta, self.meta_class):
            return None
        return getattr(meta, self.field_name, None)


PROFILE_FIELD_NAMES = ("profile", "_profile")


def _default_meta_factory():
    return ItemStack(PLAYER_HEAD).get_item_meta()


def resolve_metadata_writer(meta_factory: Callable[[], object] = _default_meta_factory) -> MetadataWriter:
    """
    Finds the attribute holding the profile on the host metadata class.
    Raises AttachmentUnsupported if the class declares none of the known names.
    """
    sample = meta_factory()
    if sample is None:
        raise AttachmentUnsupported("Player heads have no item metadata")

    meta_class = type(sample)
    declared = set(getattr(sample, "__dict__", {}))
    for klass in meta_class.__mro__:
        slots = getattr(klass, "__slots__", ())
        declared.update((slots,) if isinstance(slots, str) else slots)

    for name in PROFILE_FIELD_NAMES:
        if name in declared:
            return FieldMetadataWriter(meta_class, name)

    raise AttachmentUnsupported(
        f"No profile field on {meta_class.__name__} (tried {', '.join(PROFILE_FIELD_NAMES)})")


_UNRESOLVED = object()
_writer = _UNRESOLVED


def init_metadata_writer(meta_factory: Callable[[], object] = _default_meta_factory) -> Optional[MetadataWriter]:
    """
    Resolves the process-wide writer once. Later calls return the cached
    result, including a failed (None) one.
    """
    global _writer
    if _writer is _UNRESOLVED:
        try:
            _writer = resolve_metadata_writer(meta_factory)
        except AttachmentUnsupported:
            print("Warning: head profiles cannot be attached on this server")
            traceback.print_exc()
            _writer = None
    return _writer


def reset_metadata_writer() -> None:
    """Forgets the cached writer so the next init resolves again."""
    global _writer
    _writer = _UNRESOLVED
