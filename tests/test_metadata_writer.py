"""Tests for resolving and using the head profile attachment point."""
from __future__ import annotations

import uuid

import pytest

import metadata_writer
from game_profile import GameProfile
from metadata_writer import (
    AttachmentUnsupported,
    FieldMetadataWriter,
    init_metadata_writer,
    resolve_metadata_writer,
)
from skull_meta import SkullMeta


class SlottedMeta:
    __slots__ = ("profile",)


class PlainMeta:
    def __init__(self):
        self.owner = None


class TestResolve:

    def test_default_head_meta(self):
        writer = resolve_metadata_writer()
        assert isinstance(writer, FieldMetadataWriter)
        assert writer.meta_class is SkullMeta
        assert writer.field_name == "_profile"

    def test_slots(self):
        writer = resolve_metadata_writer(SlottedMeta)
        assert writer.field_name == "profile"

    def test_no_field(self):
        with pytest.raises(AttachmentUnsupported):
            resolve_metadata_writer(PlainMeta)

    def test_no_meta(self):
        with pytest.raises(AttachmentUnsupported):
            resolve_metadata_writer(lambda: None)


class TestFieldWriter:

    def test_write_and_read(self, writer, meta):
        profile = GameProfile(uuid.uuid4(), None)
        writer.write(meta, profile)
        assert writer.read(meta) is profile

    def test_write_into_slots(self):
        writer = resolve_metadata_writer(SlottedMeta)
        target = SlottedMeta()
        profile = GameProfile(uuid.uuid4(), None)
        writer.write(target, profile)
        assert target.profile is profile

    def test_unset_slot_reads_none(self):
        writer = resolve_metadata_writer(SlottedMeta)
        assert writer.read(SlottedMeta()) is None

    def test_foreign_meta(self, writer):
        with pytest.raises(AttachmentUnsupported):
            writer.write(PlainMeta(), GameProfile(uuid.uuid4(), None))
        assert writer.read(PlainMeta()) is None


class TestInitOnce:

    def test_cached(self):
        first = init_metadata_writer()
        assert first is not None
        assert init_metadata_writer() is first

    def test_failure_is_cached(self, capsys):
        calls = []

        def factory():
            calls.append(1)
            return PlainMeta()

        assert init_metadata_writer(factory) is None
        assert init_metadata_writer(factory) is None
        assert len(calls) == 1
        assert "cannot be attached" in capsys.readouterr().out

    def test_reset(self):
        assert init_metadata_writer(PlainMeta) is None
        metadata_writer.reset_metadata_writer()
        assert init_metadata_writer() is not None
