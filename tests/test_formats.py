"""
Tests for wire primitives and the revision table.

These tests verify:
1. Reads are bounds-checked and report TruncatedInputError
2. Writes are range-checked and name the offending field
3. Revision rejection rules and per-revision widths
"""

import struct

import pytest

from aof_codec.core.errors import (
    CorruptFormatError,
    FieldRangeError,
    ObsoleteFormatError,
    TruncatedInputError,
    UnsupportedFormatError,
)
from aof_codec.formats.revisions import (
    CURRENT_POLICY,
    CURRENT_REVISION,
    IdStrategy,
    REVISIONS,
    is_rejected,
    policy_for,
)
from aof_codec.formats.wire import ByteReader, ByteWriter


class TestByteReader:
    """Test bounds-checked reads."""

    def test_reads_big_endian(self):
        """Integers are read big-endian."""
        reader = ByteReader(struct.pack('>BHIi', 7, 0x0102, 0xDEADBEEF, -5))
        assert reader.u8() == 7
        assert reader.u16() == 0x0102
        assert reader.u32() == 0xDEADBEEF
        assert reader.i32() == -5
        assert reader.remaining == 0

    def test_read_past_end_raises(self):
        """Reading beyond the buffer raises TruncatedInputError."""
        reader = ByteReader(b'\x00\x01')
        with pytest.raises(TruncatedInputError):
            reader.u32('gameId')

    def test_truncation_context(self):
        """Error context names the field and offset."""
        reader = ByteReader(b'\x05abc')
        reader.u8()
        with pytest.raises(TruncatedInputError) as exc:
            reader.read(5, 'key')
        assert exc.value.context['field'] == 'key'
        assert exc.value.context['offset'] == 1
        assert exc.value.context['remaining'] == 3

    def test_negative_length_is_truncation(self):
        """A negative length cannot be satisfied."""
        reader = ByteReader(b'abc')
        with pytest.raises(TruncatedInputError):
            reader.read(-1)

    def test_failed_read_does_not_advance(self):
        """Offset is unchanged after a failed read."""
        reader = ByteReader(b'\x01')
        with pytest.raises(TruncatedInputError):
            reader.u16()
        assert reader.offset == 0

    def test_truncated_error_is_value_error(self):
        """Format errors are ValueErrors for callers that catch broadly."""
        with pytest.raises(ValueError):
            ByteReader(b'').u8()


class TestByteWriter:
    """Test range-checked writes."""

    def test_writes_big_endian(self):
        writer = ByteWriter()
        writer.u8(1, 'a')
        writer.u16(0x0203, 'b')
        writer.u32(0x04050607, 'c')
        writer.i32(-1, 'd')
        assert writer.getvalue() == b'\x01\x02\x03\x04\x05\x06\x07\xff\xff\xff\xff'
        assert writer.size == 11

    @pytest.mark.parametrize("method,value", [
        ('u8', 256),
        ('u8', -1),
        ('u16', 0x10000),
        ('u32', 2**32),
        ('i32', 2**31),
    ])
    def test_out_of_range_raises(self, method, value):
        """Values outside the wire width raise FieldRangeError."""
        writer = ByteWriter()
        with pytest.raises(FieldRangeError) as exc:
            getattr(writer, method)(value, 'regionId')
        assert exc.value.field == 'regionId'

    def test_non_integer_raises(self):
        with pytest.raises(FieldRangeError):
            ByteWriter().u8('7', 'teamNr')

    def test_sized_u8_too_long(self):
        """A byte string longer than 255 cannot carry a u8 length."""
        writer = ByteWriter()
        with pytest.raises(FieldRangeError) as exc:
            writer.sized_u8(b'x' * 256, 'players[0].name')
        assert exc.value.field == 'players[0].name length'

    def test_sized_prefixes(self):
        writer = ByteWriter()
        writer.sized_u8(b'ab', 'key')
        writer.sized_i32(b'xyz', 'chunk')
        assert writer.getvalue() == b'\x02ab\x00\x00\x00\x03xyz'


class TestRevisionPolicy:
    """Test the revision table."""

    @pytest.mark.parametrize("revision", [0, 1, 7])
    def test_obsolete_revisions(self, revision):
        """Revisions below 8 are obsolete."""
        assert is_rejected(revision)
        with pytest.raises(ObsoleteFormatError):
            policy_for(revision)

    def test_corrupt_revision(self):
        """Revision 9 is known-corrupt."""
        assert is_rejected(9)
        with pytest.raises(CorruptFormatError, match="report"):
            policy_for(9)

    @pytest.mark.parametrize("revision", [8, 10, 11, 12])
    def test_readable_revisions(self, revision):
        assert not is_rejected(revision)
        assert policy_for(revision).revision == revision

    def test_future_revision_unsupported(self):
        with pytest.raises(UnsupportedFormatError):
            policy_for(CURRENT_REVISION + 1)

    def test_current_revision(self):
        """Encoder target is revision 12."""
        assert CURRENT_REVISION == 12
        assert CURRENT_POLICY is REVISIONS[12]

    def test_fragment_id_widths(self):
        """1-byte ids before 12, 2-byte ids from 12."""
        assert REVISIONS[8].id_width == 1
        assert REVISIONS[10].id_width == 1
        assert REVISIONS[11].id_width == 1
        assert REVISIONS[12].id_width == 2

    def test_revision_11_synthesizes_ids(self):
        """Revision 11 ids come from stream position."""
        assert REVISIONS[11].id_strategy is IdStrategy.POSITIONAL
        reader = ByteReader(b'\x63\x63')
        assert REVISIONS[11].read_fragment_id(reader, 0, 'id') == 1
        assert REVISIONS[11].read_fragment_id(reader, 1, 'id') == 2
        assert reader.remaining == 0

    def test_explicit_ids_read_verbatim(self):
        reader = ByteReader(b'\x01\x2c')
        assert REVISIONS[12].read_fragment_id(reader, 0, 'id') == 300

    def test_count_widths(self):
        assert REVISIONS[10].count_width == 1
        assert REVISIONS[11].count_width == 2
        assert REVISIONS[12].count_width == 2

    def test_game_id_single_word_in_revision_8(self):
        reader = ByteReader(struct.pack('>I', 123456))
        assert REVISIONS[8].read_game_id(reader) == 123456

    def test_game_id_halves(self):
        """Game id is high * 2^32 + low from revision 10."""
        reader = ByteReader(struct.pack('>II', 1, 0x2A05F200))
        assert REVISIONS[10].read_game_id(reader) == 5_000_000_000
