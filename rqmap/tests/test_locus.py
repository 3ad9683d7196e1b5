# This file is part of RQMap.
# Licensed under MIT License.

"""Tests for rqmap.core.locus, library and scaffold helpers."""

import pytest

from rqmap.core.library import STRAND_TABLE, LibraryType, Mate, derive_strand
from rqmap.core.locus import Locus, Strand
from rqmap.core.scaffold import ScaffoldDict

F, R = Strand.FORWARD, Strand.REVERSE


class TestLocus:
    def test_rejects_negative_start(self):
        with pytest.raises(ValueError):
            Locus('chr1', -1, 10)

    def test_rejects_end_before_start(self):
        with pytest.raises(ValueError):
            Locus('chr1', 10, 5)

    def test_strand_string_is_parsed(self):
        assert Locus('chr1', 0, 5, '-').strand is R
        assert Locus('chr1', 0, 5, '.').strand is F

    def test_zero_length_is_one_position(self):
        p = Locus.point('chr1', 42)
        assert p.is_point
        assert p.span == (42, 43)
        assert p.n_positions == 1
        assert [x.start for x in p.positions()] == [42]

    def test_positions_in_order(self):
        loc = Locus('chr1', 100, 105)
        pos = list(loc.positions())
        assert [p.start for p in pos] == [100, 101, 102, 103, 104]
        assert all(p.is_point for p in pos)
        assert loc.n_positions == 5

    def test_shift_is_strand_aware(self):
        assert Locus('chr1', 100, 150, F).shift(4) == Locus('chr1', 104, 154, F)
        assert Locus('chr1', 100, 150, R).shift(5) == Locus('chr1', 95, 145, R)

    def test_shift_clips_at_zero(self):
        assert Locus('chr1', 2, 10, R).shift(5) == Locus('chr1', 0, 8, R)

    def test_first_pos(self):
        assert Locus('chr1', 100, 150, F).first_pos() == Locus.point('chr1', 100, F)
        assert Locus('chr1', 100, 150, R).first_pos() == Locus.point('chr1', 149, R)
        assert Locus.point('chr1', 7, R).first_pos() == Locus.point('chr1', 7, R)

    def test_coerce_tuple(self):
        assert Locus.coerce(('chr2', 1, 9)) == Locus('chr2', 1, 9, F)
        assert Locus.coerce(('chr2', 1, 9, '-')) == Locus('chr2', 1, 9, R)

    def test_str(self):
        assert str(Locus('chr1', 1, 2, R)) == 'chr1:1-2(-)'

    def test_strand_invert(self):
        assert F.invert() is R
        assert R.invert() is F

    def test_unknown_strand(self):
        with pytest.raises(ValueError):
            Strand.parse('x')


class TestLibraryType:
    @pytest.mark.parametrize('name,expected', [
        ('R1Sense', LibraryType.R1_SENSE),
        ('FR', LibraryType.R1_SENSE),
        ('rf', LibraryType.R2_SENSE),
        ('R2Sense', LibraryType.R2_SENSE),
        ('None', LibraryType.UNSTRANDED),
        ('Unstranded', LibraryType.UNSTRANDED),
    ])
    def test_parse(self, name, expected):
        assert LibraryType.parse(name) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            LibraryType.parse('sideways')

    def test_table_is_complete(self):
        assert len(STRAND_TABLE) == len(LibraryType) * len(Mate) * len(Strand)

    @pytest.mark.parametrize('lt,mate,aln,expected', [
        (LibraryType.R1_SENSE, Mate.FIRST, F, F),
        (LibraryType.R1_SENSE, Mate.FIRST, R, R),
        (LibraryType.R1_SENSE, Mate.SECOND, F, R),
        (LibraryType.R1_SENSE, Mate.SECOND, R, F),
        (LibraryType.R2_SENSE, Mate.FIRST, F, R),
        (LibraryType.R2_SENSE, Mate.FIRST, R, F),
        (LibraryType.R2_SENSE, Mate.SECOND, F, F),
        (LibraryType.R2_SENSE, Mate.SECOND, R, R),
        (LibraryType.UNSTRANDED, Mate.FIRST, R, F),
        (LibraryType.UNSTRANDED, Mate.SECOND, R, F),
    ])
    def test_derive_strand(self, lt, mate, aln, expected):
        assert derive_strand(lt, mate, aln) is expected


class TestScaffoldDict:
    def test_lookup_both_ways(self, header):
        sd = ScaffoldDict(header.references, header.lengths)
        assert sd.name_to_id('chr2') == 1
        assert sd.id_to_name(0) == 'chr1'
        assert sd.length('chr1') == 100000
        assert 'chr1' in sd
        assert len(sd) == 2

    def test_missing(self, header):
        sd = ScaffoldDict(header.references)
        assert sd.name_to_id('chrUn') is None
        assert sd.id_to_name(-1) is None
        assert sd.id_to_name(5) is None

    def test_from_source(self, three_read_source):
        sd = ScaffoldDict.from_source(three_read_source)
        assert sd.names == ('chr1', 'chr2')
