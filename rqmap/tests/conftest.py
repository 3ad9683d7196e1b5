# This file is part of RQMap.
# Licensed under MIT License.

"""Shared fixtures: tiny alignment files and in-memory read sources."""

import pysam
import pytest

HEADER_DICT = {
    'HD': {'VN': '1.6', 'SO': 'coordinate'},
    'SQ': [
        {'SN': 'chr1', 'LN': 100000},
        {'SN': 'chr2', 'LN': 50000},
    ],
}

# SAM flag combinations used below
PAIR_R1_FWD = 0x1 | 0x2 | 0x20 | 0x40    # 99
PAIR_R2_REV = 0x1 | 0x2 | 0x10 | 0x80    # 147
PAIR_R1_REV = 0x1 | 0x2 | 0x10 | 0x40    # 83
PAIR_R2_FWD = 0x1 | 0x2 | 0x20 | 0x80    # 163


def make_header():
    return pysam.AlignmentHeader.from_dict(HEADER_DICT)


def make_read(header, name, tid, start, length, flag=0, mapq=60, mate_tid=-1, mate_start=-1, tlen=0):
    """Build an ``AlignedSegment`` with an all-match CIGAR."""
    a = pysam.AlignedSegment(header)
    a.query_name = name
    a.query_sequence = 'A' * length
    a.flag = flag
    a.reference_id = tid
    a.reference_start = start
    a.mapping_quality = mapq
    a.cigarstring = f'{length}M'
    a.next_reference_id = mate_tid
    a.next_reference_start = mate_start
    a.template_length = tlen
    a.query_qualities = pysam.qualitystring_to_array('I' * length)
    return a


def make_unmapped(header, name):
    a = pysam.AlignedSegment(header)
    a.query_name = name
    a.query_sequence = 'A' * 20
    a.flag = 0x4
    a.reference_id = -1
    a.reference_start = -1
    a.next_reference_id = -1
    a.next_reference_start = -1
    a.query_qualities = pysam.qualitystring_to_array('I' * 20)
    return a


def make_pair(header, name, tid, start, mate_start, length, r1_reverse=False):
    """Properly paired reads; the leftmost mate is read 1 unless ``r1_reverse``."""
    tlen = mate_start + length - start
    if r1_reverse:
        left = make_read(header, name, tid, start, length, PAIR_R2_FWD, mate_tid=tid, mate_start=mate_start, tlen=tlen)
        right = make_read(header, name, tid, mate_start, length, PAIR_R1_REV, mate_tid=tid, mate_start=start, tlen=-tlen)
    else:
        left = make_read(header, name, tid, start, length, PAIR_R1_FWD, mate_tid=tid, mate_start=mate_start, tlen=tlen)
        right = make_read(header, name, tid, mate_start, length, PAIR_R2_REV, mate_tid=tid, mate_start=start, tlen=-tlen)
    return left, right


class FakeSource:
    """In-memory read source with the ``pysam.AlignmentFile`` surface RQMap uses."""

    def __init__(self, header, reads):
        self.header = header
        self.references = header.references
        self.lengths = header.lengths
        self.reads = list(reads)
        self.fetches = []

    def __iter__(self):
        return iter(self.reads)

    def fetch(self, tid=None, start=None, stop=None):
        self.fetches.append((tid, start, stop))
        for r in self.reads:
            if r.is_unmapped or r.reference_id != tid:
                continue
            if r.reference_start < stop and r.reference_end > start:
                yield r


def write_bam(path, header, reads, index=True):
    """Write ``reads`` (already coordinate sorted) to a BAM file."""
    with pysam.AlignmentFile(str(path), 'wb', header=header) as outh:
        for r in reads:
            outh.write(r)
    if index:
        pysam.index(str(path))
    return str(path)


@pytest.fixture
def header():
    return make_header()


@pytest.fixture
def three_reads(header):
    """Reads at [100,150), [120,170) and [200,210) on chr1, forward strand."""
    return [
        make_read(header, 'r1', 0, 100, 50),
        make_read(header, 'r2', 0, 120, 50),
        make_read(header, 'r3', 0, 200, 10),
    ]


@pytest.fixture
def three_read_source(header, three_reads):
    return FakeSource(header, three_reads)


@pytest.fixture
def three_read_bam(tmp_path, header, three_reads):
    return write_bam(tmp_path / 'three.bam', header, three_reads)


@pytest.fixture
def mixed_bam(tmp_path, header):
    """Single and paired reads on two references, sorted and indexed."""
    p1 = make_pair(header, 'p1', 0, 1000, 1150, 50)
    p2 = make_pair(header, 'p2', 0, 1100, 1300, 50, r1_reverse=True)
    reads = [
        make_read(header, 's1', 0, 500, 40, mapq=10),
        p1[0],
        make_read(header, 's2', 0, 1020, 40, flag=0x10, mapq=60),
        p2[0],
        p1[1],
        p2[1],
        make_read(header, 's3', 1, 300, 60, mapq=40),
        make_read(header, 's4', 1, 310, 60, flag=0x10, mapq=0),
    ]
    return write_bam(tmp_path / 'mixed.bam', header, reads)
