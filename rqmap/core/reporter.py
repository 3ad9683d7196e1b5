# This file is part of RQMap.
# Licensed under MIT License.

"""Report generation for RQMap.

Functions accept a built map plus the regions to report, so the CLI and
library callers can share them.
"""

import numpy as np
import pandas as pd


def _run_info_comment(run_info):
    _comment = ['## RunInfo']
    _comment += ['{}:{}'.format(*tup) for tup in run_info.items()]
    return '\t'.join(_comment) + '\n'


def counts_table(rqmap, regions, stranded=False):
    """Overlap counts for each region as a DataFrame.

    Args:
        rqmap: Built :class:`RQMap`.
        regions: List of :class:`BEDRegion`.
        stranded: Only count loci on the region's strand.
    """
    _loci = [r.locus for r in regions]
    return pd.DataFrame({
        'chrom': [loc.chrom for loc in _loci],
        'start': [loc.start for loc in _loci],
        'end': [loc.end for loc in _loci],
        'name': [r.name for r in regions],
        'strand': [str(loc.strand) for loc in _loci],
        'count': [rqmap.overlap_count(loc, strand=loc.strand if stranded else None) for loc in _loci],
    })


def coverage_table(rqmap, locus, stranded=False):
    """Per-position coverage across ``locus`` as a DataFrame."""
    _cov = np.array(rqmap.coverage_profile(locus, strand=locus.strand if stranded else None), dtype=np.int64)
    _begin, _end = locus.span
    return pd.DataFrame({
        'chrom': locus.chrom,
        'pos': np.arange(_begin, _end, dtype=np.int64),
        'coverage': _cov,
    })


def coverage_summary(table):
    """Mean, max and covered fraction of a coverage table."""
    _cov = table['coverage'].to_numpy()
    if _cov.size == 0:
        return {'mean': 0.0, 'max': 0, 'covered': 0.0}
    return {
        'mean': float(np.mean(_cov)),
        'max': int(np.max(_cov)),
        'covered': float(np.count_nonzero(_cov)) / _cov.size,
    }


def output_table(table, run_info, filename):
    """Write ``table`` as TSV preceded by a ``## RunInfo`` comment line."""
    with open(filename, 'w') as outh:
        outh.write(_run_info_comment(run_info))
        table.to_csv(outh, sep='\t', index=False)
