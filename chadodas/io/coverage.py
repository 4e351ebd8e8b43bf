from typing import List, Tuple
from . import context, iobase
from .. import queries
from ..classes import segment


class CoverageDensityEstimator:
    """Estimates feature density in bins over a segment from the cumulative counts in 'gff_interval_stats'"""

    def __init__(self, session_context: context.SessionContext):
        self.context = session_context
        self.client = session_context.client
        self.printer = session_context.printer

    @property
    def summary_bin_size(self) -> int:
        return self.context.config.summary_bin_size

    def estimate(self, landmark: segment.Segment, types: List[str], bins=None) -> Tuple[List[int], str]:
        """Returns the number of features of given types starting in each bin, and a label naming the types"""
        if bins is None:
            bins = self.context.config.default_bins
        if isinstance(bins, bool) or not isinstance(bins, int) or bins <= 0:
            raise iobase.ConfigurationError("Number of bins must be a positive integer, not '" + str(bins) + "'")
        boundaries = self.summary_bins(landmark.frame_fmin + 1, landmark.frame_fmax, bins)
        counts = [0] * bins
        for typename in types:
            cumulative = self.cumulative_counts(type_pattern(typename), boundaries, landmark.srcfeature_id)
            for index in range(bins):
                counts[index] += cumulative[index + 1] - cumulative[index]
        return counts, ",".join(types)

    def summary_bins(self, start: int, end: int, bins: int) -> List[int]:
        """Maps the bins+1 boundaries of the output bins to summary bin indices"""
        binsize = (end - start + 1) / bins
        return [int((start + binsize * index - 1) / self.summary_bin_size) for index in range(bins + 1)]

    def cumulative_counts(self, pattern: str, summary_bins: List[int], srcfeature_id: int) -> List[int]:
        """Looks up the cumulative count at or after each summary bin; a boundary without row keeps the previous
        count, and counts never decrease"""
        template = queries.load_query("interval_stats")
        cache = {}
        counts = []
        previous = 0
        for summary_bin in summary_bins:
            if summary_bin not in cache:
                statement = queries.bind_parameters(template, typeid=pattern, bin=summary_bin,
                                                    srcfeature_id=srcfeature_id)
                rows = self.client.execute_query(statement)
                cache[summary_bin] = rows[0].cum_count if rows else None
            count = cache[summary_bin]
            if count is None or count < previous:
                count = previous
            counts.append(count)
            previous = count
        return counts


def type_pattern(typename: str) -> str:
    """Converts 'method', 'method:source' or ':source' into the pattern matching the 'typeid' column"""
    method, separator, source = typename.partition(":")
    if not separator:
        return method + ":%"
    if method:
        return method + ":" + source
    return "%:" + source
