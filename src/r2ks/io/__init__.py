"""List-file I/O and result output."""

from r2ks.io.loaders import (
    MalformedListError,
    RankListReader,
    parse_rank_line,
    read_header,
    simulate_list_file,
    write_list_file,
)
from r2ks.io.schema import ListFileHeader
from r2ks.io.writers import (
    StreamSink,
    format_result,
    results_to_frame,
    results_to_matrix,
    write_results,
)

__all__ = [
    "MalformedListError",
    "RankListReader",
    "parse_rank_line",
    "read_header",
    "simulate_list_file",
    "write_list_file",
    "ListFileHeader",
    "StreamSink",
    "format_result",
    "results_to_frame",
    "results_to_matrix",
    "write_results",
]
