"""Reading ranked gene lists from a list file.

A list file is whitespace-separated text. The first line holds the gene
count and the list count; every following line holds one list as
``num_genes`` gene identities in ranked order. Reading a line yields the
rank array ``ranks[gene] = position``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, Union

import numpy as np
from pydantic import ValidationError

from r2ks.io.schema import ListFileHeader

logger = logging.getLogger(__name__)


class MalformedListError(ValueError):
    """Raised when a list file or one of its lists cannot be used."""


def _is_digits(token: str) -> bool:
    return token.isascii() and token.isdigit()


def _parse_header(line: str, path: Path) -> ListFileHeader:
    tokens = line.split()
    if len(tokens) < 2 or not all(_is_digits(t) for t in tokens[:2]):
        raise MalformedListError(
            f"Malformed header in {path}: expected '<num_genes> <num_lists>', got {line.strip()!r}"
        )
    try:
        return ListFileHeader(num_genes=int(tokens[0]), num_lists=int(tokens[1]))
    except (ValueError, ValidationError) as e:
        raise MalformedListError(f"Malformed header in {path}: {e}") from e


def read_header(path: Union[Path, str]) -> ListFileHeader:
    """Read the gene and list counts from the first line of a list file."""
    path = Path(path)
    try:
        with open(path, "r") as f:
            line = f.readline()
    except OSError as e:
        raise MalformedListError(f"Cannot open list file {path}: {e}") from e
    return _parse_header(line, path)


def parse_rank_line(line: str, num_genes: int) -> np.ndarray:
    """Build a rank array from one line of gene identities.

    Tokens beyond ``num_genes`` are ignored.

    Raises:
        MalformedListError: If the line is short, non-numeric, out of range,
            or repeats a gene
    """
    tokens = line.split()
    if len(tokens) < num_genes:
        raise MalformedListError(f"Malformed list: expected {num_genes} genes, found {len(tokens)}")
    tokens = tokens[:num_genes]
    bad = [t for t in tokens if not _is_digits(t)]
    if bad:
        raise MalformedListError(
            f"Malformed list: expected non-negative integer gene identities, found {bad[0]!r}"
        )
    genes = np.array([int(t) for t in tokens], dtype=np.int64)

    if genes.max() >= num_genes:
        raise MalformedListError(
            f"Malformed list: gene identities must lie in 0..{num_genes - 1}, "
            f"found range {genes.min()}..{genes.max()}"
        )
    counts = np.bincount(genes, minlength=num_genes)
    if counts.max() > 1:
        duplicated = np.flatnonzero(counts > 1)[:5].tolist()
        raise MalformedListError(f"Malformed list: duplicated gene identities {duplicated}")

    ranks = np.empty(num_genes, dtype=np.int64)
    ranks[genes] = np.arange(num_genes, dtype=np.int64)
    ranks.flags.writeable = False
    return ranks


class RankListReader:
    """Random access to the lists of one list file.

    The file is scanned once to record where every line starts, so reading
    list ``k`` seeks straight to it. Each :meth:`read_list` call opens its
    own handle, which makes a reader safe to share between threads.

    Parameters
    ----------
    path : Path or str
        List file to read
    """

    def __init__(self, path: Union[Path, str]):
        self.path = Path(path)
        self.header = read_header(self.path)
        self._offsets = self._index_lines()

        if len(self._offsets) < self.header.num_lists:
            raise MalformedListError(
                f"{self.path} declares {self.header.num_lists} lists but contains "
                f"{len(self._offsets)}"
            )
        logger.debug(
            f"Indexed {self.path}: {self.header.num_genes} genes, {self.header.num_lists} lists"
        )

    @property
    def num_genes(self) -> int:
        return self.header.num_genes

    @property
    def num_lists(self) -> int:
        return self.header.num_lists

    def _index_lines(self) -> List[int]:
        offsets = []
        with open(self.path, "rb") as f:
            f.readline()
            position = f.tell()
            for line in iter(f.readline, b""):
                if line.strip():
                    offsets.append(position)
                position += len(line)
        return offsets

    def read_line(self, index: int) -> str:
        """Raw text of list ``index`` (1-based)."""
        if not 1 <= index <= self.num_lists:
            raise IndexError(f"List index {index} out of range 1..{self.num_lists}")
        with open(self.path, "rb") as f:
            f.seek(self._offsets[index - 1])
            return f.readline().decode("ascii", errors="replace")

    def read_list(self, index: int) -> np.ndarray:
        """Rank array of list ``index`` (1-based, read-only)."""
        try:
            return parse_rank_line(self.read_line(index), self.num_genes)
        except MalformedListError as e:
            raise MalformedListError(f"{self.path}, list {index}: {e}") from e


def write_list_file(path: Union[Path, str], orderings: Sequence[Sequence[int]]) -> Path:
    """Write gene orderings as a list file.

    Args:
        path: Output path
        orderings: One sequence of gene identities per list, in ranked order

    Returns:
        Path written
    """
    path = Path(path)
    if len(orderings) == 0:
        raise ValueError("At least one ordering is required")
    num_genes = len(orderings[0])
    for k, ordering in enumerate(orderings, start=1):
        if len(ordering) != num_genes:
            raise ValueError(f"Ordering {k} has {len(ordering)} genes, expected {num_genes}")

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        f.write(f"{num_genes} {len(orderings)}\n")
        for ordering in orderings:
            f.write(" ".join(str(int(g)) for g in ordering))
            f.write("\n")
    logger.info(f"Wrote {len(orderings)} lists of {num_genes} genes to {path}")
    return path


def simulate_list_file(
    path: Union[Path, str],
    num_genes: int,
    num_lists: int,
    seed: int = 0,
) -> Path:
    """Write a list file of independent random orderings."""
    rng = np.random.default_rng(seed)
    orderings = [rng.permutation(num_genes) for _ in range(num_lists)]
    return write_list_file(path, orderings)
