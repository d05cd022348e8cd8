"""Tests for list-file reading."""

import numpy as np
import pytest

from r2ks.io.loaders import (
    MalformedListError,
    RankListReader,
    parse_rank_line,
    read_header,
    simulate_list_file,
    write_list_file,
)


def _write(path, text):
    path.write_text(text)
    return path


def test_read_header(list_file):
    header = read_header(list_file)
    assert header.num_genes == 5
    assert header.num_lists == 4
    assert header.num_pairs == 6


def test_parse_rank_line_maps_gene_to_position():
    ranks = parse_rank_line("2 0 1\n", 3)
    np.testing.assert_array_equal(ranks, [1, 2, 0])
    assert not ranks.flags.writeable


def test_parse_rank_line_ignores_extra_tokens():
    np.testing.assert_array_equal(parse_rank_line("1 0 7 7", 2), [1, 0])


@pytest.mark.parametrize(
    "line,message",
    [
        ("0 1", "expected 3 genes, found 2"),
        ("0 x 2", "non-negative integer"),
        ("0 1_0 2", "non-negative integer"),
        ("+1 0 2", "non-negative integer"),
        ("0 -1 2", "non-negative integer"),
        ("0 1 3", "must lie in"),
        ("0 1 1", "duplicated"),
    ],
)
def test_parse_rank_line_rejects_malformed(line, message):
    with pytest.raises(MalformedListError, match=message):
        parse_rank_line(line, 3)


def test_reader_round_trips_orderings(list_file, orderings):
    reader = RankListReader(list_file)
    for k, ordering in enumerate(orderings, start=1):
        ranks = reader.read_list(k)
        assert [ranks[g] for g in ordering] == list(range(5))


def test_reader_index_out_of_range(list_file):
    reader = RankListReader(list_file)
    with pytest.raises(IndexError):
        reader.read_list(0)
    with pytest.raises(IndexError):
        reader.read_list(5)


def test_reader_reports_list_index(tmp_path):
    path = _write(tmp_path / "lists.txt", "3 2\n0 1 2\n0 1\n")
    reader = RankListReader(path)
    with pytest.raises(MalformedListError, match="list 2"):
        reader.read_list(2)


def test_reader_missing_lines(tmp_path):
    path = _write(tmp_path / "lists.txt", "3 3\n0 1 2\n2 1 0\n")
    with pytest.raises(MalformedListError, match="declares 3 lists but contains 2"):
        RankListReader(path)


def test_reader_skips_blank_lines(tmp_path):
    path = _write(tmp_path / "lists.txt", "2 2\n\n1 0\n\n0 1\n")
    reader = RankListReader(path)
    np.testing.assert_array_equal(reader.read_list(1), [1, 0])
    np.testing.assert_array_equal(reader.read_list(2), [0, 1])


def test_missing_file(tmp_path):
    with pytest.raises(MalformedListError, match="Cannot open"):
        read_header(tmp_path / "absent.txt")


@pytest.mark.parametrize("first_line", ["", "5\n", "five 2\n", "0 2\n", "1_0 2\n", "+5 2\n"])
def test_malformed_header(tmp_path, first_line):
    path = _write(tmp_path / "lists.txt", first_line)
    with pytest.raises(MalformedListError, match="Malformed header"):
        read_header(path)


def test_write_list_file_rejects_ragged(tmp_path):
    with pytest.raises(ValueError, match="Ordering 2"):
        write_list_file(tmp_path / "lists.txt", [[0, 1, 2], [0, 1]])


def test_simulate_list_file_is_reproducible(tmp_path):
    first = simulate_list_file(tmp_path / "a.txt", num_genes=20, num_lists=3, seed=5)
    second = simulate_list_file(tmp_path / "b.txt", num_genes=20, num_lists=3, seed=5)
    assert first.read_text() == second.read_text()

    reader = RankListReader(first)
    assert reader.num_genes == 20
    assert reader.num_lists == 3
    assert sorted(reader.read_list(3)) == list(range(20))
