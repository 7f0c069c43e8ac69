import io

import pytest

from saltthickness.config import ThicknessParameters
from saltthickness.data import (
    MalformedRecordError,
    build_location_table,
    pair_index_for,
    read_picks,
    side_for,
)
from saltthickness.horizons import Location


def _write(path, rows):
    path.write_text("".join(f"{row}\n" for row in rows))
    return path


def test_read_picks_parses_five_numeric_fields():
    picks = read_picks(b"  1200  3400  512345.5  6123456.0  1500.25\n1201 3400 0 0 1600\n")

    assert list(picks.columns) == ["iline", "xline", "x", "y", "depth"]
    assert picks["iline"].tolist() == [1200, 1201]
    assert picks["xline"].tolist() == [3400, 3400]
    assert picks["depth"].tolist() == [1500.25, 1600.0]


def test_read_picks_truncates_fractional_line_numbers():
    picks = read_picks(b"1200.7 3400.2 0 0 10\n")
    assert picks[["iline", "xline"]].iloc[0].tolist() == [1200, 3400]


def test_blank_line_is_malformed():
    with pytest.raises(MalformedRecordError) as excinfo:
        read_picks(io.StringIO("1 1 0 0 10\n\n2 2 0 0 20\n"))
    assert excinfo.value.record == 2


@pytest.mark.parametrize("depth", ["inf", "-inf", "Infinity", "nan"])
def test_non_finite_depth_is_malformed(depth):
    with pytest.raises(MalformedRecordError) as excinfo:
        read_picks(f"1 1 0 0 10\n2 2 0 0 {depth}\n".encode())
    assert excinfo.value.record == 2


def test_infinite_bottom_aborts_the_build():
    with pytest.raises(MalformedRecordError):
        build_location_table([io.BytesIO(b"1 1 0 0 100\n"), io.BytesIO(b"1 1 0 0 inf\n")])


def test_read_picks_accepts_empty_source():
    assert read_picks(b"").empty


def test_short_record_is_malformed():
    with pytest.raises(MalformedRecordError) as excinfo:
        read_picks(b"1 1 0 0 10\n2 2 0 20\n", name="T1.lmk")
    assert excinfo.value.source == "T1.lmk"
    assert excinfo.value.record == 2


def test_long_record_is_malformed():
    with pytest.raises(MalformedRecordError):
        read_picks(b"1 1 0 0 10\n2 2 0 0 20 30\n")


def test_non_numeric_field_is_malformed():
    with pytest.raises(MalformedRecordError) as excinfo:
        read_picks(b"1 1 0 0 10\n2 2 0 0 deep\n")
    assert excinfo.value.record == 2


def test_source_positions_map_to_pairs_and_sides():
    assert [pair_index_for(position) for position in range(1, 7)] == [1, 1, 2, 2, 3, 3]
    assert [side_for(position) for position in range(1, 5)] == ["top", "bottom", "top", "bottom"]
    with pytest.raises(ValueError):
        pair_index_for(0)


def test_build_location_table_pairs_tops_with_bottoms(tmp_path):
    top1 = _write(tmp_path / "T1.lmk", ["100 200 0 0 100", "100 201 0 0 -999.25", "100 202 0 0 50"])
    bottom1 = _write(tmp_path / "B1.lmk", ["100 200 0 0 150", "100 201 0 0 200"])
    top2 = _write(tmp_path / "T2.lmk", ["100 200 0 0 200"])
    bottom2 = _write(tmp_path / "B2.lmk", ["100 200 0 0 230"])

    table = build_location_table([top1, bottom1, top2, bottom2])

    assert list(table) == [Location(100, 200), Location(100, 201), Location(100, 202)]
    at_200 = {interval.pair_index: interval for interval in table[Location(100, 200)]}
    assert (at_200[1].top_depth, at_200[1].bottom_depth) == (100.0, 150.0)
    assert (at_200[2].top_depth, at_200[2].bottom_depth) == (200.0, 230.0)

    (bottom_only,) = table[Location(100, 201)]
    assert bottom_only.top_depth is None
    assert bottom_only.bottom_depth == 200.0

    (top_only,) = table[Location(100, 202)]
    assert top_only.top_depth == 50.0
    assert top_only.bottom_depth is None


def test_build_location_table_requires_pairs(tmp_path):
    top = _write(tmp_path / "T1.lmk", ["1 1 0 0 10"])
    with pytest.raises(ValueError):
        build_location_table([top])
    with pytest.raises(ValueError):
        build_location_table([])


def test_build_location_table_reports_missing_files(tmp_path):
    top = _write(tmp_path / "T1.lmk", ["1 1 0 0 10"])
    with pytest.raises(FileNotFoundError):
        build_location_table([top, tmp_path / "B1.lmk"])


def test_malformed_bottom_file_aborts_the_build(tmp_path):
    top = _write(tmp_path / "T1.lmk", ["1 1 0 0 10"])
    bottom = _write(tmp_path / "B1.lmk", ["1 1 0 20"])
    with pytest.raises(MalformedRecordError) as excinfo:
        build_location_table([top, bottom])
    assert excinfo.value.source == str(bottom)


def test_large_inputs_are_announced_once(tmp_path):
    top = _write(tmp_path / "T1.lmk", ["1 1 0 0 10", "1 2 0 0 10", "1 3 0 0 10"])
    bottom = _write(tmp_path / "B1.lmk", ["1 1 0 0 20", "1 2 0 0 20", "1 3 0 0 20"])
    messages = []

    build_location_table(
        [top, bottom],
        params=ThicknessParameters(large_input_records=2),
        logger=messages.append,
    )

    assert len(messages) == 1
    assert "big" in messages[0]


def test_in_memory_sources_are_accepted():
    table = build_location_table([io.BytesIO(b"5 6 0 0 100\n"), io.BytesIO(b"5 6 0 0 140\n")])
    (interval,) = table[Location(5, 6)]
    assert interval.thickness == pytest.approx(40.0)
