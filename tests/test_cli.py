import matplotlib

matplotlib.use("Agg")

import pytest

from saltthickness.cli import UsageError, main, validate_arguments
from saltthickness.config import default_parameters

PICKS = {
    "T1.lmk": ["100 200 0 0 100", "100 201 0 0 100", "100 202 0 0 300", "101 200 0 0 100"],
    "B1.lmk": ["100 200 0 0 150", "100 201 0 0 200", "100 202 0 0 250", "101 200 0 0 300"],
    "T2.lmk": ["100 200 0 0 200", "100 201 0 0 150", "101 200 0 0 150"],
    "B2.lmk": ["100 200 0 0 230", "100 201 0 0 300", "101 200 0 0 200"],
}


@pytest.fixture
def horizon_files(tmp_path):
    paths = []
    for name, rows in PICKS.items():
        path = tmp_path / name
        path.write_text("".join(f"{row}\n" for row in rows))
        paths.append(str(path))
    return paths


def test_main_writes_thickness_file(horizon_files, tmp_path):
    output = tmp_path / "salt.lmk"

    assert main([*horizon_files, f"output={output}"]) == 0

    assert output.read_text().splitlines() == [
        "      100.00      200.00        0.00        0.00       80.00",
        "      100.00      201.00        0.00        0.00      200.00",
        "      101.00      200.00        0.00        0.00      200.00",
    ]


def test_main_renders_optional_map(horizon_files, tmp_path):
    output = tmp_path / "salt.lmk"
    png = tmp_path / "salt.png"

    assert main([*horizon_files, f"output={output}", "--map", str(png)]) == 0
    assert png.read_bytes().startswith(b"\x89PNG")


def test_main_fails_on_malformed_record(horizon_files, tmp_path):
    with open(horizon_files[1], "a") as handle:
        handle.write("102 200 0 300\n")
    output = tmp_path / "salt.lmk"

    assert main([*horizon_files, f"output={output}"]) == 1
    assert not output.exists()


def test_main_rejects_bad_arguments(capsys):
    assert main([]) == 1
    assert "usage: salt-thickness T1.lmk B1.lmk" in capsys.readouterr().err


@pytest.mark.parametrize(
    "args, message",
    [
        ([], "Need horizon names"),
        (["T1.lmk"], "Need at least two horizon names"),
        (["T1.txt", "output=out.lmk"], "doesn't end in lmk"),
        ([".lmk", "output=out.lmk"], "doesn't end in lmk"),
        (["missing.lmk", "output=out.lmk"], "does not exist"),
    ],
)
def test_validate_arguments_messages(args, message):
    with pytest.raises(UsageError, match=message):
        validate_arguments(args, default_parameters())


def test_validate_arguments_requires_output_and_pairs(horizon_files, tmp_path):
    params = default_parameters()
    with pytest.raises(UsageError, match="specify output file"):
        validate_arguments([*horizon_files, str(tmp_path / "out.lmk")], params)
    with pytest.raises(UsageError, match="specify output file"):
        validate_arguments([*horizon_files, "output="], params)
    with pytest.raises(UsageError, match="even number"):
        validate_arguments([*horizon_files[:3], "output=out.lmk"], params)

    horizons, output = validate_arguments([*horizon_files, "output=out.lmk"], params)
    assert [str(path) for path in horizons] == horizon_files
    assert str(output) == "out.lmk"
