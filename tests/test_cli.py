"""
Tests for the command line interface
"""

import gzip
import json

import pytest

from verticareader import __version__
from verticareader.cli import build_parser, main, options_from_args

from conftest import ALL_TYPES


def test_csv(tmp_path, all_types_file, all_types_names_file):
    output = tmp_path / "out.csv"

    assert main([all_types_file, "-t", all_types_names_file, "-o", str(output)]) == 0

    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[0] == ",".join(line.split("/")[1] for line in ALL_TYPES)
    assert lines[1].startswith("1,3.14,one,")


def test_json_with_limit(all_types_with_nulls_file, all_types_names_file):
    assert main([all_types_with_nulls_file, "-t", all_types_names_file, "--json", "--limit", "1"]) == 0

    with open(all_types_with_nulls_file[:-len(".bin")] + ".json", encoding="utf-8") as f:
        records = json.load(f)
    assert len(records) == 1
    assert records[0]["IntCol"] == 1


def test_json_lines_gzip(all_types_file, all_types_names_file):
    assert main([all_types_file, "-t", all_types_names_file, "-J", "-g", "-z", "-5"]) == 0

    with gzip.open(all_types_file[:-len(".bin")] + ".jsonl.gz", "rt", encoding="utf-8") as f:
        record = json.loads(f.readline())
    assert record["TimestampTzCol"] == "2016-12-25 09:00:00-05"


def test_stdout(capsys, all_types_file, all_types_no_names_file):
    assert main([all_types_file, "-t", all_types_no_names_file, "-o", "-", "-d", "|"]) == 0

    out = capsys.readouterr().out
    assert out.startswith("1|3.14|one|")
    assert out.count("\n") == 1


def test_missing_input(capsys, tmp_path, all_types_names_file):
    assert main([str(tmp_path / "missing.bin"), "-t", all_types_names_file]) == 1

    assert capsys.readouterr().err.startswith("Error: input file")


def test_json_without_names(capsys, all_types_file, all_types_no_names_file):
    assert main([all_types_file, "-t", all_types_no_names_file, "-j"]) == 1

    assert "Error: JSON files require column names in types file" in capsys.readouterr().err


def test_bad_delimiter(capsys, all_types_file, all_types_names_file):
    assert main([all_types_file, "-t", all_types_names_file, "-d", "::"]) == 1

    assert "Error: Delimiter must be a single character" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [
    ["in.bin"],
    ["in.bin", "-t", "types.txt", "-z", "200"],
    ["in.bin", "-t", "types.txt", "-z", "ten"],
    ["in.bin", "-t", "types.txt", "-j", "-J"],
])
def test_invalid_arguments(argv):
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(argv)

    assert excinfo.value.code == 2


def test_version(capsys):
    with pytest.raises(SystemExit):
        main(["--version"])

    assert __version__ in capsys.readouterr().out


def test_options_from_args():
    args = build_parser().parse_args(
        ["in.bin", "-t", "types.txt", "-s", "-n", "-J", "-l", "5", "-z", "-3"]
    )

    options = options_from_args(args)

    assert options.output is None
    assert options.output_format == "jsonl"
    assert options.quotechar == "'"
    assert options.no_header
    assert options.limit == 5
    assert options.tz_offset == -3
    assert not options.gzip
