"""
Tests for the command-line interface.

These tests verify:
- Output file naming, header and stdout mode
- Exit codes when some or all requested types fail
- Package loading errors (no files, mixed packages, syntax errors)
- Environment configuration (ENUMSLICES_CWD, ENUMSLICES_INT_SIZE)
"""

import pytest

from enumslices.compiler.cli import main


DAY_SRC = (
    "package days\n"
    "\n"
    "type Day int\n"
    "\n"
    "const (\n"
    "\tMonday Day = iota\n"
    "\tTuesday\n"
    ")\n"
)

COLOR_SRC = (
    "package days\n"
    "\n"
    "type Color uint8\n"
    "\n"
    "const (\n"
    "\tRed Color = iota + 1\n"
    "\tGreen\n"
    ")\n"
)


@pytest.fixture
def pkg_dir(tmp_path):
    (tmp_path / "day.go").write_text(DAY_SRC, encoding="utf-8")
    (tmp_path / "color.go").write_text(COLOR_SRC, encoding="utf-8")
    return tmp_path


class TestOutput:
    """Tests for where and what the generator writes."""

    def test_default_output_file(self, pkg_dir):
        assert main(["-type", "Day", str(pkg_dir)]) == 0
        text = (pkg_dir / "day_enumslices.go").read_text(encoding="utf-8")
        assert text.startswith(
            f'// Code generated by "enumslices -type Day {pkg_dir}"; DO NOT EDIT.\n\npackage days\n\n'
        )
        assert 'const _Day_name = "MondayTuesday"' in text

    def test_stdout(self, pkg_dir, capsys):
        assert main(["-type", "Day", "-output", "-", str(pkg_dir)]) == 0
        out = capsys.readouterr().out
        assert "package days" in out
        assert "func (i Day) GetEnumSlices() ([]interface{}, []string) {" in out
        assert not (pkg_dir / "day_enumslices.go").exists()

    def test_explicit_output(self, pkg_dir, tmp_path):
        target = tmp_path / "out.go"
        assert main(["-type=Day", "-output", str(target), str(pkg_dir)]) == 0
        assert target.exists()

    def test_several_types_in_request_order(self, pkg_dir):
        assert main(["-type", "Color,Day", str(pkg_dir)]) == 0
        text = (pkg_dir / "color_enumslices.go").read_text(encoding="utf-8")
        assert text.index("_Color_name") < text.index("_Day_name")

    def test_repeated_type_flag(self, pkg_dir):
        assert main(["-type", "Day", "-type", "Color", str(pkg_dir)]) == 0
        text = (pkg_dir / "day_enumslices.go").read_text(encoding="utf-8")
        assert "_Color_name" in text and "_Day_name" in text

    def test_file_arguments(self, pkg_dir):
        assert main(["-type", "Day", str(pkg_dir / "day.go")]) == 0
        assert (pkg_dir / "day_enumslices.go").exists()

    def test_trimprefix_and_linecomment(self, tmp_path, capsys):
        (tmp_path / "a.go").write_text(
            "package p\ntype Op int\nconst (\n\tOpAdd Op = iota // plus\n\tOpSub\n)\n",
            encoding="utf-8",
        )
        assert main(["-type", "Op", "-trimprefix", "Op", "-linecomment", "-output", "-", str(tmp_path)]) == 0
        assert 'const _Op_name = "plusSub"' in capsys.readouterr().out

    def test_output_is_reproducible(self, pkg_dir, capsys):
        (pkg_dir / "more.go").write_text(
            "package days\n\nconst (\n\t_ Day = iota + 5\n\tFriday // fri\n\tSaturday\n)\n\n"
            "const (\n\tNavy Color = 10\n\tTeal Color = 3\n\tRed2 Color = 1\n)\n",
            encoding="utf-8",
        )
        args = ["-type", "Day,Color", "-output", "-", str(pkg_dir)]
        assert main(args) == 0
        first = capsys.readouterr().out
        assert main(args) == 0
        second = capsys.readouterr().out
        assert first == second
        assert 'const _Day_name = "MondayTuesdayFridaySaturday"' in first
        assert 'const _Color_name = "RedGreenTealNavy"' in first

    def test_test_files_excluded(self, pkg_dir):
        (pkg_dir / "day_test.go").write_text("package days_test\n", encoding="utf-8")
        assert main(["-type", "Day", str(pkg_dir)]) == 0


class TestExitCodes:
    """Tests for partial and total failure."""

    def test_failed_type_is_left_out(self, pkg_dir, capsys):
        assert main(["-type", "Day,Missing", str(pkg_dir)]) == 2
        err = capsys.readouterr().err
        assert "CE0101" in err
        text = (pkg_dir / "day_enumslices.go").read_text(encoding="utf-8")
        assert "_Day_name" in text
        assert "Missing" not in text.split("\n", 1)[1]

    def test_nothing_written_when_all_fail(self, pkg_dir):
        assert main(["-type", "Missing", str(pkg_dir)]) == 2
        assert not (pkg_dir / "missing_enumslices.go").exists()

    def test_type_required(self, pkg_dir, capsys):
        assert main([str(pkg_dir)]) == 2
        assert "-type is required" in capsys.readouterr().err

    def test_version(self, capsys):
        assert main(["--version"]) == 0
        assert "enumslices" in capsys.readouterr().out


class TestLoading:
    """Tests for package loading errors."""

    def test_no_go_files(self, tmp_path, capsys):
        assert main(["-type", "Day", str(tmp_path)]) == 2
        assert "CE3001" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main(["-type", "Day", str(tmp_path / "nope.go")]) == 2
        assert "CE3002" in capsys.readouterr().err

    def test_mixed_packages(self, pkg_dir, capsys):
        (pkg_dir / "z.go").write_text("package other\n", encoding="utf-8")
        assert main(["-type", "Day", str(pkg_dir)]) == 2
        assert "CE3003" in capsys.readouterr().err

    def test_files_in_different_directories(self, pkg_dir, tmp_path_factory, capsys):
        other = tmp_path_factory.mktemp("other") / "x.go"
        other.write_text("package days\n", encoding="utf-8")
        assert main(["-type", "Day", str(pkg_dir / "day.go"), str(other)]) == 2
        assert "CE3004" in capsys.readouterr().err

    def test_syntax_error(self, pkg_dir, capsys):
        (pkg_dir / "bad.go").write_text("package days\nconst (\n\tX = \n", encoding="utf-8")
        assert main(["-type", "Day", str(pkg_dir)]) == 2
        assert "CE2001" in capsys.readouterr().err

    def test_byte_order_mark(self, tmp_path, capsys):
        (tmp_path / "a.go").write_bytes(b"\xef\xbb\xbf" + DAY_SRC.encode("utf-8"))
        assert main(["-type", "Day", "-output", "-", str(tmp_path)]) == 0
        assert 'const _Day_name = "MondayTuesday"' in capsys.readouterr().out


class TestEnvironment:
    """Tests for environment configuration."""

    def test_effective_cwd(self, pkg_dir, monkeypatch):
        monkeypatch.setenv("ENUMSLICES_CWD", str(pkg_dir))
        assert main(["-type", "Day"]) == 0
        assert (pkg_dir / "day_enumslices.go").exists()

    def test_int_size_from_environment(self, tmp_path, monkeypatch, capsys):
        (tmp_path / "a.go").write_text("package p\ntype Big int\nconst A Big = 1 << 40\n", encoding="utf-8")
        monkeypatch.setenv("ENUMSLICES_INT_SIZE", "32")
        assert main(["-type", "Big", str(tmp_path)]) == 2
        assert "CE0105" in capsys.readouterr().err

    def test_int_size_flag_overrides_environment(self, tmp_path, monkeypatch):
        (tmp_path / "a.go").write_text("package p\ntype Big int\nconst A Big = 1 << 40\n", encoding="utf-8")
        monkeypatch.setenv("ENUMSLICES_INT_SIZE", "32")
        assert main(["-type", "Big", "--int-size", "64", str(tmp_path)]) == 0
