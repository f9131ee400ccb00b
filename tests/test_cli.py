from solong.cli import main

FREED = "[i] Everything has been properly freed, exiting cleanly\n"


def _write(tmp_path, text):
    path = tmp_path / "map.ber"
    path.write_text(text)
    return str(path)


def test_wrong_argument_count(capsys):
    assert main([]) == 0
    assert main(["a", "b"]) == 0
    out = capsys.readouterr()
    assert out.out == ""
    assert out.err == ""


def test_valid_map_runs(tmp_path, capsys):
    path = _write(tmp_path, "11111\n1P0C1\n10E01\n11111\n")
    assert main([path]) == 1
    out = capsys.readouterr()
    assert out.out.splitlines() == [
        "[ ] Parsing file",
        "[x] File parsed",
        "[ ] Checking map borders",
        "[x] Map borders checked",
        "[ ] Checking path",
        "[x] Valid path found !",
        "[x] Path checked",
        "[ ] Initializing MLX",
        "[x] MLX initialized",
        "[ ] Spawning window",
        "[x] Window initialized",
        "[ ] Rendering map",
        "[x] Map rendered",
    ]
    assert out.err == ""


def test_open_borders_are_invalid(tmp_path, capsys):
    path = _write(tmp_path, "11011\n1P0C1\n11111\n")
    assert main([path]) == 1
    out = capsys.readouterr()
    assert out.err == "[!] Invalid map\n" + FREED
    assert out.out.splitlines()[-1] == "[ ] Checking map borders"


def test_unreachable_cell_is_invalid(tmp_path, capsys):
    path = _write(tmp_path, "11111\n1P1C1\n11111\n")
    assert main([path]) == 1
    out = capsys.readouterr()
    assert out.err.startswith("[!] Invalid map\n")
    assert "[x] Valid path found !" not in out.out


def test_uneven_rows(tmp_path, capsys):
    path = _write(tmp_path, "1111\n111\n")
    assert main([path]) == 1
    assert capsys.readouterr().err == "[!] Uneven columns number\n" + FREED


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "absent.ber")]) == 1
    out = capsys.readouterr()
    assert out.err == "[!] Error opening file\n" + FREED
    assert "[x] File parsed" not in out.out