from memo_board.cli import main


def _run(tmp_path, *args):
    return main(["--storage", str(tmp_path / "s.json"), *args])


def test_add_list_move_delete(tmp_path, capsys):
    assert _run(tmp_path, "add", "Call mom", "--priority", "high", "--category", "Tasks") == 0
    new_id = capsys.readouterr().out.strip()

    assert _run(tmp_path, "list", "--category", "Tasks", "--view", "list") == 0
    out = capsys.readouterr().out
    assert out.startswith("1 note")
    assert "Call mom" in out

    assert _run(tmp_path, "move", new_id, "5") == 0
    assert _run(tmp_path, "list", "--view", "list") == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "6 notes"
    assert lines[-1].startswith(new_id)

    assert _run(tmp_path, "delete", new_id) == 0
    assert _run(tmp_path, "delete", new_id) == 1


def test_edit_and_date_filter(tmp_path, capsys):
    assert _run(tmp_path, "edit", "3", "--title", "Groceries") == 0
    assert _run(tmp_path, "list", "--date", "2023-05-05") == 0
    out = capsys.readouterr().out
    assert out.startswith("3 notes")
    assert "Groceries" in out

    assert _run(tmp_path, "edit", "404", "--title", "x") == 1


def test_list_with_bad_date_reports_error(tmp_path, capsys):
    assert _run(tmp_path, "list", "--date", "05/05/2023") == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "[error] Invalid filter" in captured.err
