import json
from pathlib import Path

import pytest

import main


PAGES = ["Test Infected\nAnonymous Author\nAbstract", "Introduction", "REFERENCES\n[1] K. Beck"]


@pytest.fixture(autouse=True)
def fake_documents(monkeypatch, document_factory):
    """Serve every path as a three page paper, except files named bad.pdf."""
    for name in ("BLINDCHECK_PAGE_LIMIT", "BLINDCHECK_REFERENCE_LIMIT", "BLINDCHECK_STYLE",
                 "BLINDCHECK_CHECK_TITLES"):
        monkeypatch.delenv(name, raising=False)

    def open_document(path):
        name = Path(path).name
        if name == "bad.pdf":
            raise RuntimeError("cannot open document")
        pages = list(PAGES)
        if "paper13" in name:
            pages[0] = "Test Infected\nKent Beck\nAbstract"
        return document_factory(*pages, file_name=name)

    monkeypatch.setattr(main.BatchChecker, "document_factory", staticmethod(open_document))


def test_single_file(capsys):
    assert main.main(["paper.pdf", "--page-limit", "2"]) == 0
    out = capsys.readouterr().out
    assert out == "paper.pdf                no-issues    ``Test Infected''\n"


def test_default_limits_flag_short_paper(capsys):
    assert main.main(["paper.pdf"]) == 0
    assert "issues-found {paper-very-short:3}" in capsys.readouterr().out


def test_directory_in_sorted_order(tmp_path, capsys):
    for name in ("b.pdf", "a.pdf", "notes.txt"):
        (tmp_path / name).write_text("")
    assert main.main([str(tmp_path), "--page-limit", "2"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert [line.split()[0] for line in lines] == ["a.pdf", "b.pdf"]


def test_failure_does_not_stop_batch(capsys):
    assert main.main(["bad.pdf", "good.pdf", "--page-limit", "2"]) == 1
    captured = capsys.readouterr()
    assert captured.out.startswith("good.pdf")
    assert "Error processing bad.pdf" in captured.err


def test_not_a_pdf(capsys):
    assert main.main(["notes.txt"]) == 1
    assert "Argument not a file or folder: notes.txt" in capsys.readouterr().err


def test_style_option(capsys):
    main.main(["paper.pdf", "--style", "acm", "--page-limit", "2"])
    assert "wrong-template:must-be-ACM" in capsys.readouterr().out


def test_roster(tmp_path, capsys):
    csv_path = tmp_path / "authors.csv"
    csv_path.write_text(
        "paper,title,first,last,affiliation,email\n"
        "13,Test Infected,Kent,Beck,,kent@beck.com\n",
        encoding="utf-8"
    )
    assert main.main(["--meta", str(csv_path), "icse2017-paper13.pdf", "--page-limit", "2"]) == 0
    assert "possibly-identity-revealing-data:``Kent Beck''" in capsys.readouterr().out


def test_malformed_roster(tmp_path, capsys):
    csv_path = tmp_path / "authors.csv"
    csv_path.write_text("paper,first\n13,Kent\n", encoding="utf-8")
    assert main.main(["--meta", str(csv_path), "paper.pdf"]) == 1
    assert "missing column" in capsys.readouterr().err


def test_json_output(tmp_path):
    output = tmp_path / "results.json"
    main.main(["good.pdf", "bad.pdf", "--page-limit", "2", "--output", str(output)])
    result = json.loads(output.read_text(encoding="utf-8"))
    assert result["summary"] == {"papers": 1, "with_issues": 0, "failed": 1}
    paper = result["papers"][0]
    assert paper["file_name"] == "good.pdf"
    assert paper["references_page"] == 3
    assert paper["style"] == "IEEE"
    assert result["failures"][0]["file_name"] == "bad.pdf"


def test_show_text(capsys):
    main.main(["paper.pdf", "--showtext", "2", "--page-limit", "2"])
    out = capsys.readouterr().out
    assert out.startswith("START-PAGE 2 (of 3) paper.pdf: ---\nIntroduction\nEND-PAGE\n")


def test_invalid_show_text():
    with pytest.raises(SystemExit):
        main.main(["paper.pdf", "--showtext", "first"])


def test_invalid_page_limit():
    with pytest.raises(SystemExit):
        main.main(["paper.pdf", "--page-limit", "0"])


def test_unreadable_roster(tmp_path, capsys):
    csv_path = tmp_path / "authors.csv"
    csv_path.write_text(
        "paper,title,first,last,affiliation,email\n"
        f"13,{'x' * 200_000},Kent,Beck,,kent@beck.com\n",
        encoding="utf-8"
    )
    assert main.main(["--meta", str(csv_path), "paper.pdf"]) == 1
    assert "Error: Roster row" in capsys.readouterr().err
