import json

from cli import main


def write(tmp_path, text):
    path = tmp_path / "itinerary.txt"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_itinerary_mode(tmp_path, capsys, iberia_text):
    assert main([write(tmp_path, iberia_text), "--year", "2026", "--journey", "2"]) == 0
    lines = capsys.readouterr().out.strip("\n").split("\n")
    assert len(lines) == 3
    assert lines[0].startswith(" 1 IB1756J")


def test_availability_mode(tmp_path, capsys, iberia_text):
    path = write(tmp_path, iberia_text)
    assert main([path, "--mode", "availability", "--year", "2026", "--journey", "1", "--detailed"]) == 0
    assert capsys.readouterr().out.strip() == "112APRSEABCN1151AORD-60¥IB¥IB"


def test_journeys_mode(tmp_path, capsys, iberia_text):
    assert main([write(tmp_path, iberia_text), "--mode", "journeys", "--year", "2026"]) == 0
    out = capsys.readouterr().out.strip().split("\n")
    assert out[0] == "1 SEA-BCN: 112APRSEABCN12AORD¥IB¥IB"


def test_preview_mode(tmp_path, capsys, iberia_text):
    assert main([write(tmp_path, iberia_text), "--mode", "preview", "--year", "2026"]) == 0
    assert len(json.loads(capsys.readouterr().out)["segments"]) == 5


def test_vi_mode_with_forced_cabin(tmp_path, capsys, vi_premium_text):
    assert main([write(tmp_path, vi_premium_text), "--mode", "vi", "--year", "2026", "--auto-cabin", "business"]) == 0
    lines = capsys.readouterr().out.strip("\n").split("\n")
    assert lines[0].startswith(" 1 AA 293J")


def test_range_and_class(tmp_path, capsys, iberia_text):
    assert main([write(tmp_path, iberia_text), "--year", "2026", "--range", "0", "1", "--class", "Y"]) == 0
    lines = capsys.readouterr().out.strip("\n").split("\n")
    assert [line[:10] for line in lines] == [" 1 IB4067Y", " 2 IB4382Y"]


def test_error_exit_code(tmp_path, capsys):
    assert main([write(tmp_path, "nothing useful")]) == 1
    assert "no_segments" in capsys.readouterr().err
