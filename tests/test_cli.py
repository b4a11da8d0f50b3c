from archpass.cli import main


def test_generate(capsys):
    assert main(["generate", "--length", "10", "--type", "simple", "--copies", "2"]) == 0
    out = capsys.readouterr().out
    assert "Password #1:" in out
    assert "Password #2:" in out

def test_generate_invalid_length(capsys):
    assert main(["generate", "--length", "3"]) == 2
    assert "between 4 and 100" in capsys.readouterr().out

def test_generate_batch_limit(capsys):
    assert main(["generate", "--copies", "11"]) == 2
    assert "more than 10" in capsys.readouterr().out

def test_score(capsys):
    assert main(["score", "aaaa1111"]) == 0
    out = capsys.readouterr().out
    assert "30 / 100" in out
    assert "Add uppercase letters" in out

def test_presets(capsys):
    assert main(["presets"]) == 0
    out = capsys.readouterr().out
    for name in ("simple", "standard", "complex", "secure"):
        assert name in out
