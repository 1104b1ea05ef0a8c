import json
from pathlib import Path

import pytest

from mritumor.predict import main

REPO_CONFIG = str(Path(__file__).resolve().parents[2] / "configs" / "app.yaml")

class StubAPI:
    space_id = "stub/space"

    def __init__(self, response=None, exc=None):
        self.response, self.exc = response, exc
        self.calls = []

    def predict(self, selected_file):
        self.calls.append(selected_file)
        if self.exc:
            raise self.exc
        return self.response

def test_cli_prints_result(tmp_path, capsys):
    img = tmp_path / "scan.png"
    img.write_bytes(b"not really a png")
    api = StubAPI(response=["pituitary", 0.71])
    assert main([str(img), "--config", REPO_CONFIG], api=api) == 0
    assert capsys.readouterr().out.strip() == "pituitary (confidence: 0.71)"
    assert api.calls[0].data == b"not really a png"

def test_cli_error_exit_code_and_json(tmp_path, capsys):
    img = tmp_path / "scan.png"
    img.write_bytes(b"x")
    api = StubAPI(exc=ConnectionError("offline"))
    assert main([str(img), "--config", REPO_CONFIG, "--json"], api=api) == 1
    out = json.loads(capsys.readouterr().out)
    assert out == {"image": str(img), "result": "Error connecting to model", "ok": False}

def test_cli_missing_image_is_usage_error(tmp_path, capsys):
    api = StubAPI(response=["glioma", 0.9])
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "missing.png"), "--config", REPO_CONFIG], api=api)
    assert exc.value.code == 2
    assert "image not found" in capsys.readouterr().err
    assert api.calls == []
