from __future__ import annotations

import json
import re
from pathlib import Path

import pytest

import main
from suites import Alpha38, resolve_charset

MAPPING_RE = re.compile(r"^(\d+:\d+,)*\d+:\d+$")


def test_resolve_charset() -> None:
    assert resolve_charset("lower") == "abcdefghijklmnopqrstuvwxyz"
    assert resolve_charset("ALPHA38") == Alpha38
    assert resolve_charset("3") == Alpha38
    assert resolve_charset("xyz!") == "xyz!"


def test_generate_prints_mapping(capsys: pytest.CaptureFixture[str]) -> None:
    main.main(["generate", "--charset", "alpha26", "--seed", "3"])
    out = capsys.readouterr().out.strip()
    assert MAPPING_RE.match(out)
    assert out.count(":") == 26

    main.main(["generate", "--charset", "alpha26", "--seed", "3"])
    assert capsys.readouterr().out.strip() == out


def test_generate_writes_settings(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out_file = tmp_path / "settings.json"
    main.main(["generate", "--charset", "abcd", "--strategy", "sattolo", "--outfile", str(out_file)])
    assert "Wrote" in capsys.readouterr().out

    data = json.loads(out_file.read_text(encoding="utf-8"))
    assert data["charset"] == "abcd"
    cfg = main.load_config(out_file)
    assert cfg.mapping == data["mapping"]

    main.main(["encode", "--config", str(out_file), "dab"])
    encoded = capsys.readouterr().out.strip()
    main.main(["decode", "--config", str(out_file), encoded])
    assert capsys.readouterr().out.strip() == "dab"


def test_encode_decode_from_flags(capsys: pytest.CaptureFixture[str]) -> None:
    main.main(["encode", "--charset", "abc", "--mapping", "0:2,1:0,2:1", "abc"])
    assert capsys.readouterr().out.strip() == "cab"
    main.main(["decode", "--charset", "abc", "--mapping", "0:2,1:0,2:1", "cab"])
    assert capsys.readouterr().out.strip() == "abc"


def test_encode_reads_lines(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    lines = iter(["abc", "cc", ""])
    monkeypatch.setattr("builtins.input", lambda *_: next(lines))
    main.main(["encode", "--charset", "abc", "--mapping", "0:2,1:0,2:1"])
    assert capsys.readouterr().out.split() == ["cab", "bb"]


def test_encode_needs_a_mapping() -> None:
    with pytest.raises(SystemExit):
        main.main(["encode", "--charset", "abc", "abc"])


def test_validate(capsys: pytest.CaptureFixture[str]) -> None:
    main.main(["validate", "--charset", "abc", "--mapping", "0:2,1:0,2:1"])
    assert capsys.readouterr().out.strip() == "OK"

    with pytest.raises(SystemExit) as exc:
        main.main(["validate", "--charset", "abc", "--mapping", "0:1,1:2,2:1"])
    assert "duplicate references" in str(exc.value.code)


def test_bad_charset_exits_with_message() -> None:
    with pytest.raises(SystemExit) as exc:
        main.main(["generate", "--charset", "aab"])
    assert "duplicate values" in str(exc.value.code)


def test_load_config_requires_charset(tmp_path: Path) -> None:
    cfg_file = tmp_path / "cfg.json"
    cfg_file.write_text(json.dumps({"mapping": "0:1,1:0"}), encoding="utf-8")
    with pytest.raises(ValueError, match="Missing keys in config: charset"):
        main.load_config(cfg_file)

    with pytest.raises(SystemExit) as exc:
        main.main(["encode", "--config", str(cfg_file), "ab"])
    assert "Failed to load configuration" in str(exc.value.code)


@pytest.mark.parametrize(
    "payload, key",
    [
        ({"charset": 5}, "charset"),
        ({"charset": "abc", "mapping": ["0:1"]}, "mapping"),
        ({"charset": "abc", "seed": "7"}, "seed"),
    ],
)
def test_load_config_checks_value_types(tmp_path: Path, payload: dict, key: str) -> None:
    cfg_file = tmp_path / "cfg.json"
    cfg_file.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(ValueError, match=f"'{key}' must be"):
        main.load_config(cfg_file)


def test_non_string_charset_exits_with_message(tmp_path: Path) -> None:
    cfg_file = tmp_path / "cfg.json"
    cfg_file.write_text(json.dumps({"charset": 5, "mapping": "0:1,1:0"}), encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        main.main(["encode", "--config", str(cfg_file), "ab"])
    assert "Failed to load configuration" in str(exc.value.code)


def test_save_and_load_config(tmp_path: Path) -> None:
    path = tmp_path / "c.json"
    main.save_config(main.Config(charset="xyz", mapping="0:1,1:2,2:0", seed=4), path)
    cfg = main.load_config(path)
    assert cfg == main.Config(charset="xyz", mapping="0:1,1:2,2:0", seed=4)
    assert main.build_encoder(cfg).encode("xyz") == "yzx"
