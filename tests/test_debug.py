from __future__ import annotations

import logging

import pytest

from charset_encoder import CharsetEncoder, debug as encoder_debug
from debug import Debug


def test_components_start_disabled() -> None:
    dbg = Debug()
    assert not any(dbg.status().values())
    assert not dbg.active("mapping")


def test_toggles() -> None:
    dbg = Debug()
    dbg.enable("mapping", "translate")
    assert dbg.status()["mapping"] and dbg.status()["translate"]
    dbg.toggle("mapping")
    assert not dbg.status()["mapping"]
    dbg.toggle_global(False)
    assert not dbg.active("translate")


def test_unknown_component() -> None:
    with pytest.raises(ValueError, match="No such component"):
        Debug().enable("network")


def test_status_is_a_copy() -> None:
    dbg = Debug()
    dbg.status()["charset"] = True
    assert dbg.status()["charset"] is False


def test_translate_logs_when_enabled(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="CHARSET")
    encoder = CharsetEncoder("abc", "0:2,1:0,2:1")

    encoder.encode("abc")
    assert "[TRANSLATE]" not in caplog.text

    encoder_debug.enable("translate")
    try:
        encoder.encode("abc")
    finally:
        encoder_debug.disable("translate")
    assert "[TRANSLATE] encode 'abc' -> 'cab'" in caplog.text
