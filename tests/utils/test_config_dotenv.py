import importlib
import sys
import builtins
import types
import logging
import os
from pathlib import Path

import pytest


def _reload_config():
    sys.modules.pop("relcrawl.config", None)
    return importlib.import_module("relcrawl.config")


@pytest.fixture(autouse=True)
def _restore_config_module():
    yield
    sys.modules.pop("relcrawl.config", None)
    importlib.import_module("relcrawl.config")


def test_missing_dotenv_logs_warning(monkeypatch, caplog):
    orig_import = builtins.__import__

    def fake_import(name, globals=None, locals=None, fromlist=(), level=0):
        if name == "dotenv" or name.startswith("dotenv."):
            raise ImportError
        return orig_import(name, globals, locals, fromlist, level)

    monkeypatch.setattr(builtins, "__import__", fake_import)
    caplog.set_level(logging.WARNING)
    cfg = _reload_config()
    assert "python-dotenv not available" in caplog.text

    # environment fallback works
    monkeypatch.setenv("USER_AGENT", "X-Agent")
    assert cfg.get_str_env("USER_AGENT", "RelCrawl/0.1") == "X-Agent"


def test_dotenv_present_but_fails_to_load(monkeypatch, tmp_path):
    tmp_path.joinpath(".env").write_text("USER_AGENT=FromFile")
    monkeypatch.chdir(tmp_path)

    fake = types.SimpleNamespace(load_dotenv=lambda: False)
    monkeypatch.setitem(sys.modules, "dotenv", fake)
    with pytest.raises(RuntimeError):
        _reload_config()


def test_dotenv_loads_sets_variables(monkeypatch, tmp_path):
    tmp_path.joinpath(".env").write_text("RELCRAWL_OUTPUT_DIR=from-dotenv")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("RELCRAWL_OUTPUT_DIR", raising=False)

    def fake_load():
        # emulate dotenv behavior: read .env and set os.environ
        p = Path(".env")
        for line in p.read_text().splitlines():
            if "=" in line:
                k, v = line.split("=", 1)
                monkeypatch.setenv(k, v)
        return True

    fake = types.SimpleNamespace(load_dotenv=fake_load)
    monkeypatch.setitem(sys.modules, "dotenv", fake)
    cfg = _reload_config()
    assert cfg.output_dir() == "from-dotenv"


def test_int_and_float_helpers_fall_back_on_garbage(monkeypatch):
    cfg = _reload_config()
    monkeypatch.setenv("HTTP_TIMEOUT", "soon")
    monkeypatch.setenv("CRAWL_DELAY", "slow")
    monkeypatch.setenv("RELCRAWL_MAX_RETRIES", "many")
    assert cfg.get_int_env("HTTP_TIMEOUT", 10) == 10
    assert cfg.get_float_env("CRAWL_DELAY", 1.6) == 1.6
    assert cfg.get_optional_int_env("RELCRAWL_MAX_RETRIES") is None

    monkeypatch.setenv("RELCRAWL_MAX_RETRIES", "3")
    assert cfg.get_optional_int_env("RELCRAWL_MAX_RETRIES") == 3
    monkeypatch.setenv("API_COOKIE", "  ")
    assert cfg.get_optional_str_env("API_COOKIE") is None
