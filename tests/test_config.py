import json
import logging

import pytest

from sigep.config import config_section
from sigep.config import DEFAULT_TIMEOUT
from sigep.config import PRODUCTION_URL
from sigep.config import read_config
from sigep.config import SigepConfig


class TestSigepConfig:
    def test_defaults(self):
        config = SigepConfig()
        assert config.url == PRODUCTION_URL
        assert config.timeout == DEFAULT_TIMEOUT == 12
        assert config.login == ""

    def test_from_dict_prefixes_and_aliases(self):
        config = SigepConfig.from_dict(
            {
                "sigep_url": "https://sigep.example/AtendeCliente",
                "SIGEP_USER": "sigep",
                "pass": "n5f9t8",
                "post_card": "0067599079",
                "timeout": "30",
            }
        )
        assert config.url == "https://sigep.example/AtendeCliente"
        assert config.login == "sigep"
        assert config.password == "n5f9t8"
        assert config.post_card == "0067599079"
        assert config.timeout == 30

    def test_from_dict_unknown_keys(self, caplog):
        with caplog.at_level(logging.WARNING, logger="sigep"):
            config = SigepConfig.from_dict(
                {"inherits": "default", "sigep_colour": "blue", "login": "x"}
            )
        assert config.login == "x"
        assert "colour" in caplog.text
        assert "inherits" not in caplog.text


class TestConfigFile:
    def test_config_section_inherits(self):
        cfg = {
            "default": {"sigep_url": "https://a.example", "sigep_login": "a"},
            "homolog": {"inherits": "default", "sigep_url": "https://b.example"},
            "nested": {"inherits": "homolog", "sigep_login": "c"},
        }
        assert config_section(cfg, "homolog") == {
            "inherits": "default",
            "sigep_url": "https://b.example",
            "sigep_login": "a",
        }
        nested = config_section(cfg, "nested")
        assert nested["sigep_url"] == "https://b.example"
        assert nested["sigep_login"] == "c"
        assert config_section(cfg, "missing") == {}

    def test_read_json(self, tmp_path):
        fn = tmp_path / "sigep.json"
        data = {"default": {"sigep_login": "sigep"}}
        fn.write_text(json.dumps(data))
        assert read_config(str(fn)) == data

    def test_read_yaml(self, tmp_path):
        pytest.importorskip("yaml")
        fn = tmp_path / "sigep.yaml"
        fn.write_text("default:\n  sigep_login: sigep\n  sigep_contract: '9992157880'\n")
        assert read_config(str(fn)) == {
            "default": {"sigep_login": "sigep", "sigep_contract": "9992157880"}
        }

    def test_missing_file(self, tmp_path):
        assert read_config(str(tmp_path / "nope.json")) == {}

    def test_default_locations(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        cfgdir = tmp_path / ".config" / "sigep"
        cfgdir.mkdir(parents=True)
        (cfgdir / "sigep.json").write_text('{"default": {"sigep_login": "home"}}')
        assert read_config(None) == {"default": {"sigep_login": "home"}}
