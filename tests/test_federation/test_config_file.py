"""Tests for the persisted ``micro-frontend.config.json`` record."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from microfed.config import RemoteReference
from microfed.federation.config_file import (
    CONFIG_FILE_NAME,
    MicroFrontendConfigFile,
    to_config_file,
)
from microfed.federation.descriptor import synthesize

pytestmark = pytest.mark.unit


class TestToConfigFile:
    def test_host_document(self, host_config, two_remotes):
        record = to_config_file(synthesize(host_config, two_remotes), host_config, two_remotes)
        data = record.to_json_dict()

        assert data["name"] == "shellApp"
        assert data["type"] == "host"
        assert data["port"] == 3000
        assert data["framework"] == "react"
        assert data["remotes"] == [
            {"name": "products", "url": "http://localhost:3001/remoteEntry.js", "entry": "remoteEntry.js"},
            {"name": "cart_app", "url": "http://localhost:3002/remoteEntry.js", "entry": "remoteEntry.js"},
        ]
        assert "exposes" not in data

    def test_host_without_remotes_keeps_empty_list(self, host_config):
        data = to_config_file(synthesize(host_config), host_config).to_json_dict()
        assert data["remotes"] == []

    def test_remote_document(self, remote_config):
        data = to_config_file(synthesize(remote_config), remote_config).to_json_dict()
        assert data["type"] == "remote"
        assert data["exposes"] == {"./App": "./src/App"}
        assert "remotes" not in data

    def test_camel_case_sections(self, remote_config):
        data = to_config_file(synthesize(remote_config), remote_config).to_json_dict()
        assert data["build"] == {"outputPath": "dist", "publicPath": "auto"}
        assert data["devServer"] == {"hot": True, "historyApiFallback": True, "cors": True}
        assert data["shared"]["react"] == {
            "singleton": True,
            "requiredVersion": "^18.0.0",
            "strictVersion": False,
            "eager": False,
        }

    def test_custom_entry_is_kept(self, host_config):
        remotes = [RemoteReference(name="products", url="http://cdn/p/", entry="products.js")]
        data = to_config_file(synthesize(host_config, remotes), host_config, remotes).to_json_dict()
        assert data["remotes"][0]["entry"] == "products.js"

    def test_key_order(self, remote_config):
        data = to_config_file(synthesize(remote_config), remote_config).to_json_dict()
        assert list(data) == [
            "name", "type", "port", "framework", "exposes", "shared", "build", "devServer",
        ]


class TestSaveLoad:
    def test_save_and_load(self, tmp_path: Path, host_config, two_remotes):
        record = to_config_file(synthesize(host_config, two_remotes), host_config, two_remotes)
        path = record.save(tmp_path / "nested" / CONFIG_FILE_NAME)

        raw = json.loads(path.read_text(encoding="utf-8"))
        assert raw["devServer"]["historyApiFallback"] is True

        loaded = MicroFrontendConfigFile.load(path)
        assert loaded == record
        assert loaded.remotes[1].name == "cart_app"
