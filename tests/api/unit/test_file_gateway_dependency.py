"""Unit tests for the FileGateway dependency providers in api/dependencies.py."""

from pathlib import Path

import pytest

import api.dependencies as deps
from api.dependencies import (
    get_file_gateway,
    initialize_file_gateway,
    shutdown_file_gateway,
)
from config import ServerConfig
from models.filesystem import FileGateway


@pytest.fixture(autouse=True)
def reset_global_gateway():
    """Reset the global gateway before and after each test."""
    original = deps._file_gateway
    deps._file_gateway = None

    yield

    deps._file_gateway = original


class TestGetFileGateway:
    def test_raises_when_not_initialized(self):
        with pytest.raises(RuntimeError) as exc_info:
            get_file_gateway()

        assert "initialize_file_gateway()" in str(exc_info.value)

    def test_returns_same_instance(self, tmp_path):
        initialize_file_gateway(ServerConfig(asset_root=tmp_path))

        assert get_file_gateway() is get_file_gateway()


class TestInitializeFileGateway:
    def test_uses_config_asset_root(self, tmp_path):
        gateway = initialize_file_gateway(ServerConfig(asset_root=tmp_path))

        assert isinstance(gateway, FileGateway)
        assert gateway.asset_root == Path(tmp_path)

    def test_reinitialize_replaces_instance(self, tmp_path):
        first = initialize_file_gateway(ServerConfig(asset_root=tmp_path))
        second = initialize_file_gateway(ServerConfig(asset_root=tmp_path / "other"))

        assert get_file_gateway() is second
        assert second is not first


class TestShutdownFileGateway:
    def test_clears_instance(self, tmp_path):
        initialize_file_gateway(ServerConfig(asset_root=tmp_path))

        shutdown_file_gateway()

        with pytest.raises(RuntimeError):
            get_file_gateway()

    def test_safe_when_not_initialized(self):
        shutdown_file_gateway()
        assert deps._file_gateway is None
