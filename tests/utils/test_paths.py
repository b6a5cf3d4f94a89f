"""
Tests for project path resolution and YAML helpers.
"""

# Standard library imports
import sys
from pathlib import Path

# Third-party imports
import pytest

# Local imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from tradelens.paths import get_config_dir, get_exports_dir, get_logs_dir, get_project_root
from tradelens.utils import ensure_dir, load_yaml, save_yaml


@pytest.fixture
def fresh_root_cache():
    get_project_root.cache_clear()
    yield
    get_project_root.cache_clear()


class TestProjectRoot:
    """Test get_project_root() and the derived directories."""

    @pytest.mark.unit
    def test_finds_repository_root(self, fresh_root_cache):
        root = get_project_root()
        assert (root / 'pyproject.toml').exists()
        assert root == project_root.resolve()

    @pytest.mark.unit
    def test_environment_override(self, fresh_root_cache, tmp_path, monkeypatch):
        monkeypatch.setenv('PROJECT_ROOT', str(tmp_path))
        assert get_project_root() == tmp_path.resolve()
        assert get_exports_dir() == tmp_path.resolve() / 'exports'

    @pytest.mark.unit
    def test_derived_directories(self, fresh_root_cache):
        root = get_project_root()
        assert get_config_dir() == root / 'config'
        assert get_logs_dir() == root / 'logs'
        assert (get_config_dir() / 'settings.yaml').exists()


class TestYamlHelpers:
    """Test load_yaml(), save_yaml() and ensure_dir()."""

    @pytest.mark.unit
    def test_round_trip_keeps_key_order(self, tmp_path):
        path = tmp_path / 'nested' / 'mapping.yaml'
        save_yaml({'mapping': {'instrument': 'Ticker', 'action': 'Side'}}, path)

        assert list(load_yaml(path)['mapping']) == ['instrument', 'action']

    @pytest.mark.unit
    def test_empty_file(self, tmp_path):
        path = tmp_path / 'empty.yaml'
        path.write_text("")
        assert load_yaml(path) == {}

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_yaml(tmp_path / 'absent.yaml')

    @pytest.mark.unit
    def test_ensure_dir(self, tmp_path):
        target = tmp_path / 'a' / 'b'
        assert ensure_dir(target) == target
        assert target.is_dir()
