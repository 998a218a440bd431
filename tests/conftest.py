"""
conftest.py - Shared pytest fixtures for routine planner tests

This module provides standardized test fixtures for use across all tests.
It includes fixtures for:
- Path setup and Python path configuration
- Configuration management
- Sample task data
- GUI testing support
"""
import os
import sys
import json
import pathlib
import random
import pytest

# Widgets and QImage rendering run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add the src/python directory to the Python path
sys.path.insert(0, str(pathlib.Path(__file__).parent.parent / "src" / "python"))

# Imports from planner modules (now that path is configured)
from config_manager import ConfigManager
from task_model import Task, TaskIdGenerator, TaskList
from viewport import ViewportTransform


# Path and Environment Fixtures
# ----------------------------

@pytest.fixture
def planner_paths():
    """Provide standard paths to key project directories."""
    root_dir = pathlib.Path(__file__).parent.parent
    return {
        'root': root_dir,
        'src': root_dir / 'src',
        'python': root_dir / 'src' / 'python',
        'config': root_dir / 'config',
        'tests': root_dir / 'tests'
    }


# Configuration Fixtures
# ---------------------

@pytest.fixture
def test_config_data(tmp_path):
    """Create minimal test configuration data."""
    return {
        "colors": {
            "palette": {
                "background": "#121212",
                "canvas": "#202020",
                "textColor": "#FFFFFF"
            },
            "fonts": {
                "primary": "Arial"
            }
        },
        "strings": {
            "app": {
                "name": "Planner Test"
            },
            "menus": {
                "file": "File"
            }
        },
        "ui": {
            "timeline": {
                "trackWidth": 960,
                "handleWidth": 8
            },
            "zoom": {
                "wheelStep": 0.2
            }
        },
        "storage": {
            "autosaveEnabled": False,
            "autosavePath": str(tmp_path / "autosave" / "session.json")
        },
        "logging": {
            "level": "DEBUG",
            "file": str(tmp_path / "logs" / "test.log"),
            "console": False
        }
    }


@pytest.fixture
def test_config_file(tmp_path, test_config_data):
    """Write the test configuration to a temporary file."""
    config_file = tmp_path / "test_config.json"
    with open(config_file, 'w') as f:
        json.dump(test_config_data, f)
    return config_file


@pytest.fixture
def test_config_manager(test_config_file):
    """Create a ConfigManager instance with test configuration."""
    return ConfigManager(cfg_path=test_config_file, exit_on_error=False)


# Task Fixtures
# -------------

@pytest.fixture
def fixed_ids():
    """An id generator driven by a fixed clock, so ids are 1000, 1001, ..."""
    return TaskIdGenerator(clock=lambda: 1000)


@pytest.fixture
def sample_tasks():
    """Three tasks covering a typical morning."""
    return [
        Task(id=1, name="Sleep", start=0.0, duration=7.0, color="#6366f1"),
        Task(id=2, name="Breakfast", start=7.5, duration=0.5, color="#f59e0b"),
        Task(id=3, name="Work", start=9.0, duration=8.0, color="#10b981"),
    ]


@pytest.fixture
def task_list(sample_tasks, fixed_ids):
    """A TaskList seeded with the sample tasks."""
    return TaskList(sample_tasks, id_generator=fixed_ids, rng=random.Random(7))


@pytest.fixture
def viewport():
    return ViewportTransform()


# GUI Testing Fixtures
# ------------------

@pytest.fixture(scope="session")
def qt_app():
    """Create a QApplication instance that persists for the test session."""
    from PyQt6.QtWidgets import QApplication

    # Check if an instance already exists
    app = QApplication.instance()
    if app is None:
        # Create a new application with dummy arguments
        app = QApplication([''])

    yield app
