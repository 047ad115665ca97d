import pytest
from click.testing import CliRunner
from datetime import date, datetime

from maintenance_tracker.core.constants import DATA_DIR_NAME
from maintenance_tracker.core.status_engine import StatusEngine
from maintenance_tracker.core.task_storage import TaskStorageManager
from maintenance_tracker.models.config import TrackerConfig
from maintenance_tracker.models.task import TaskRecord, TaskStatus
from maintenance_tracker.services.task_service import TaskService
from maintenance_tracker.utils.config_manager import ConfigManager
from maintenance_tracker.utils.directory_manager import DirectoryManager


FIXED_NOW = datetime(2024, 6, 3, 10, 30)


@pytest.fixture
def cli_runner():
    """Provides a Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def data_dir(tmp_path):
    """Data directory for a temporary project."""
    return tmp_path / DATA_DIR_NAME


@pytest.fixture
def storage(data_dir):
    """A TaskStorageManager on a fresh directory."""
    return TaskStorageManager(data_dir)


@pytest.fixture
def directory(data_dir):
    """A directory with two pieces of equipment and one template."""
    manager = DirectoryManager(data_dir)
    manager.add_equipment("pump-1", "Cooling Pump", "facilities")
    manager.add_equipment("press-2", "Hydraulic Press", "manufacturing")
    manager.add_template("tpl-grease", "Grease bearings", "Grease all bearings with EP2")
    return manager


@pytest.fixture
def engine():
    """A StatusEngine whose clock is pinned to FIXED_NOW."""
    return StatusEngine(clock=lambda: FIXED_NOW)


@pytest.fixture
def service(storage, directory, engine):
    """A TaskService wired to temporary storage."""
    return TaskService(
        storage=storage,
        equipment_directory=directory,
        template_directory=directory,
        engine=engine,
        config=TrackerConfig(),
    )


@pytest.fixture
def make_task():
    """Factory for TaskRecord instances with sensible defaults."""
    def _make(**overrides):
        values = {
            "id": "task-1",
            "equipment_id": "pump-1",
            "scheduled_date": date(2024, 6, 3),
            "status": TaskStatus.SCHEDULED,
            "title": "Inspect seals",
        }
        values.update(overrides)
        return TaskRecord(**values)
    return _make


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """An initialized tracker project as the working directory."""
    project = tmp_path / "plant"
    project.mkdir()
    monkeypatch.chdir(project)

    data = project / DATA_DIR_NAME
    TaskStorageManager(data)
    ConfigManager(data).save_config(TrackerConfig())
    manager = DirectoryManager(data)
    manager.add_equipment("pump-1", "Cooling Pump", "facilities")
    manager.add_template("tpl-grease", "Grease bearings", "Grease all bearings with EP2")
    return project
