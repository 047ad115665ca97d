"""Equipment and task-template directory management utilities."""

import json
from pathlib import Path
from typing import List, Optional

from ..core.constants import DIRECTORY_FILE_NAME
from ..models.directory import Directory, Equipment, TaskTemplate


class DirectoryManager:
    """File-backed equipment and template directory for a project.

    ``TaskService`` only calls ``lookup`` and ``lookup_template``; the rest
    is used by the CLI to maintain the file.
    """

    def __init__(self, data_dir: Path):
        """Initialize directory manager with the project data directory."""
        self.data_dir = data_dir
        self.directory_file = data_dir / DIRECTORY_FILE_NAME

    def load_directory(self) -> Directory:
        """Load the directory from disk."""
        if not self.directory_file.exists():
            return Directory()

        try:
            with open(self.directory_file, 'r') as f:
                data = json.load(f)
                return Directory.model_validate(data)
        except (json.JSONDecodeError, ValueError) as e:
            raise ValueError(f"Invalid directory file: {e}")

    def save_directory(self, directory: Directory) -> None:
        """Save the directory to disk."""
        self.data_dir.mkdir(parents=True, exist_ok=True)

        with open(self.directory_file, 'w') as f:
            json.dump(directory.model_dump(), f, indent=2)

    def lookup(self, equipment_id: str) -> Optional[Equipment]:
        """Get a piece of equipment by ID."""
        return self.load_directory().equipment.get(equipment_id)

    def lookup_template(self, template_id: str) -> Optional[TaskTemplate]:
        """Get a task template by ID."""
        return self.load_directory().templates.get(template_id)

    def add_equipment(self, equipment_id: str, name: str, department_id: Optional[str] = None) -> Equipment:
        """Add or update a piece of equipment."""
        directory = self.load_directory()
        equipment = Equipment(id=equipment_id, name=name, department_id=department_id)
        directory.equipment[equipment_id] = equipment
        self.save_directory(directory)
        return equipment

    def remove_equipment(self, equipment_id: str) -> bool:
        """Remove a piece of equipment. Returns True if removed."""
        directory = self.load_directory()

        if equipment_id not in directory.equipment:
            return False

        del directory.equipment[equipment_id]
        self.save_directory(directory)
        return True

    def list_equipment(self) -> List[Equipment]:
        """List all equipment sorted by name."""
        return sorted(self.load_directory().equipment.values(), key=lambda e: e.name.lower())

    def add_template(self, template_id: str, name: str, description: str = "") -> TaskTemplate:
        """Add or update a task template."""
        directory = self.load_directory()
        template = TaskTemplate(id=template_id, name=name, description=description)
        directory.templates[template_id] = template
        self.save_directory(directory)
        return template

    def remove_template(self, template_id: str) -> bool:
        """Remove a task template. Returns True if removed."""
        directory = self.load_directory()

        if template_id not in directory.templates:
            return False

        del directory.templates[template_id]
        self.save_directory(directory)
        return True

    def list_templates(self) -> List[TaskTemplate]:
        """List all task templates sorted by name."""
        return sorted(self.load_directory().templates.values(), key=lambda t: t.name.lower())
