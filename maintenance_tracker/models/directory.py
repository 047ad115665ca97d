"""Models for the equipment and task-template directory."""

from typing import Dict, Optional

from pydantic import BaseModel, Field


class Equipment(BaseModel):
    """A piece of equipment that maintenance tasks refer to."""

    id: str
    name: str
    department_id: Optional[str] = None


class TaskTemplate(BaseModel):
    """Reusable task definition whose name and description seed new tasks."""

    id: str
    name: str
    description: str = ""


class Directory(BaseModel):
    """Registry of known equipment and task templates."""

    equipment: Dict[str, Equipment] = Field(default_factory=dict)
    templates: Dict[str, TaskTemplate] = Field(default_factory=dict)
