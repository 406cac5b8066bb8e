"""Projects module — Project and WorksOn models, schemas and services."""

from ems.projects.models import Project, WorksOn

__all__ = ["Project", "WorksOn"]
