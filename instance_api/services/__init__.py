"""Core services for the instance API."""

from instance_api.services.instance_registry import Instance, InstanceRegistry
from instance_api.services.instance_service import InstanceService

__all__ = [
    "Instance",
    "InstanceRegistry",
    "InstanceService",
]
