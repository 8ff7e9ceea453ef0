"""Registry of running instances and their messaging clients."""

import logging
from dataclasses import dataclass
from uuid import uuid4

from instance_api.clients.base import MessagingClient
from instance_api.errors import InstanceNotFoundError

logger = logging.getLogger(__name__)

# Global instance registry
_global_instances: dict[str, "Instance"] = {}


@dataclass
class Instance:
    """A named session bound to one messaging identity."""

    id: str
    name: str
    client: MessagingClient


class InstanceRegistry:
    """Looks up instances by id. Reads reflect the registry's current state."""

    def __init__(self, instances: dict[str, Instance] | None = None):
        # Use global registry unless a private one is given
        self._instances = _global_instances if instances is None else instances

    def register(
        self,
        name: str,
        client: MessagingClient,
        instance_id: str | None = None,
    ) -> Instance:
        """Register a session under a new or given instance id.

        Args:
            name: Human-readable instance name
            client: Messaging client owned by the instance
            instance_id: Optional explicit id, generated when omitted

        Returns:
            The registered Instance
        """
        instance = Instance(id=instance_id or str(uuid4()), name=name, client=client)
        self._instances[instance.id] = instance
        logger.info(f'Registered instance "{instance.id}" ({name})')
        return instance

    def remove(self, instance_id: str) -> None:
        """Remove an instance.

        Raises:
            InstanceNotFoundError: If no instance is registered under the id
        """
        if self._instances.pop(instance_id, None) is None:
            raise InstanceNotFoundError(instance_id)
        logger.info(f'Removed instance "{instance_id}"')

    def exists(self, instance_id: str) -> bool:
        return instance_id in self._instances

    def get(self, instance_id: str) -> Instance:
        """Get a registered instance by id.

        Raises:
            InstanceNotFoundError: If no instance is registered under the id
        """
        try:
            return self._instances[instance_id]
        except KeyError:
            raise InstanceNotFoundError(instance_id) from None

    def list_instances(self) -> list[Instance]:
        return list(self._instances.values())
