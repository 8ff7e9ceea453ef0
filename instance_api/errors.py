"""Exception hierarchy shared across the service."""


class InstanceApiError(Exception):
    """Base exception for all instance API errors."""

    pass


class InstanceNotFoundError(InstanceApiError):
    """No live session is registered under the requested instance id."""

    def __init__(self, instance_id: str):
        super().__init__(f'Instance "{instance_id}" not found.')
        self.instance_id = instance_id


class ContentTransformError(InstanceApiError):
    """Validated request content could not be turned into a content object."""

    pass


class MessagingClientError(InstanceApiError):
    """The messaging client failed to carry out an operation."""

    pass
