"""Base service class for domain services."""


class Service:
    """Base class for domain services.

    Services hold the tree engine's behaviour; models stay plain data.
    """

    pass
