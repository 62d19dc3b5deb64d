"""CLA signature gate for pull requests and merge queues."""

__version__ = "1.0.0"
