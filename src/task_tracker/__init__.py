"""Personal task tracker: interactive console session over a durable task list."""

__version__ = "0.1.0"
