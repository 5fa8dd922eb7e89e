"""A terminal to-do list manager keeping its tasks in a SQL database."""

__version__ = "0.1.0"