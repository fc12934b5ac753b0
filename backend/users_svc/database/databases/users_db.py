"""
Users database configuration.
Stores user identity records and the domain event log.
"""


class Collections:
    """Collection names in the users database."""
    USERS = "User"
    EVENTS = "Events"
