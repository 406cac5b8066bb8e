"""Client side of the Employee Management System: API access, views, auth and CLI."""
