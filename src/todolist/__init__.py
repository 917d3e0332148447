"""Task store, pagination and audit logging for a server-rendered to-do list."""
