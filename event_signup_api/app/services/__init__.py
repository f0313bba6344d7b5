"""Business logic and SQL for accounts, events and registrations."""
