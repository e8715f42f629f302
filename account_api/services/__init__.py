"""Business logic: login flow and user CRUD."""
