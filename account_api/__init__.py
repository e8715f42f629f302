"""Account service: user registration, JWT login with lazy password migration, user CRUD."""
