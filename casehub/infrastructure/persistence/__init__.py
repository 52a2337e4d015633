"""SQL persistence: engine, ORM models and the SQL record store."""
