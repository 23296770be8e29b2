"""Infrastructure adapters: database, HTTP clients, files and scheduling."""
