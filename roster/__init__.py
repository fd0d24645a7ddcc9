"""Event roster backend: users, events and their participants on a blob store."""
