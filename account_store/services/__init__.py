"""Services Layer — account operations orchestrating store and hasher."""
