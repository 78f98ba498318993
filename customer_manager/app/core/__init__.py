"""Configuration, logging, database access and domain exceptions."""
