"""
Integration tests for the voice controlled air conditioner.

The application is run end to end from configuration files, with typed
phrases read from an in-memory stream and responses recorded in memory.
"""
