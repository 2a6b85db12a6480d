"""Core modules for flashsession."""
