"""Protocols shared by the service and the client controller."""
