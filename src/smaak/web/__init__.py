"""Smaak - Web API."""
