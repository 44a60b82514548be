"""CLI commands for portalclient.

Importing a command module registers its commands with the main app.
"""
