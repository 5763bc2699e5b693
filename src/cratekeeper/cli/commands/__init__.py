# ABOUTME: Subcommand modules for the Cratekeeper CLI.
