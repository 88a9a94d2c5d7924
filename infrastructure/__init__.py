"""Infrastructure layer — process-level plumbing for the chord tool.

Modules:
    logging_config  Root logger setup (stderr, one handler) for the CLI and API.
"""
