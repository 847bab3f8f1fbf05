"""
Job Board UI - Flask + HTMX web client for a job board REST API.

Public visitors browse jobs and apply; recruiters log in to review
applications and manage postings.
"""

from .version import __version__
