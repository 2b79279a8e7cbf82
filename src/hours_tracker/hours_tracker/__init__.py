"""Hours Tracker package.

This package is organized by feature modules (entries, users, tracker, ...)
with a thin Flask controller layer and service/repository layers.
"""
