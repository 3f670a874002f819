"""Time clock system package.

This package is organized by feature modules (attendance, reconciliation,
employees, networks, ...) with a thin Flask controller layer on top of
service/repository layers backed by a tabular record store.
"""
