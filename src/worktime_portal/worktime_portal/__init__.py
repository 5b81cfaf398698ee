"""Worktime Portal package.

Feature modules (auth, transactions, orders, attendance, ...) each expose a thin
Flask controller on top of service/repository layers; the client package holds
the auth gate used by front-end shells.
"""
