"""User domain module.

This domain manages user accounts and their login sessions.
The account email doubles as the session owner key (sessions.user_id).
"""
