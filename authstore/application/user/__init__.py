"""User and session stores consumed by the authentication layer."""
