"""Cookie jar, cookie sessions, and HTTP connection, DNS, redirect and proxy settings."""

__version__ = "0.1.0"