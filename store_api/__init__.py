"""Store management API: product catalog with JWT authentication and role-based access."""

__version__ = "0.1.0"
