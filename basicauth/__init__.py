"""BasicAuth: account registration, login, password recovery and user listing."""

__version__ = "1.0.0"
