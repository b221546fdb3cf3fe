"""crudkit -- a uniform CRUD REST API and the scaffolder that extends it."""

__version__ = "0.1.0"
