"""crudkit: generic CRUD scaffolding for audited entities over REST."""

__version__ = "0.1.0"
