"""Convert a translation spreadsheet into per-locale i18next documents."""

__version__ = "0.1.0"
