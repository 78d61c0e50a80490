"""SQLModel table models: import here so metadata is populated."""

from fii_details.models.fii_detail import FiiDetail  # noqa: F401
