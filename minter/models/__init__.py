"""ORM Models. Imported here so Base.metadata is complete before create_all / Alembic."""

from minter.models.balance_snapshot import BalanceSnapshot  # noqa: F401
