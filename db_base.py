from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    No engine or session imports here, so Alembic and the seed scripts can
    import the metadata without pulling in async drivers.
    """
    pass
