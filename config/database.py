"""Database URL helpers"""


def get_database_url(
    driver: str,
    host: str,
    port: int,
    user: str,
    password: str,
    name: str,
) -> str:
    """
    Construct database URL from components.

    Example:
        >>> get_database_url("postgresql+asyncpg", "db", 5432, "inv", "secret", "inventario")
        'postgresql+asyncpg://inv:secret@db:5432/inventario'
    """
    return f"{driver}://{user}:{password}@{host}:{port}/{name}"


def normalize_async_url(url: str) -> str:
    """
    Make a URL usable by the async engine.

    Hosting providers often hand out ``postgres://`` or driverless
    ``postgresql://`` URLs; plain ``sqlite://`` gets the aiosqlite driver.

        >>> normalize_async_url("postgres://u:p@h/db")
        'postgresql+asyncpg://u:p@h/db'
        >>> normalize_async_url("sqlite:///inventario.db")
        'sqlite+aiosqlite:///inventario.db'
    """
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


def to_sync_url(url: str) -> str:
    """Counterpart of :func:`normalize_async_url` for sync tooling (alembic, seed scripts)."""
    if url.startswith("postgresql+asyncpg"):
        return url.replace("postgresql+asyncpg", "postgresql+psycopg2", 1)
    if url.startswith("sqlite+aiosqlite"):
        return url.replace("sqlite+aiosqlite", "sqlite", 1)
    return url
