from sqlalchemy.exc import IntegrityError
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.errors import DuplicateEntryError


async def flush_unique(session: AsyncSession) -> None:
    """
    Flush pending writes, reporting unique-constraint violations as
    DuplicateEntryError. Covers the race where two requests pass the
    existence check before either one inserts.
    """
    try:
        await session.flush()
    except IntegrityError as exc:
        raise DuplicateEntryError(str(exc.orig)) from exc
