# Third-party imports
from sqlalchemy.ext.asyncio import create_async_engine

# Local application imports
from recognition.settings import settings

# Asynchronous Engine
async_engine = create_async_engine(
    settings.SQLALCHEMY_ASYNC_DATABASE_URI,
    echo=settings.SQL_ECHO,
    future=True,
)
