"""
API Dependencies.
Common dependencies shared by the endpoints.
"""

from typing import Annotated
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_desk.core.database import get_db


# Type alias for cleaner route signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
