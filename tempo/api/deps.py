"""
Dependency injection for API endpoints.
"""

from typing import Annotated

from fastapi import Depends

from tempo.core.config import Settings, get_settings

AppSettings = Annotated[Settings, Depends(get_settings)]
