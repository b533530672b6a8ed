#!/usr/bin/env python3
"""Development server runner for calendar-intel."""

import uvicorn
from calintel.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "calintel.api:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        log_level=settings.log_level.lower()
    )
