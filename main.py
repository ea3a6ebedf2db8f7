"""
Application entry point
"""

import os
import uvicorn
from contract_explainer.core.config import settings
from contract_explainer.main import app

if __name__ == "__main__":
    port = int(os.getenv("PORT", settings.PORT))
    uvicorn.run(
        app,
        host=settings.HOST,
        port=port,
        reload=settings.DEBUG
    )
