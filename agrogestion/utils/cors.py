from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agrogestion.core.config import settings


def setup_cors(app: FastAPI) -> None:
    origins = settings.cors_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
