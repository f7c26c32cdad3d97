from fastapi import FastAPI

from authaudit.api.routes import router

app = FastAPI(
    title="Supergraph Authorization Audit",
    version="0.1.0",
)

app.include_router(router)
