# main.py
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import pyme_auth.domain.entities  # noqa: F401  registra todos os modelos ORM
from pyme_auth.application.controllers.autentication_controller import router as auth_router
from pyme_auth.application.controllers.user_controller import router as user_router
from pyme_auth.application.controllers.business_controller import router as business_router
from pyme_auth.application.controllers.audit_controller import router as audit_router

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="PYME Auth API", version="0.1.0")

origins = [
    o.strip()
    for o in os.environ.get("CORS_ORIGINS", "http://localhost:5173").split(",")
    if o.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(user_router)
app.include_router(business_router)
app.include_router(audit_router)

@app.get("/health")
def health():
    return {"status": "ok"}
