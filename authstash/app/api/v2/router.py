# authstash/app/api/v2/router.py
from fastapi import APIRouter
from authstash.app.api.v2.endpoints import fake, login

api_router = APIRouter()
api_router.include_router(login.router, prefix="/login", tags=["login"])
api_router.include_router(fake.router, prefix="/fake", tags=["fake"])
