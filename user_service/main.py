import os
import logging
from typing import List

import httpx
from fastapi import FastAPI, Depends, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from shared.responses import APIResponse, register_exception_handlers
from shared.store import DocumentCollection
from shared.trace import install_trace_middleware
from user_service.clients import HttpHotelService, HttpRatingQuery
from user_service.config import CORS_ORIGINS, HOTEL_SERVICE_URL, HTTP_TIMEOUT_SECONDS, RATING_SERVICE_URL
from user_service.database import database, metadata, engine
from user_service.models import users
from user_service.schemas import User, UserCreate, UserWithRatings
from user_service.service import UserService

# ------------------------
# Logging
# ------------------------
logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
logger = logging.getLogger("user-service")

app = FastAPI(title="User Service")

# ------------------------
# CORS
# ------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
install_trace_middleware(app, logger)
register_exception_handlers(app, logger)


# ------------------------
# Startup & Shutdown
# ------------------------
@app.on_event("startup")
async def startup():
    await database.connect()
    metadata.create_all(engine)
    app.state.http_client = httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS)
    logger.info(f"✅ User service ready (ratings={RATING_SERVICE_URL}, hotels={HOTEL_SERVICE_URL}, timeout={HTTP_TIMEOUT_SECONDS}s)")


@app.on_event("shutdown")
async def shutdown():
    await app.state.http_client.aclose()
    await database.disconnect()
    logger.info("User service database disconnected.")


# ------------------------
# Dependencies
# ------------------------
def get_user_service(request: Request) -> UserService:
    """Build the aggregation service for one request, carrying its trace id downstream."""
    client = request.app.state.http_client
    trace_id = getattr(request.state, "trace_id", None)
    return UserService(
        users=DocumentCollection(database, users, "user_id"),
        rating_query=HttpRatingQuery(client, RATING_SERVICE_URL, trace_id=trace_id),
        hotel_service=HttpHotelService(client, HOTEL_SERVICE_URL, trace_id=trace_id),
    )


# ------------------------
# Health, Readiness & Metrics
# ------------------------
@app.get("/health")
async def health():
    return APIResponse(success=True, message="User service is alive")


@app.get("/ready")
async def readiness():
    try:
        await database.fetch_one("SELECT 1")
        return APIResponse(success=True, message="User service is ready")
    except Exception as e:
        logger.error(f"Readiness probe failed: {e}")
        return APIResponse(success=False, message=f"Not ready: {str(e)}", status_code=503)


@app.get("/metrics")
def metrics():
    """Prometheus metrics endpoint."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


# ------------------------
# User Endpoints
# ------------------------
@app.post("/user", response_model=User, status_code=201)
async def create_user(user_data: UserCreate, request: Request, service: UserService = Depends(get_user_service)):
    logger.info(f"[TRACE {request.state.trace_id}] create_user for {user_data.email}")
    return await service.save_user(user_data)


@app.get("/user", response_model=List[User])
async def list_users(service: UserService = Depends(get_user_service)):
    return await service.get_all_user()


@app.get("/user/{user_id}", response_model=UserWithRatings)
async def get_user(user_id: str, request: Request, service: UserService = Depends(get_user_service)):
    logger.info(f"[TRACE {request.state.trace_id}] get_user({user_id})")
    return await service.get_user(user_id)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8081")))
