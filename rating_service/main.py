import os
import logging
from typing import List

from fastapi import FastAPI, Depends, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from dotenv import load_dotenv

from shared.responses import APIResponse, register_exception_handlers
from shared.store import DocumentCollection
from shared.trace import install_trace_middleware
from rating_service.database import database, metadata, engine
from rating_service.models import ratings
from rating_service.schemas import Rating, RatingCreate, RatingUpdate
from rating_service.service import RatingService

load_dotenv()

# ------------------------
# Logging
# ------------------------
logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
logger = logging.getLogger("rating-service")

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

app = FastAPI(title="Rating Service")

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
    logger.info("✅ Rating service connected to database and ready.")


@app.on_event("shutdown")
async def shutdown():
    await database.disconnect()
    logger.info("Rating service database disconnected.")


# ------------------------
# Dependencies
# ------------------------
def get_rating_service() -> RatingService:
    return RatingService(DocumentCollection(database, ratings, "rating_id"))


# ------------------------
# Health, Readiness & Metrics
# ------------------------
@app.get("/health")
async def health():
    return APIResponse(success=True, message="Rating service is alive")


@app.get("/ready")
async def readiness():
    try:
        await database.fetch_one("SELECT 1")
        return APIResponse(success=True, message="Rating service is ready")
    except Exception as e:
        logger.error(f"Readiness probe failed: {e}")
        return APIResponse(success=False, message=f"Not ready: {str(e)}", status_code=503)


@app.get("/metrics")
def metrics():
    """Prometheus metrics endpoint."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


# ------------------------
# Rating Endpoints
# ------------------------
@app.post("/ratings", response_model=Rating, status_code=201)
async def create_rating(rating: RatingCreate, request: Request, service: RatingService = Depends(get_rating_service)):
    logger.info(f"[TRACE {request.state.trace_id}] create_rating for user {rating.user_id}")
    return await service.create(rating)


@app.get("/ratings", response_model=List[Rating])
async def list_ratings(service: RatingService = Depends(get_rating_service)):
    return await service.get_ratings()


@app.get("/ratings/user/{user_id}", response_model=List[Rating])
async def list_ratings_by_user(user_id: str, service: RatingService = Depends(get_rating_service)):
    return await service.get_rating_by_user_id(user_id)


@app.get("/ratings/hotel/{hotel_id}", response_model=List[Rating])
async def list_ratings_by_hotel(hotel_id: str, service: RatingService = Depends(get_rating_service)):
    return await service.get_rating_by_hotel_id(hotel_id)


@app.put("/ratings/{rating_id}", response_model=Rating)
async def update_rating(rating_id: str, body: RatingUpdate, request: Request, service: RatingService = Depends(get_rating_service)):
    logger.info(f"[TRACE {request.state.trace_id}] update_rating({rating_id})")
    return await service.update_rating(rating_id, body)


@app.delete("/ratings/{rating_id}", status_code=204)
async def delete_rating(rating_id: str, request: Request, service: RatingService = Depends(get_rating_service)):
    logger.info(f"[TRACE {request.state.trace_id}] delete_rating({rating_id})")
    await service.delete_rating(rating_id)
    return Response(status_code=204)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8083")))
