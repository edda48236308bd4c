import os
import uuid
import logging
from typing import List

from fastapi import FastAPI, Depends, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from dotenv import load_dotenv

from shared.exceptions import ResourceNotFoundException
from shared.responses import APIResponse, register_exception_handlers
from shared.store import DocumentCollection
from shared.trace import install_trace_middleware
from hotel_service.database import database, metadata, engine
from hotel_service.models import hotels
from hotel_service.schemas import Hotel, HotelCreate

load_dotenv()

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
logger = logging.getLogger("hotel-service")

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

app = FastAPI(title="Hotel Service")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
install_trace_middleware(app, logger)
register_exception_handlers(app, logger)


@app.on_event("startup")
async def startup():
    await database.connect()
    metadata.create_all(engine)
    logger.info("✅ Hotel service connected to database and ready.")


@app.on_event("shutdown")
async def shutdown():
    await database.disconnect()


def get_hotel_collection() -> DocumentCollection:
    return DocumentCollection(database, hotels, "hotel_id")


@app.get("/health")
async def health():
    return APIResponse(success=True, message="Hotel service is alive")


@app.get("/ready")
async def readiness():
    try:
        await database.fetch_one("SELECT 1")
        return APIResponse(success=True, message="Hotel service is ready")
    except Exception as e:
        logger.error(f"Readiness probe failed: {e}")
        return APIResponse(success=False, message=f"Not ready: {str(e)}", status_code=503)


@app.get("/metrics")
def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


# ------------------------
# Hotel Endpoints
# ------------------------
@app.post("/hotels", response_model=Hotel, status_code=201)
async def create_hotel(hotel: HotelCreate, request: Request, collection: DocumentCollection = Depends(get_hotel_collection)):
    hotel_id = str(uuid.uuid4())
    stored = await collection.save({**hotel.model_dump(), "hotel_id": hotel_id})
    logger.info(f"[TRACE {request.state.trace_id}] Hotel {hotel_id} created: {hotel.name}")
    return Hotel(**stored)


@app.get("/hotels", response_model=List[Hotel])
async def list_hotels(collection: DocumentCollection = Depends(get_hotel_collection)):
    return [Hotel(**doc) for doc in await collection.find_all()]


@app.get("/hotels/{hotel_id}", response_model=Hotel)
async def get_hotel(hotel_id: str, collection: DocumentCollection = Depends(get_hotel_collection)):
    doc = await collection.find_by_id(hotel_id)
    if doc is None:
        raise ResourceNotFoundException(f"Hotel with given id is not found on server: {hotel_id}")
    return Hotel(**doc)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8082")))
