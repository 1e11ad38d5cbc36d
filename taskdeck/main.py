import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from taskdeck.core.config import settings
from taskdeck.core.database import engine, Base
# les models doivent être importés avant create_all
from taskdeck.models import user, category, task, subtask  # noqa: F401
from taskdeck.routers import health, auth, categories, tasks, user as user_router, views

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Init DB
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Taskdeck API",
    version="0.1.0"
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # entrée invalide (ex: priorité "MEDIUM") -> 400
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())}
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )


# Routes
app.include_router(health.router, prefix="/health")
app.include_router(auth.router)
app.include_router(categories.router)
app.include_router(tasks.router)
app.include_router(user_router.router)
app.include_router(views.router)
