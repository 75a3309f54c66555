import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from config import DATABASE_URL, DB_ECHO, DB_SYNC, HOST, LOG_LEVEL, PORT
from database import Database
from models import UserCreate, UserRead
from user_repository import UserNotFoundError, UserRepository

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# Value written by PUT /user, whatever the request carries.
NEW_NAME = "new name"

router = APIRouter()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    database: Database = app.state.database
    try:
        database.authenticate()
    except SQLAlchemyError:
        logger.exception("Could not connect to database")
    else:
        logger.info("Connected to database")
        if DB_SYNC:
            try:
                database.create_db_and_tables()
            except SQLAlchemyError:
                logger.exception("Could not create tables")
    logger.info("Running on port: %s", PORT)
    yield
    # Shutdown
    database.dispose()


def get_user_repository(request: Request) -> UserRepository:
    return UserRepository(request.app.state.database.engine)


def error_body(exc: Exception) -> Dict[str, Any]:
    body = {"name": type(exc).__name__, "message": str(exc)}
    statement = getattr(exc, "statement", None)
    if statement:
        body["sql"] = statement
    return body


async def error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("%s %s failed", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(exc),
    )


@router.get("/", response_class=PlainTextResponse)
def index():
    return "Hello"


@router.post("/user", response_model=UserRead)
def create_user(
    payload: UserCreate,
    users: UserRepository = Depends(get_user_repository),
):
    return users.create(payload.model_dump())


@router.get("/user", response_model=Optional[UserRead])
def read_user(
    email: str,
    users: UserRepository = Depends(get_user_repository),
):
    return users.find_one(email=email)


@router.put("/user", response_model=UserRead)
def update_user(
    email: str,
    users: UserRepository = Depends(get_user_repository),
):
    target = users.find_one(email=email)
    if target is None:
        raise UserNotFoundError(email)
    target.name = NEW_NAME
    return users.save(target)


def create_app(database: Optional[Database] = None) -> FastAPI:
    app = FastAPI(lifespan=lifespan)
    app.state.database = database or Database(DATABASE_URL, echo=DB_ECHO)
    app.add_exception_handler(SQLAlchemyError, error_handler)
    app.add_exception_handler(UserNotFoundError, error_handler)
    # Driver errors SQLAlchemy does not wrap still answer with JSON.
    app.add_exception_handler(Exception, error_handler)
    app.include_router(router)
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=HOST, port=PORT)
