from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from groupsplit.core.config import settings
from groupsplit.core.errors import GroupsplitError, groupsplit_error_handler, unhandled_error_handler
from groupsplit.core.log_config import configure_logging
from groupsplit.db.mongo import connect_to_mongo, close_mongo_connection
from groupsplit.api.v1.api import api_router

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_to_mongo()
    yield
    await close_mongo_connection()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.DESCRIPTION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(GroupsplitError, groupsplit_error_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

@app.get("/")
async def root():
    return {"message": "Welcome to Groupsplit API"}

app.include_router(api_router, prefix=settings.API_V1_STR)
