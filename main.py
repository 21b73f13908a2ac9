# main.py

from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

import analytics
import categories
import processing
from config import get_settings
from database import create_tables, engine, get_db
from errors import ErrorKind, InsufficientRole, MissingRole, ServiceError
from logger import logger, setup_logger
from schemas import (
    AnalyticCreate,
    AnalyticResponse,
    AnalyticUpdate,
    AnalyticWithWords,
    CategoriesWithPosts,
    CategorySchema,
    ErrorResponse,
    Role,
)

# --- Error mapping ---

STATUS_BY_KIND = {
    ErrorKind.CATEGORY_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.CATEGORY_IN_USE: status.HTTP_409_CONFLICT,
    ErrorKind.CATEGORY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.POST_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.POST_ID_ALREADY_EXISTS: status.HTTP_400_BAD_REQUEST,
    ErrorKind.ANALYTIC_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.ANALYTIC_DEPENDENCY_NOT_FOUND: status.HTTP_409_CONFLICT,
    ErrorKind.EMPTY_UPDATE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.MISSING_ROLE: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INSUFFICIENT_ROLE: status.HTTP_403_FORBIDDEN,
    ErrorKind.UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

INTERNAL_ERROR_MESSAGE = "internal server error"

# --- Lifespan Management (for DB setup/teardown) ---

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logger()
    logger.info("Application startup: creating database tables...")
    await create_tables()
    yield
    logger.info("Application shutdown.")
    await engine.dispose()

# --- FastAPI App ---

app = FastAPI(lifespan=lifespan, title="Categories & Analytics API", version="1.0.0")


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    status_code = STATUS_BY_KIND[exc.kind]
    if exc.kind is ErrorKind.UNEXPECTED:
        logger.opt(exception=exc).error(f"{request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=status_code, content={"message": INTERNAL_ERROR_MESSAGE})
    return JSONResponse(status_code=status_code, content={"message": exc.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=STATUS_BY_KIND[ErrorKind.UNEXPECTED],
        content={"message": INTERNAL_ERROR_MESSAGE},
    )

# --- Role dependencies ---

def get_role(request: Request) -> Optional[Role]:
    """Role claim resolved upstream by the auth gateway, if any."""
    return Role.parse(request.headers.get(get_settings().role_header))


def require_admin(role: Optional[Role] = Depends(get_role)) -> Role:
    if role is None:
        raise MissingRole()
    if role is not Role.ADMIN:
        raise InsufficientRole()
    return role

# --- Public endpoints ---

public = APIRouter()


@public.get(
    "/categories/public-posts",
    response_model=CategoriesWithPosts,
    responses={404: {"model": ErrorResponse}},
    tags=["categories"],
)
async def get_categories_with_public_posts(session: AsyncSession = Depends(get_db)):
    """Categories with their public posts."""
    return await processing.get_categories_with_public_posts(session)


@public.get(
    "/analytic/post/{post_id}",
    response_model=AnalyticWithWords,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    tags=["analytic"],
)
async def get_analytic_with_words(
    post_id: int,
    role: Optional[Role] = Depends(get_role),
    session: AsyncSession = Depends(get_db),
):
    """Analytic of a post with its word breakdown, shaped by the caller's role."""
    return await processing.get_analytic_with_words(session, post_id, role)

# --- Admin endpoints ---

admin = APIRouter(
    prefix="/admin",
    dependencies=[Depends(require_admin)],
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)


@admin.get("/categories", response_model=List[CategorySchema], tags=["categories"])
async def get_all_categories(session: AsyncSession = Depends(get_db)):
    return await categories.get_all_categories(session)


@admin.post(
    "/categories",
    response_model=CategorySchema,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
    tags=["categories"],
)
async def add_category(category: CategorySchema, session: AsyncSession = Depends(get_db)):
    return await categories.add_category(session, category.title)


@admin.get("/categories/posts", response_model=CategoriesWithPosts, tags=["categories"])
async def get_categories_with_posts(session: AsyncSession = Depends(get_db)):
    """Categories with all their posts, private ones included."""
    return await processing.get_categories_with_posts(session)


@admin.put(
    "/categories/{category}",
    response_model=CategorySchema,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    tags=["categories"],
)
async def update_category(
    category: str,
    title: str = Query(..., min_length=1, description="New category title"),
    session: AsyncSession = Depends(get_db),
):
    return await categories.update_category(session, category, title)


@admin.delete(
    "/categories/{category}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    tags=["categories"],
)
async def delete_category(category: str, session: AsyncSession = Depends(get_db)):
    await categories.delete_category(session, category)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@admin.post(
    "/analytic",
    response_model=AnalyticResponse,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    tags=["analytic"],
)
async def add_analytic(analytic: AnalyticCreate, session: AsyncSession = Depends(get_db)):
    return await analytics.add_analytic(session, analytic)


@admin.put(
    "/analytic/{analytic_id}",
    response_model=AnalyticResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    tags=["analytic"],
)
async def update_analytic(
    analytic_id: int,
    update: AnalyticUpdate,
    session: AsyncSession = Depends(get_db),
):
    return await analytics.update_analytic(session, analytic_id, update)


@admin.delete(
    "/analytic/{analytic_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
    tags=["analytic"],
)
async def delete_analytic(analytic_id: int, session: AsyncSession = Depends(get_db)):
    await analytics.delete_analytic(session, analytic_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


app.include_router(public)
app.include_router(admin)

# --- Root Endpoint ---

@app.get("/")
async def root():
    return {"message": "Welcome to the Categories & Analytics API. Go to /docs for documentation."}

# --- Run with Uvicorn (for local testing) ---
# Use: uvicorn main:app --reload
