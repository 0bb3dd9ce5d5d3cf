import logging
from contextlib import AsyncExitStack

from bson.errors import InvalidId
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from jose import JWTError
from mongoengine import NotUniqueError, ValidationError as DocumentValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from sitecms.connections import media_lifespan, mongo_lifespan
from sitecms.api.auth import router as auth_router
from sitecms.api.users import router as users_router
from sitecms.api.website_settings import router as website_settings_router
from sitecms.api.home_settings import router as home_settings_router
from sitecms.api.contact_us_settings import router as contact_us_settings_router
from sitecms.api.about_us_settings import router as about_us_settings_router
from sitecms.api.business import router as business_router
from sitecms.api.project import router as project_router
from sitecms.api.testimonial import router as testimonial_router
from sitecms.api.gallery import router as gallery_router
from sitecms.api.upload import router as upload_router
from sitecms.utils.base.errors import AppError
from sitecms.utils.base.response import error_response, success_response
from sitecms.utils.config import settings


logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


async def combined_lifespan(app: FastAPI):
    async with AsyncExitStack() as stack:
        await stack.enter_async_context(mongo_lifespan(app))
        await stack.enter_async_context(media_lifespan(app))

        yield


app = FastAPI(title="Site CMS (Mongo)", version="1.0.0", lifespan=combined_lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.client_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(auth_router, prefix="/api/v1/auth", tags=["Auth"])
app.include_router(users_router, prefix="/api/v1/users", tags=["Users"])
app.include_router(website_settings_router, prefix="/api/v1/website", tags=["Website Settings"])
app.include_router(home_settings_router, prefix="/api/v1/website/home-settings", tags=["Home Settings"])
app.include_router(contact_us_settings_router, prefix="/api/v1/website/contact-us-settings", tags=["Contact Us Settings"])
app.include_router(about_us_settings_router, prefix="/api/v1/website/about-us-settings", tags=["About Us Settings"])
app.include_router(business_router, prefix="/api/v1/business", tags=["Business"])
app.include_router(project_router, prefix="/api/v1/project", tags=["Project"])
app.include_router(testimonial_router, prefix="/api/v1/testimonial", tags=["Testimonial"])
app.include_router(gallery_router, prefix="/api/v1/gallery", tags=["Gallery"])
app.include_router(upload_router, prefix="/api/v1/upload", tags=["Upload"])


@app.get("/health", tags=["System"])
def health():
    """PUBLIC: Liveness probe."""
    return success_response({"environment": settings.environment}, "Server is running")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc, AppError):
        return error_response(exc.status_code, exc.message, exc.errors)
    # Starlette raises a bare 404 for unmatched paths.
    if exc.status_code == 404 and exc.detail == "Not Found":
        return error_response(404, "Route not found")
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(part) for part in error["loc"] if part != "body"), "message": error["msg"]}
        for error in exc.errors()
    ]
    return error_response(400, "Validation failed", errors)


@app.exception_handler(NotUniqueError)
async def duplicate_key_handler(request: Request, exc: NotUniqueError):
    return error_response(400, "Duplicate field value entered")


@app.exception_handler(DocumentValidationError)
async def document_validation_handler(request: Request, exc: DocumentValidationError):
    details = exc.to_dict() if exc.errors else {}
    # Errors raised from Document.clean() are collected under "__all__".
    general = details.pop("__all__", None) or (None if details else exc.message)
    errors = [{"field": field, "message": str(error)} for field, error in details.items()]
    return error_response(400, str(general) if general else "Validation failed", errors)


@app.exception_handler(InvalidId)
async def invalid_id_handler(request: Request, exc: InvalidId):
    return error_response(400, "Resource not found. Invalid ID")


@app.exception_handler(JWTError)
async def token_error_handler(request: Request, exc: JWTError):
    return error_response(401, "Invalid token")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception path=%s", request.url.path)
    return error_response(500, str(exc) or "Server Error")
