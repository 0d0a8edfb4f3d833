"""
URL configuration for HireWork project.
"""
import logging

from django.contrib import admin
from django.urls import path
from django.utils import timezone
from ninja import NinjaAPI
from ninja.errors import AuthenticationError, HttpError, ValidationError as NinjaValidationError

from apps.core.exceptions import ServiceError

logger = logging.getLogger(__name__)

api = NinjaAPI(
    title="HireWork API",
    version="1.0.0",
    description="Worker hiring marketplace API",
    docs_url="/docs",
)

from apps.identity.api import router as identity_router, users_router
from apps.ledger.api import router as ledger_router
from apps.catalog.api import router as catalog_router
from apps.hiring.api import router as hiring_router
from apps.feed.api import router as feed_router

api.add_router("/auth", identity_router)
api.add_router("/auth", ledger_router)
api.add_router("/users", users_router)
api.add_router("/workers", catalog_router)
api.add_router("/hires", hiring_router)
api.add_router("/posts", feed_router)


# =============================================================================
# Error Responses
# =============================================================================
# Every error body has the shape {"error": message}.

def error_response(request, message: str, status: int):
    return api.create_response(request, {"error": message}, status=status)


@api.exception_handler(ServiceError)
def service_error(request, exc: ServiceError):
    return error_response(request, exc.message, exc.status_code)


@api.exception_handler(NinjaValidationError)
def request_validation_error(request, exc: NinjaValidationError):
    message = "Invalid request"
    if exc.errors:
        first = exc.errors[0]
        field = first.get("loc", [])[-1] if first.get("loc") else None
        message = f"{field}: {first.get('msg')}" if field else first.get("msg", message)
    return error_response(request, message, 400)


@api.exception_handler(AuthenticationError)
def authentication_error(request, exc: AuthenticationError):
    return error_response(request, "Unauthorized", 401)


@api.exception_handler(HttpError)
def http_error(request, exc: HttpError):
    return error_response(request, str(exc.message), exc.status_code)


@api.exception_handler(Exception)
def unexpected_error(request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.path}")
    return error_response(request, "Internal server error", 500)


# =============================================================================
# Health
# =============================================================================

@api.get("/health", tags=["Health"])
def health(request):
    return {"status": "ok", "timestamp": timezone.now().isoformat()}


urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', api.urls),
]
