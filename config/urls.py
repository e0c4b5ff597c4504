"""
URL configuration for the Flock project.
"""
from django.contrib import admin
from django.urls import path
from django.conf import settings
from django.conf.urls.static import static
from ninja import NinjaAPI

from apps.core.errors import register_exception_handlers

api = NinjaAPI(
    title="Flock API",
    version="1.0.0",
    description="Social network API: accounts, posts, follows and notifications",
    docs_url="/docs",
)
register_exception_handlers(api)

from apps.identity.api import auth_router, users_router
from apps.posts.api import router as posts_router
from apps.notifications.api import router as notifications_router

api.add_router("/auth/", auth_router)
api.add_router("/users/", users_router)
api.add_router("/posts/", posts_router)
# No trailing slash: the client calls /api/notifications
api.add_router("/notifications", notifications_router)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', api.urls),
]

# Serve uploaded images in development
if settings.DEBUG and not getattr(settings, 'USE_S3_STORAGE', False):
    urlpatterns += static(
        getattr(settings, 'MEDIA_URL', '/media/'),
        document_root=getattr(settings, 'MEDIA_ROOT', settings.BASE_DIR / 'media')
    )
